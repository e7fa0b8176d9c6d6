"""Search for runs of consecutive free slots within a day."""

from collections.abc import Sequence

from .timegrid import minutes_to_time, time_to_minutes


def find_consecutive_run(
    free_slots: Sequence[int], slots_needed: int, slot_minutes: int = 30
) -> int | None:
    """Find the first run of slots_needed back-to-back free slots.

    Slots that sit next to each other in the list are not necessarily
    adjacent in time once earlier placements have removed entries, so each
    step must be exactly slot_minutes.

    Args:
        free_slots: Ascending free slot starts for one day, in minutes
        slots_needed: Length of the run
        slot_minutes: Slot length in minutes

    Returns:
        Index into free_slots where the run starts, or None if the day has no
        such run
    """
    if slots_needed <= 0:
        raise ValueError(f"slots_needed must be positive, got {slots_needed}")
    if len(free_slots) < slots_needed:
        return None

    for start_idx in range(len(free_slots) - slots_needed + 1):
        for offset in range(slots_needed - 1):
            i = start_idx + offset
            if free_slots[i + 1] - free_slots[i] != slot_minutes:
                break
        else:
            return start_idx

    return None


def find_consecutive_slots(
    free_slots: Sequence[str], slots_needed: int, slot_minutes: int = 30
) -> list[str]:
    """Return the first run of slots_needed consecutive "HH:MM" slots, or [].

        find_consecutive_slots(['06:00', '06:30', '08:00', '08:30', '09:00'], 3)
        -> ['08:00', '08:30', '09:00']
    """
    minutes = [time_to_minutes(slot) for slot in free_slots]
    start_idx = find_consecutive_run(minutes, slots_needed, slot_minutes)
    if start_idx is None:
        return []
    return [minutes_to_time(m) for m in minutes[start_idx : start_idx + slots_needed]]
