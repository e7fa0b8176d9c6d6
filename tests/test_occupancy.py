"""Tests for marking fixed blocks on the grid."""

from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from tests.conftest import WEEK_START, make_block
from weekslot.exceptions import InvalidBlockError, ValidationError
from weekslot.models import FixedBlock
from weekslot.scheduler import (
    SchedulingConfig,
    blocks_for_week,
    create_week_slots,
    format_day_slots,
    get_occupied_slots,
    is_block_valid_for_date,
    mark_fixed_blocks,
    validate_block,
)


class TestGetOccupiedSlots:
    """Test the half-open slot range of a block."""

    def test_morning_block(self) -> None:
        """09:00-12:00 covers six slots and never 12:00."""
        assert get_occupied_slots("09:00", "12:00") == [
            "09:00",
            "09:30",
            "10:00",
            "10:30",
            "11:00",
            "11:30",
        ]

    def test_half_hour_end(self) -> None:
        """A block ending on the half hour excludes that slot."""
        assert get_occupied_slots("14:00", "15:30") == ["14:00", "14:30", "15:00"]


class TestMarkFixedBlocks:
    """Test slot removal."""

    def test_removes_exactly_the_covered_slots(self) -> None:
        """Only [start, end) disappears from the block's day."""
        grid = mark_fixed_blocks(create_week_slots(), [make_block(1, "09:00", "12:00")], WEEK_START)

        monday = format_day_slots(grid, 1)
        assert len(monday) == 28
        for slot in ("09:00", "09:30", "10:00", "10:30", "11:00", "11:30"):
            assert slot not in monday
        assert "08:30" in monday
        assert "12:00" in monday

    def test_other_days_untouched(self) -> None:
        """A Monday block leaves every other day fully free."""
        grid = mark_fixed_blocks(create_week_slots(), [make_block(1, "09:00", "17:00")], WEEK_START)

        for day in (0, 2, 3, 4, 5, 6):
            assert len(grid[day]) == 34

    def test_overlapping_blocks(self) -> None:
        """Overlapping blocks remove the union of their slots."""
        blocks = [make_block(2, "09:00", "11:00"), make_block(2, "10:00", "12:00")]
        grid = mark_fixed_blocks(create_week_slots(), blocks, WEEK_START)

        assert len(grid[2]) == 34 - 6

    def test_block_outside_grid_hours(self) -> None:
        """Parts of a block before 06:00 simply have nothing to remove."""
        grid = mark_fixed_blocks(create_week_slots(), [make_block(3, "05:00", "07:00")], WEEK_START)

        assert format_day_slots(grid, 3)[0] == "07:00"
        assert len(grid[3]) == 32

    def test_no_blocks_leaves_grid_free(self) -> None:
        """An empty routine is valid."""
        grid = mark_fixed_blocks(create_week_slots(), [], WEEK_START)

        assert sum(len(s) for s in grid.values()) == 238

    def test_returns_same_grid(self) -> None:
        """Marking mutates and returns the given grid."""
        grid = create_week_slots()
        assert mark_fixed_blocks(grid, [make_block(0, "06:00", "07:00")], WEEK_START) is grid


class TestValidityWindow:
    """Test date-bounded recurrence."""

    def test_valid_from_next_week_occupies_nothing(self) -> None:
        """A block starting a week after the anchor does not occupy this week."""
        block = make_block(1, "09:00", "17:00", valid_from=WEEK_START + timedelta(days=7))
        grid = mark_fixed_blocks(create_week_slots(), [block], WEEK_START)

        assert all(len(slots) == 34 for slots in grid.values())

    def test_valid_from_is_inclusive(self) -> None:
        """A block valid from Monday applies on that Monday."""
        block = make_block(1, "09:00", "10:00", valid_from=date(2026, 1, 19))
        grid = mark_fixed_blocks(create_week_slots(), [block], WEEK_START)

        assert len(grid[1]) == 32

    def test_valid_until_is_inclusive(self) -> None:
        """A block valid until Wednesday applies on that Wednesday but not after."""
        wednesday = make_block(3, "09:00", "10:00", valid_until=date(2026, 1, 21))
        thursday = make_block(4, "09:00", "10:00", valid_until=date(2026, 1, 21))
        grid = mark_fixed_blocks(create_week_slots(), [wednesday, thursday], WEEK_START)

        assert len(grid[3]) == 32
        assert len(grid[4]) == 34

    def test_expired_block_skipped(self) -> None:
        """A block that ended last week is ignored."""
        block = make_block(2, "09:00", "17:00", valid_until=WEEK_START - timedelta(days=1))
        grid = mark_fixed_blocks(create_week_slots(), [block], WEEK_START)

        assert len(grid[2]) == 34

    def test_is_block_valid_ignores_time_of_day(self) -> None:
        """Datetimes are compared by date only."""
        block = make_block(1, "09:00", "10:00", valid_from=date(2026, 1, 19))

        assert is_block_valid_for_date(block, datetime(2026, 1, 19, 0, 0))
        assert is_block_valid_for_date(block, datetime(2026, 1, 19, 23, 59))
        assert not is_block_valid_for_date(block, datetime(2026, 1, 18, 23, 59))

    def test_datetime_bounds_compared_by_date(self) -> None:
        """Bounds given as datetimes are cut to their date before comparing."""
        block = make_block(1, "09:00", "10:00", valid_from=datetime(2026, 1, 19, 9, 0))

        assert is_block_valid_for_date(block, date(2026, 1, 19))
        assert not is_block_valid_for_date(block, date(2026, 1, 18))

        grid = mark_fixed_blocks(create_week_slots(), [block], WEEK_START)
        assert len(grid[1]) == 32

    def test_datetime_valid_until_is_inclusive(self) -> None:
        """An end bound late in the day still covers that whole day only."""
        block = make_block(3, "09:00", "10:00", valid_until=datetime(2026, 1, 21, 0, 30))

        assert is_block_valid_for_date(block, datetime(2026, 1, 21, 22, 0))
        assert not is_block_valid_for_date(block, date(2026, 1, 22))

    def test_window_applies_to_non_recurring_block(self) -> None:
        """is_recurring does not switch off the validity window."""
        block = replace(
            make_block(1, "09:00", "10:00", valid_from=date(2026, 3, 1)), is_recurring=False
        )

        assert not is_block_valid_for_date(block, date(2026, 1, 19))

    def test_unbounded_block_always_valid(self) -> None:
        """No bounds means every date."""
        block = make_block(1, "09:00", "10:00")

        assert is_block_valid_for_date(block, date(1999, 1, 1))
        assert is_block_valid_for_date(block, date(2099, 1, 1))


class TestValidateBlock:
    """Test fail-fast validation of malformed blocks."""

    @pytest.mark.parametrize("day", [-1, 7, 10])
    def test_day_out_of_range(self, day: int) -> None:
        """Days outside 0-6 are rejected."""
        with pytest.raises(InvalidBlockError, match="day_of_week"):
            validate_block(make_block(day, "09:00", "10:00"))

    def test_end_not_after_start(self) -> None:
        """Empty and inverted ranges are rejected."""
        with pytest.raises(InvalidBlockError, match="not after"):
            validate_block(make_block(1, "10:00", "10:00"))
        with pytest.raises(InvalidBlockError, match="not after"):
            validate_block(make_block(1, "12:00", "09:00"))

    def test_off_grid_time(self) -> None:
        """Times must sit on the slot boundaries."""
        with pytest.raises(InvalidBlockError, match="30-minute grid"):
            validate_block(make_block(1, "09:15", "10:00"))

    def test_off_grid_time_with_finer_config(self) -> None:
        """A 15-minute grid accepts quarter hours."""
        config = SchedulingConfig(slot_minutes=15)
        assert validate_block(make_block(1, "09:15", "10:00"), config) == (555, 600)

    def test_unparseable_time(self) -> None:
        """Garbage times are reported as block errors."""
        block = FixedBlock(id="x", title="x", day_of_week=1, start_time="nine", end_time="10:00")
        with pytest.raises(InvalidBlockError):
            validate_block(block)

    def test_is_a_validation_error(self) -> None:
        """Block errors belong to the validation family."""
        assert issubclass(InvalidBlockError, ValidationError)

    def test_marker_validates_before_mutating(self) -> None:
        """One bad block leaves the grid untouched."""
        grid = create_week_slots()
        blocks = [make_block(0, "06:00", "08:00"), make_block(1, "10:00", "09:00")]

        with pytest.raises(InvalidBlockError):
            mark_fixed_blocks(grid, blocks, WEEK_START)
        assert len(grid[0]) == 34


class TestBlocksForWeek:
    """Test the per-day view of a week's commitments."""

    def test_groups_and_sorts_by_start(self) -> None:
        """Blocks are grouped by day and sorted by start time."""
        late = make_block(1, "18:00", "19:00", block_id="late")
        early = make_block(1, "08:00", "09:00", block_id="early")
        other = make_block(3, "10:00", "11:00", block_id="other")

        by_day = blocks_for_week([late, early, other], WEEK_START)

        assert [b.id for b in by_day[1]] == ["early", "late"]
        assert [b.id for b in by_day[3]] == ["other"]
        assert by_day[0] == []
        assert set(by_day) == set(range(7))

    def test_filters_by_validity(self) -> None:
        """Blocks outside their window for that week are left out."""
        future = make_block(2, "09:00", "10:00", valid_from=date(2026, 3, 1))

        assert blocks_for_week([future], date(2026, 1, 21))[2] == []
        assert blocks_for_week([future], date(2026, 3, 4))[2] == [future]

    def test_invalid_day_raises(self) -> None:
        """Blocks on a day outside 0-6 are rejected, not dropped."""
        with pytest.raises(InvalidBlockError, match="day_of_week"):
            blocks_for_week([make_block(9, "09:00", "10:00")], WEEK_START)

    def test_unparseable_time_raises(self) -> None:
        """Bad times raise InvalidBlockError like every other entry point."""
        with pytest.raises(InvalidBlockError):
            blocks_for_week([make_block(1, "nine", "10:00")], WEEK_START)

    def test_uses_configured_grid(self) -> None:
        """Alignment is checked against the configured slot length."""
        block = make_block(1, "09:15", "09:45")
        config = SchedulingConfig(slot_minutes=15)

        assert blocks_for_week([block], WEEK_START, config)[1] == [block]
        with pytest.raises(InvalidBlockError, match="grid"):
            blocks_for_week([block], WEEK_START)
