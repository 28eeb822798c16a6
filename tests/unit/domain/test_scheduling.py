from datetime import date, datetime

import pytest

from marketplace.domain.scheduling import (
    candidate_slots,
    generate_available_slots,
    is_slot_free,
)
from marketplace.domain.value_objects.datetime_range import DatetimeRange

DAY = date(2030, 1, 15)


def _busy(start: str, minutes: int) -> DatetimeRange:
    return DatetimeRange.from_duration(datetime.fromisoformat(f"2030-01-15T{start}"), minutes)


def test_candidate_slots_cover_working_hours():
    slots = candidate_slots(DAY)

    assert len(slots) == 18
    assert slots[0] == datetime(2030, 1, 15, 9, 0)
    assert slots[-1] == datetime(2030, 1, 15, 17, 30)


def test_candidate_slots_custom_window():
    slots = candidate_slots(DAY, start_hour=8, end_hour=10, step_minutes=60)

    assert [slot.hour for slot in slots] == [8, 9]


def test_candidate_slots_reject_non_positive_step():
    with pytest.raises(ValueError):
        candidate_slots(DAY, step_minutes=0)


def test_empty_day_has_every_slot():
    slots = generate_available_slots(DAY, busy=[])

    assert slots[0] == "09:00"
    assert slots[-1] == "17:30"
    assert len(slots) == 18


def test_busy_interval_blocks_overlapping_starts():
    slots = generate_available_slots(DAY, busy=[_busy("10:00", 60)], duration_minutes=60)

    assert "09:30" not in slots
    assert "10:00" not in slots
    assert "10:30" not in slots
    assert "09:00" in slots
    assert "11:00" in slots


def test_longer_service_blocks_more_slots():
    slots = generate_available_slots(DAY, busy=[_busy("12:00", 30)], duration_minutes=120)

    assert "10:00" in slots
    assert "10:30" not in slots
    assert "12:00" not in slots
    assert "12:30" in slots


def test_unknown_duration_defaults_to_one_hour():
    slots = generate_available_slots(DAY, busy=[_busy("10:00", 60)], duration_minutes=None)

    assert "09:30" not in slots
    assert "09:00" in slots


def test_adjacent_intervals_do_not_overlap():
    assert is_slot_free(datetime(2030, 1, 15, 11, 0), 60, [_busy("10:00", 60)])
    assert is_slot_free(datetime(2030, 1, 15, 9, 0), 60, [_busy("10:00", 60)])
    assert not is_slot_free(datetime(2030, 1, 15, 10, 59), 1, [_busy("10:00", 60)])


def test_datetime_range_requires_positive_length():
    with pytest.raises(ValueError):
        DatetimeRange(start=datetime(2030, 1, 15, 10), end=datetime(2030, 1, 15, 10))
