from datetime import date, datetime, time, timedelta

import pytest

from apps.barbershops.hours import HoursConfig
from apps.bookings.engine import generate_day_time_list

DAY = date(2024, 5, 10)


def test_default_day_has_twenty_half_hour_slots():
    slots = generate_day_time_list(DAY, HoursConfig(time(9, 0), time(19, 0), 30))

    assert len(slots) == 20
    assert slots[:3] == ['09:00', '09:30', '10:00']
    assert slots[-1] == '18:30'


@pytest.mark.parametrize('opening,closing,step', [
    (time(9, 0), time(19, 0), 30),
    (time(8, 0), time(12, 0), 15),
    (time(10, 0), time(21, 0), 45),
    (time(7, 30), time(8, 0), 10),
    (time(0, 0), time(23, 0), 60),
])
def test_grid_starts_at_opening_and_steps_until_closing(opening, closing, step):
    slots = generate_day_time_list(DAY, HoursConfig(opening, closing, step))
    points = [datetime.combine(DAY, time.fromisoformat(s)) for s in slots]

    assert slots[0] == opening.strftime('%H:%M')
    assert points[-1] < datetime.combine(DAY, closing)
    assert points[-1] + timedelta(minutes=step) >= datetime.combine(DAY, closing)
    assert all(b - a == timedelta(minutes=step) for a, b in zip(points, points[1:]))


def test_step_that_does_not_divide_interval_stops_before_closing():
    slots = generate_day_time_list(DAY, HoursConfig(time(9, 0), time(10, 0), 45))

    assert slots == ['09:00', '09:45']


def test_grid_is_independent_of_the_day():
    hours = HoursConfig(time(9, 0), time(11, 0), 30)

    assert generate_day_time_list(DAY, hours) == generate_day_time_list(date(2030, 1, 1), hours)
    assert generate_day_time_list(DAY, hours) == generate_day_time_list(DAY, hours)


def test_closed_config_yields_empty_grid():
    hours = HoursConfig(time(19, 0), time(9, 0), 30)

    assert not hours.is_open
    assert generate_day_time_list(DAY, hours) == []


@pytest.mark.parametrize('step', [0, -30])
def test_non_positive_step_is_rejected(step):
    with pytest.raises(ValueError):
        HoursConfig(time(9, 0), time(19, 0), step)
