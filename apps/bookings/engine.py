"""
Booking engine: pure business logic, no HTTP/request awareness.

Public API:
  generate_day_time_list(day, hours)
  filter_available(candidate_slots, existing_bookings)
  combine_slot(day, time_label)
  validate_submission(day, time_label, now, existing_bookings)
  project_status(status, instant, now)
  list_available_slots(barbershop, day, hours=None, store=None)
  submit_booking(barbershop, service, customer, day, time_label, store=None, clock=None)
  cancel_booking(booking_id, customer, store=None, clock=None)

The engine raises the exceptions in exceptions.py and never logs; callers
decide how failures are presented. Persistence goes through BookingStore and
the current time through a clock, both injectable.
"""
import re
from datetime import datetime, timedelta, date as date_type, time as time_type

from django.utils import timezone

from apps.barbershops.hours import HoursConfig
from apps.core.clock import SystemClock
from .exceptions import (
    BookingAlreadyFinishedError,
    BookingForbiddenError,
    IncompleteSelectionError,
    InvalidSlotError,
    PastSlotError,
    SlotTakenError,
)
from .models import FINISHED, BookingStatus
from .store import BookingStore

TIME_LABEL_RE = re.compile(r'([01]\d|2[0-3]):[0-5]\d')


# ── Time helpers ──────────────────────────────────────────────────────────────

def _fmt_time(t: time_type) -> str:
    return f"{t.hour:02d}:{t.minute:02d}"


def _parse_time_label(time_label: str) -> time_type:
    """'HH:MM' → time. Raises InvalidSlotError for anything else."""
    if not isinstance(time_label, str) or not TIME_LABEL_RE.fullmatch(time_label):
        raise InvalidSlotError(f"'{time_label}' is not a valid HH:MM time.")
    hour, minute = time_label.split(':')
    return time_type(int(hour), int(minute))


def _confirmed(bookings):
    return [b for b in bookings if b.status == BookingStatus.CONFIRMED]


# ── Time Grid ─────────────────────────────────────────────────────────────────

def generate_day_time_list(day: date_type, hours: HoursConfig) -> list:
    """
    All bookable "HH:MM" labels for `day`: from opening time, every
    step_minutes, up to the last point strictly before closing time.

    `day` only anchors the iteration; bookings play no part here.
    """
    current = datetime.combine(day, hours.opening_time)
    end = datetime.combine(day, hours.closing_time)
    step = timedelta(minutes=hours.step_minutes)

    slots = []
    while current < end:
        slots.append(_fmt_time(current.time()))
        current += step
    return slots


# ── Availability ──────────────────────────────────────────────────────────────

def filter_available(candidate_slots, existing_bookings) -> list:
    """
    Drop candidates whose hour:minute matches a CONFIRMED booking instant.
    Comparison is exact; order is preserved.
    """
    taken = {
        _fmt_time(timezone.localtime(b.date).time())
        for b in _confirmed(existing_bookings)
    }
    return [slot for slot in candidate_slots if slot not in taken]


def list_available_slots(barbershop, day, hours: HoursConfig = None, store: BookingStore = None) -> list:
    """Free slot labels of `barbershop` on `day`. No day selected → []."""
    if day is None:
        return []
    store = store or BookingStore()
    hours = hours or barbershop.hours_config

    candidates = generate_day_time_list(day, hours)
    existing = store.list_confirmed_for_barbershop_and_day(barbershop.pk, day)
    return filter_available(candidates, existing)


# ── Validation ────────────────────────────────────────────────────────────────

def combine_slot(day: date_type, time_label: str) -> datetime:
    """Selected day with its hour and minute overwritten by the label; aware."""
    t = _parse_time_label(time_label)
    return timezone.make_aware(datetime.combine(day, t))


def validate_submission(day, time_label, now: datetime, existing_bookings) -> datetime:
    """
    Submission-time guard, checked in order:
      1. day and time both selected      → IncompleteSelectionError
      2. instant strictly after now       → PastSlotError
      3. no CONFIRMED booking at instant  → SlotTakenError

    Returns the validated instant.
    """
    if day is None or not time_label:
        raise IncompleteSelectionError("Select a date and a time.")

    instant = combine_slot(day, time_label)
    if instant <= now:
        raise PastSlotError("This time has already passed. Please choose a later slot.")

    if any(b.date == instant for b in _confirmed(existing_bookings)):
        raise SlotTakenError(
            "This slot is no longer available. Please refresh and choose a different time."
        )
    return instant


# ── Lifecycle ─────────────────────────────────────────────────────────────────

def project_status(status: str, instant: datetime, now: datetime) -> str:
    """Read-time view of a booking: CONFIRMED turns FINISHED once its instant passes."""
    if status == BookingStatus.CONFIRMED and instant < now:
        return FINISHED
    return str(status)


def submit_booking(barbershop, service, customer, day, time_label,
                   store: BookingStore = None, clock=None):
    """
    Validate and persist a CONFIRMED booking.

    Raises IncompleteSelectionError, InvalidSlotError, PastSlotError,
    SlotTakenError, or SlotConflictError when the database rejects a
    concurrent duplicate that slipped past validation.
    """
    store = store or BookingStore()
    clock = clock or SystemClock()

    existing = []
    if day is not None and time_label:
        existing = store.list_confirmed_for_barbershop_and_day(barbershop.pk, day)

    instant = validate_submission(day, time_label, clock.now(), existing)

    if service.barbershop_id != barbershop.pk:
        raise InvalidSlotError(f"{service.name} is not offered by {barbershop.name}.")
    if _fmt_time(timezone.localtime(instant).time()) not in generate_day_time_list(day, barbershop.hours_config):
        raise InvalidSlotError(f"{time_label} is outside {barbershop.name}'s booking hours.")

    return store.insert_confirmed(barbershop.pk, service.pk, customer.pk, instant)


def cancel_booking(booking_id, customer, store: BookingStore = None, clock=None):
    """
    Cancel a customer's own upcoming booking. Cancelling an already
    CANCELLED booking returns it unchanged, so retries are safe.

    Raises BookingNotFoundError, BookingForbiddenError or
    BookingAlreadyFinishedError.
    """
    store = store or BookingStore()
    clock = clock or SystemClock()

    booking = store.get(booking_id)
    if booking.customer_id != customer.pk:
        raise BookingForbiddenError("You can only cancel your own bookings.")
    if booking.status == BookingStatus.CANCELLED:
        return booking
    if project_status(booking.status, booking.date, clock.now()) == FINISHED:
        raise BookingAlreadyFinishedError("This booking has already finished and cannot be cancelled.")

    return store.set_status(booking.pk, BookingStatus.CANCELLED, changed_by='customer',
                            reason='Cancelled by customer')
