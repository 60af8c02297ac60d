import threading
import uuid
from datetime import date

import pytest
from django.db import connection

from apps.bookings.engine import (
    cancel_booking,
    combine_slot,
    list_available_slots,
    project_status,
    submit_booking,
)
from apps.bookings.exceptions import (
    BookingAlreadyFinishedError,
    BookingEngineError,
    BookingForbiddenError,
    BookingNotFoundError,
    IncompleteSelectionError,
    InvalidSlotError,
    InvalidTransitionError,
    PastSlotError,
    SlotConflictError,
    SlotTakenError,
)
from apps.bookings.models import FINISHED, Booking, BookingStatus, BookingStatusLog
from apps.bookings.store import BookingStore

from .conftest import BOOKING_DAY, FrozenClock

pytestmark = pytest.mark.django_db


class StaleStore(BookingStore):
    """Store whose availability read misses bookings made after the page loaded."""

    def list_confirmed_for_barbershop_and_day(self, barbershop_id, day):
        return []


# ── submit ────────────────────────────────────────────────────────────────────

def test_submit_creates_a_confirmed_booking(barbershop, service, customer, clock):
    booking = submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)

    booking.refresh_from_db()
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.date == combine_slot(BOOKING_DAY, '10:00')
    assert (booking.barbershop, booking.service, booking.customer) == (barbershop, service, customer)

    log = BookingStatusLog.objects.get(booking=booking)
    assert (log.from_status, log.to_status) == ('', BookingStatus.CONFIRMED)


def test_submit_for_a_taken_slot_fails(barbershop, service, customer, other_customer, clock):
    submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)

    with pytest.raises(SlotTakenError) as excinfo:
        submit_booking(barbershop, service, other_customer, BOOKING_DAY, '10:00', clock=clock)

    assert not isinstance(excinfo.value, SlotConflictError)
    assert Booking.objects.count() == 1


def test_submit_without_selection_fails_before_touching_the_store(barbershop, service, customer, clock):
    with pytest.raises(IncompleteSelectionError):
        submit_booking(barbershop, service, customer, None, '10:00', clock=clock)
    with pytest.raises(IncompleteSelectionError):
        submit_booking(barbershop, service, customer, BOOKING_DAY, '', clock=clock)

    assert not Booking.objects.exists()


@pytest.mark.parametrize('now_label', ['10:00', '10:30', '18:59'])
def test_submit_in_the_past_fails_even_when_free(barbershop, service, customer, now_label):
    clock = FrozenClock(combine_slot(BOOKING_DAY, now_label))

    with pytest.raises(PastSlotError):
        submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)

    assert not Booking.objects.exists()


def test_submit_off_grid_time_fails(barbershop, service, customer, clock):
    with pytest.raises(InvalidSlotError):
        submit_booking(barbershop, service, customer, BOOKING_DAY, '10:15', clock=clock)
    with pytest.raises(InvalidSlotError):
        submit_booking(barbershop, service, customer, BOOKING_DAY, '19:00', clock=clock)


def test_submit_with_service_from_another_barbershop_fails(barbershop, other_barbershop, customer, clock):
    foreign_service = other_barbershop.services.create(name='Barba', price='40.00')

    with pytest.raises(InvalidSlotError):
        submit_booking(barbershop, foreign_service, customer, BOOKING_DAY, '10:00', clock=clock)


def test_race_loser_gets_conflict_from_the_store(barbershop, service, customer, other_customer, clock):
    winner = submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)

    with pytest.raises(SlotConflictError):
        submit_booking(barbershop, service, other_customer, BOOKING_DAY, '10:00',
                       store=StaleStore(), clock=clock)

    assert list(Booking.objects.values_list('id', flat=True)) == [winner.id]
    assert BookingStatusLog.objects.count() == 1


class RendezvousStore(BookingStore):
    """
    Holds every submitter after its availability read until all of them have
    read, then lets the inserts through one at a time. SQLite allows a single
    writer, so the inserts are serialized here; the read side still races.
    """

    def __init__(self, parties):
        self.barrier = threading.Barrier(parties, timeout=10)
        self.write_lock = threading.Lock()

    def list_confirmed_for_barbershop_and_day(self, barbershop_id, day):
        existing = super().list_confirmed_for_barbershop_and_day(barbershop_id, day)
        self.barrier.wait()
        return existing

    def insert_confirmed(self, *args, **kwargs):
        with self.write_lock:
            return super().insert_confirmed(*args, **kwargs)


@pytest.mark.django_db(transaction=True)
def test_concurrent_submissions_leave_one_confirmed_booking(barbershop, service, customer, other_customer, clock):
    store = RendezvousStore(parties=2)
    outcomes = []

    def submit(user):
        try:
            outcomes.append(submit_booking(barbershop, service, user, BOOKING_DAY, '10:00',
                                           store=store, clock=clock))
        except SlotTakenError as exc:
            outcomes.append(exc)
        finally:
            connection.close()

    threads = [threading.Thread(target=submit, args=(user,)) for user in (customer, other_customer)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    winners = [o for o in outcomes if isinstance(o, Booking)]
    losers = [o for o in outcomes if isinstance(o, SlotConflictError)]
    assert (len(winners), len(losers)) == (1, 1)
    assert list(Booking.objects.values_list('id', flat=True)) == [winners[0].id]
    assert BookingStatusLog.objects.count() == 1


def test_store_rejects_duplicate_confirmed_insert(barbershop, service, customer, other_customer):
    store = BookingStore()
    instant = combine_slot(BOOKING_DAY, '15:30')
    store.insert_confirmed(barbershop.pk, service.pk, customer.pk, instant)

    with pytest.raises(SlotConflictError):
        store.insert_confirmed(barbershop.pk, service.pk, other_customer.pk, instant)

    assert Booking.objects.filter(date=instant).count() == 1


# ── cancel ────────────────────────────────────────────────────────────────────

def test_cancel_moves_booking_to_cancelled(barbershop, service, customer, clock):
    booking = submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)

    cancelled = cancel_booking(booking.id, customer, clock=clock)

    assert cancelled.status == BookingStatus.CANCELLED
    assert Booking.objects.get(pk=booking.pk).status == BookingStatus.CANCELLED
    assert set(booking.status_logs.values_list('to_status', flat=True)) == {
        BookingStatus.CONFIRMED, BookingStatus.CANCELLED,
    }


def test_cancel_is_idempotent(barbershop, service, customer, clock):
    booking = submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)
    cancel_booking(booking.id, customer, clock=clock)

    again = cancel_booking(booking.id, customer, clock=clock)

    assert again.status == BookingStatus.CANCELLED
    assert (again.date, again.service_id, again.customer_id) == (booking.date, service.pk, customer.pk)
    assert booking.status_logs.count() == 2


def test_cancelled_slot_can_be_booked_again(barbershop, service, customer, other_customer, clock):
    booking = submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)
    cancel_booking(booking.id, customer, clock=clock)

    assert '10:00' in list_available_slots(barbershop, BOOKING_DAY)
    rebooked = submit_booking(barbershop, service, other_customer, BOOKING_DAY, '10:00', clock=clock)

    assert rebooked.status == BookingStatus.CONFIRMED
    assert Booking.objects.filter(date=booking.date).count() == 2


def test_cancel_unknown_booking_is_not_found(customer, clock):
    with pytest.raises(BookingNotFoundError):
        cancel_booking(uuid.uuid4(), customer, clock=clock)


@pytest.mark.parametrize('booking_id', ['nope', '12345', ''])
def test_cancel_with_malformed_id_is_not_found(customer, clock, booking_id):
    with pytest.raises(BookingNotFoundError):
        cancel_booking(booking_id, customer, clock=clock)


@pytest.mark.parametrize('booking_id', ['nope', ''])
def test_store_set_status_with_malformed_id_is_not_found(booking_id):
    with pytest.raises(BookingNotFoundError):
        BookingStore().set_status(booking_id, BookingStatus.CANCELLED)


def test_cancel_someone_elses_booking_is_forbidden(barbershop, service, customer, other_customer, clock):
    booking = submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)

    with pytest.raises(BookingForbiddenError):
        cancel_booking(booking.id, other_customer, clock=clock)

    assert Booking.objects.get(pk=booking.pk).status == BookingStatus.CONFIRMED


def test_cancel_finished_booking_fails(barbershop, service, customer, clock):
    booking = submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)
    next_day = FrozenClock(combine_slot(date(2024, 5, 11), '00:00'))

    with pytest.raises(BookingAlreadyFinishedError):
        cancel_booking(booking.id, customer, clock=next_day)

    assert Booking.objects.get(pk=booking.pk).status == BookingStatus.CONFIRMED


def test_cancelled_booking_cannot_be_confirmed_again(barbershop, service, customer, clock):
    booking = submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)
    booking.cancel()

    with pytest.raises(InvalidTransitionError):
        booking.transition_to(BookingStatus.CONFIRMED, changed_by='admin')


def test_bookings_are_never_deleted(barbershop, service, customer, clock):
    booking = submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)

    with pytest.raises(BookingEngineError):
        booking.delete()

    assert Booking.objects.filter(pk=booking.pk).exists()


# ── derived status ────────────────────────────────────────────────────────────

def test_project_status():
    instant = combine_slot(BOOKING_DAY, '10:00')
    before = combine_slot(BOOKING_DAY, '09:59')
    after = combine_slot(BOOKING_DAY, '10:01')

    assert project_status(BookingStatus.CONFIRMED, instant, before) == BookingStatus.CONFIRMED
    assert project_status(BookingStatus.CONFIRMED, instant, instant) == BookingStatus.CONFIRMED
    assert project_status(BookingStatus.CONFIRMED, instant, after) == FINISHED
    assert project_status(BookingStatus.CANCELLED, instant, after) == BookingStatus.CANCELLED


def test_display_status_uses_the_current_time(barbershop, service, customer, clock):
    booking = submit_booking(barbershop, service, customer, BOOKING_DAY, '10:00', clock=clock)

    # 2024-05-10 is long gone by the wall clock.
    assert booking.display_status == FINISHED
    assert Booking.objects.get(pk=booking.pk).status == BookingStatus.CONFIRMED
