"""
Booking store, the persistence side of the booking engine.

The database is the final arbiter of slot uniqueness: inserts rely on the
partial unique constraint `uq_confirmed_booking_slot`, status changes lock
the row they touch.
"""
from datetime import date as date_type, datetime, time as time_type, timedelta

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from .exceptions import BookingNotFoundError, SlotConflictError
from .models import Booking, BookingStatus, BookingStatusLog


def _day_bounds(day: date_type):
    """Aware [start, end) of a calendar day in the current timezone."""
    start = timezone.make_aware(datetime.combine(day, time_type.min))
    end = timezone.make_aware(datetime.combine(day + timedelta(days=1), time_type.min))
    return start, end


class BookingStore:

    def get(self, booking_id) -> Booking:
        try:
            return Booking.objects.get(pk=booking_id)
        except (Booking.DoesNotExist, ValidationError) as exc:
            raise BookingNotFoundError(f"Booking {booking_id} does not exist.") from exc

    def list_confirmed_for_barbershop_and_day(self, barbershop_id, day: date_type) -> list:
        start, end = _day_bounds(day)
        return list(
            Booking.objects
            .filter(
                barbershop_id=barbershop_id,
                status=BookingStatus.CONFIRMED,
                date__gte=start,
                date__lt=end,
            )
            .order_by('date')
        )

    def insert_confirmed(self, barbershop_id, service_id, customer_id, instant: datetime,
                         changed_by: str = 'customer') -> Booking:
        """
        Insert a CONFIRMED booking and its creation log row atomically.

        Raises SlotConflictError when another CONFIRMED booking already holds
        (barbershop, instant); nothing is written in that case.
        """
        try:
            with transaction.atomic():
                booking = Booking.objects.create(
                    barbershop_id=barbershop_id,
                    service_id=service_id,
                    customer_id=customer_id,
                    date=instant,
                    status=BookingStatus.CONFIRMED,
                )
                BookingStatusLog.objects.create(
                    booking=booking,
                    from_status='',
                    to_status=BookingStatus.CONFIRMED,
                    changed_by=changed_by,
                    reason='Booking created',
                )
        except IntegrityError as exc:
            raise SlotConflictError(
                "This slot was just booked by another customer. Please choose a different time."
            ) from exc
        return booking

    @transaction.atomic
    def set_status(self, booking_id, new_status, changed_by: str = 'customer', reason: str = '') -> Booking:
        """Move a booking to new_status. Setting the status it already has is a no-op."""
        try:
            booking = Booking.objects.select_for_update().get(pk=booking_id)
        except (Booking.DoesNotExist, ValidationError) as exc:
            raise BookingNotFoundError(f"Booking {booking_id} does not exist.") from exc

        if booking.status != new_status:
            booking.transition_to(new_status, changed_by, reason)
        return booking
