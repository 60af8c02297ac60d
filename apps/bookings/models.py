"""
Bookings app models:
  - Booking          : one customer, one service, one barbershop instant
  - BookingStatusLog : audit trail of every status transition
"""
from django.conf import settings
from django.db import models
from django.utils import timezone
from apps.core.models import UUIDModel, TimestampedModel
from apps.barbershops.models import Barbershop
from apps.services.models import Service
from .exceptions import BookingEngineError, InvalidTransitionError


# ── Booking State Machine ─────────────────────────────────────────────────────

class BookingStatus(models.TextChoices):
    CONFIRMED = 'CONFIRMED', 'Confirmed'
    CANCELLED = 'CANCELLED', 'Cancelled'


# Derived, never stored: a CONFIRMED booking whose instant has passed.
FINISHED = 'FINISHED'

ALLOWED_TRANSITIONS = {
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED},
    BookingStatus.CANCELLED: set(),
}


class Booking(UUIDModel, TimestampedModel):
    """
    Core booking record. Created CONFIRMED; the only mutation is the one-way
    move to CANCELLED, done through transition_to(). Rows are never deleted.
    """
    barbershop = models.ForeignKey(Barbershop, on_delete=models.PROTECT, related_name='bookings')
    service = models.ForeignKey(Service, on_delete=models.PROTECT, related_name='bookings')
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='bookings',
    )

    # Single combined date + time-of-day instant (timezone-aware)
    date = models.DateTimeField(db_index=True)

    status = models.CharField(
        max_length=20, choices=BookingStatus.choices,
        default=BookingStatus.CONFIRMED, db_index=True,
    )

    class Meta:
        verbose_name = 'Booking'
        verbose_name_plural = 'Bookings'
        ordering = ['-date']
        # DB-level guard: no two CONFIRMED bookings for same barbershop+instant
        constraints = [
            models.UniqueConstraint(
                fields=['barbershop', 'date'],
                condition=models.Q(status='CONFIRMED'),
                name='uq_confirmed_booking_slot',
            )
        ]

    def __str__(self):
        return f"#{self.id_short} | {self.service.name} | {self.barbershop.name} | {self.date:%Y-%m-%d %H:%M}"

    @property
    def id_short(self):
        return str(self.id)[:8].upper()

    @property
    def display_status(self):
        """CONFIRMED / CANCELLED / FINISHED, evaluated against the current time."""
        from .engine import project_status
        return project_status(self.status, self.date, timezone.now())

    def delete(self, *args, **kwargs):
        raise BookingEngineError('Bookings are never deleted; cancel the booking instead.')

    # ── State transitions ─────────────────────────────────────────────────────

    def cancel(self, changed_by='customer', reason=''):
        self.transition_to(BookingStatus.CANCELLED, changed_by, reason)

    def transition_to(self, new_status, changed_by, reason=''):
        old_status = self.status
        if BookingStatus(new_status) not in ALLOWED_TRANSITIONS.get(BookingStatus(old_status), set()):
            raise InvalidTransitionError(
                f"Booking {self.id_short} cannot move from {old_status} to {new_status}."
            )
        self.status = new_status
        self.save(update_fields=['status', 'updated_at'])
        BookingStatusLog.objects.create(
            booking=self,
            from_status=old_status,
            to_status=new_status,
            changed_by=changed_by,
            reason=reason,
        )


# ── Booking Audit Log ─────────────────────────────────────────────────────────

class BookingStatusLog(UUIDModel):
    """Immutable audit trail of every status transition on a booking."""
    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name='status_logs')
    from_status = models.CharField(max_length=20, choices=BookingStatus.choices, blank=True)
    to_status = models.CharField(max_length=20, choices=BookingStatus.choices)
    changed_by = models.CharField(max_length=80, help_text='customer / admin / system')
    reason = models.TextField(blank=True)
    changed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Booking Status Log'
        verbose_name_plural = 'Booking Status Logs'
        ordering = ['changed_at']

    def __str__(self):
        return f"Booking {str(self.booking_id)[:8]}: {self.from_status or '∅'} → {self.to_status}"
