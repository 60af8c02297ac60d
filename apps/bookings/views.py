"""
Booking endpoints (JSON).

The page that hosts the calendar calls these directly: it asks for the free
slots of a day, submits the chosen one, lists the customer's bookings and
cancels them. All booking rules live in engine.py; views only parse input,
call the engine and translate its exceptions into status codes.
"""
import logging

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from apps.barbershops.models import Barbershop
from apps.core.decorators import customer_required
from apps.services.models import Service

from .engine import cancel_booking, list_available_slots, project_status, submit_booking
from .exceptions import (
    BookingAlreadyFinishedError,
    BookingEngineError,
    BookingForbiddenError,
    BookingNotFoundError,
    IncompleteSelectionError,
    InvalidSlotError,
    PastSlotError,
    SlotConflictError,
    SlotTakenError,
)
from .forms import BookingSubmissionForm, SlotQueryForm
from .models import FINISHED, Booking, BookingStatus

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _error(exc: BookingEngineError, status: int) -> JsonResponse:
    return JsonResponse({'error': str(exc), 'code': exc.code}, status=status)


def _not_found(what: str) -> JsonResponse:
    return JsonResponse({'error': f'{what} not found', 'code': 'not_found'}, status=404)


def _booking_payload(booking: Booking, now) -> dict:
    local = timezone.localtime(booking.date)
    return {
        'id': str(booking.id),
        'barbershop': {
            'id': str(booking.barbershop_id),
            'name': booking.barbershop.name,
            'address': booking.barbershop.address,
        },
        'service': {
            'id': str(booking.service_id),
            'name': booking.service.name,
            'price': str(booking.service.price),
        },
        'date': local.isoformat(),
        'day': local.date().isoformat(),
        'hour': local.strftime('%H:%M'),
        'status': project_status(booking.status, booking.date, now),
    }


# ─────────────────────────────────────────────────────────────────────────────
# Slot grid
# ─────────────────────────────────────────────────────────────────────────────

@require_GET
def api_slots(request):
    """
    GET /bookings/api/slots/?barbershop_id=<uuid>&date=YYYY-MM-DD
    Returns the free slot labels of that day, in grid order.
    """
    form = SlotQueryForm(request.GET)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    try:
        barbershop = Barbershop.objects.active().get(id=form.cleaned_data['barbershop_id'])
    except Barbershop.DoesNotExist:
        return _not_found('Barbershop')

    day = form.cleaned_data['date']
    slots = list_available_slots(barbershop, day)
    return JsonResponse({'slots': slots, 'date': day.isoformat() if day else None})


# ─────────────────────────────────────────────────────────────────────────────
# Submit
# ─────────────────────────────────────────────────────────────────────────────

@require_POST
@customer_required
def api_submit_booking(request):
    """
    POST /bookings/api/bookings/  barbershop_id, service_id, date, hour
    201 with the booking; 400 / 404 / 409 with {"error", "code"} otherwise.
    """
    form = BookingSubmissionForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    data = form.cleaned_data
    try:
        barbershop = Barbershop.objects.active().get(id=data['barbershop_id'])
    except Barbershop.DoesNotExist:
        return _not_found('Barbershop')
    try:
        service = Service.objects.active().select_related('barbershop').get(id=data['service_id'])
    except Service.DoesNotExist:
        return _not_found('Service')

    try:
        booking = submit_booking(
            barbershop=barbershop,
            service=service,
            customer=request.user,
            day=data['date'],
            time_label=data['hour'],
        )
    except (IncompleteSelectionError, InvalidSlotError, PastSlotError) as exc:
        return _error(exc, 400)
    except SlotConflictError as exc:
        logger.warning(
            'Concurrent booking rejected by store: barbershop=%s date=%s hour=%s',
            barbershop.id, data['date'], data['hour'],
        )
        return _error(exc, 409)
    except SlotTakenError as exc:
        logger.info('Slot already taken: barbershop=%s date=%s hour=%s',
                    barbershop.id, data['date'], data['hour'])
        return _error(exc, 409)

    logger.info('Booking %s confirmed for user %s at %s', booking.id_short, request.user.pk, booking.date)
    return JsonResponse({'booking': _booking_payload(booking, timezone.now())}, status=201)


# ─────────────────────────────────────────────────────────────────────────────
# Cancel
# ─────────────────────────────────────────────────────────────────────────────

@require_POST
@customer_required
def api_cancel_booking(request, booking_id):
    try:
        booking = cancel_booking(booking_id, request.user)
    except BookingNotFoundError:
        return _not_found('Booking')
    except BookingForbiddenError as exc:
        logger.warning('User %s tried to cancel booking %s they do not own', request.user.pk, booking_id)
        return _error(exc, 403)
    except BookingAlreadyFinishedError as exc:
        return _error(exc, 409)

    logger.info('Booking %s cancelled by user %s', booking.id_short, request.user.pk)
    return JsonResponse({'booking': _booking_payload(booking, timezone.now())})


# ─────────────────────────────────────────────────────────────────────────────
# Customer bookings
# ─────────────────────────────────────────────────────────────────────────────

@require_GET
@customer_required
def my_bookings(request):
    """
    The signed-in customer's bookings, grouped the way the bookings page
    shows them: upcoming CONFIRMED ones soonest first, then FINISHED and
    CANCELLED ones newest first.
    """
    now = timezone.now()
    bookings = (
        Booking.objects
        .filter(customer=request.user)
        .select_related('service', 'barbershop')
        .order_by('-date')
    )

    grouped = {'confirmed': [], 'finished': [], 'cancelled': []}
    for booking in bookings:
        payload = _booking_payload(booking, now)
        if payload['status'] == FINISHED:
            grouped['finished'].append(payload)
        elif payload['status'] == BookingStatus.CANCELLED:
            grouped['cancelled'].append(payload)
        else:
            grouped['confirmed'].append(payload)
    grouped['confirmed'].reverse()

    return JsonResponse(grouped)
