"""
Barbershop catalog endpoints (JSON).
"""
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .models import Barbershop


def _barbershop_payload(barbershop: Barbershop) -> dict:
    return {
        'id': str(barbershop.id),
        'name': barbershop.name,
        'address': barbershop.address,
        'phone': barbershop.phone,
        'image_url': barbershop.image_url,
    }


@require_GET
def barbershop_list(request):
    barbershops = Barbershop.objects.active().order_by('name')
    return JsonResponse({'barbershops': [_barbershop_payload(b) for b in barbershops]})


@require_GET
def barbershop_detail(request, barbershop_id):
    """Barbershop card plus its bookable services and working hours."""
    try:
        barbershop = Barbershop.objects.active().get(id=barbershop_id)
    except Barbershop.DoesNotExist:
        return JsonResponse({'error': 'Barbershop not found', 'code': 'not_found'}, status=404)

    services = barbershop.services.active().order_by('name')
    payload = _barbershop_payload(barbershop)
    payload.update({
        'opening_time': barbershop.opening_time.strftime('%H:%M'),
        'closing_time': barbershop.closing_time.strftime('%H:%M'),
        'slot_minutes': barbershop.slot_minutes,
        'services': [
            {
                'id': str(s.id),
                'name': s.name,
                'description': s.description,
                'price': str(s.price),
                'image_url': s.image_url,
            }
            for s in services
        ],
    })
    return JsonResponse(payload)
