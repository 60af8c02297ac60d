from datetime import date, time
from decimal import Decimal

import pytest

from apps.barbershops.models import Barbershop
from apps.bookings.engine import combine_slot
from apps.services.models import Service

BOOKING_DAY = date(2024, 5, 10)


class FrozenClock:
    """Clock stand-in returning a fixed instant."""

    def __init__(self, instant):
        self.instant = instant

    def now(self):
        return self.instant


@pytest.fixture
def clock():
    # Early morning of the day before BOOKING_DAY: every BOOKING_DAY slot is upcoming.
    return FrozenClock(combine_slot(date(2024, 5, 9), '08:00'))


@pytest.fixture
def barbershop(db):
    return Barbershop.objects.create(
        name='Vintage Barber',
        address='Avenida São Sebastião, 357',
        opening_time=time(9, 0),
        closing_time=time(19, 0),
        slot_minutes=30,
    )


@pytest.fixture
def other_barbershop(db):
    return Barbershop.objects.create(name='Navalha Dourada', address='Rua das Flores, 120')


@pytest.fixture
def service(barbershop):
    return Service.objects.create(barbershop=barbershop, name='Corte de Cabelo', price=Decimal('60.00'))


@pytest.fixture
def customer(django_user_model):
    return django_user_model.objects.create_user(username='ana', password='pw-ana-123')


@pytest.fixture
def other_customer(django_user_model):
    return django_user_model.objects.create_user(username='bruno', password='pw-bruno-123')
