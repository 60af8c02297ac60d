"""
Seed management command.

Populates the database with demo data:
  - 2 barbershops (09:00–19:00, 30-minute slots)
  - 4 services per barbershop

Usage:
    python manage.py seed_data
    python manage.py seed_data --flush   # wipe catalog and re-seed
"""
from datetime import time
from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db.models import ProtectedError

from apps.barbershops.models import Barbershop
from apps.services.models import Service

BARBERSHOPS = [
    {
        'name': 'Vintage Barber',
        'address': 'Avenida São Sebastião, 357, São Paulo',
        'phone': '(11) 99999-9999',
    },
    {
        'name': 'Navalha Dourada',
        'address': 'Rua das Flores, 120, São Paulo',
        'phone': '(11) 98888-8888',
    },
]

SERVICES = [
    ('Corte de Cabelo', 'Estilo personalizado com as últimas tendências.', Decimal('60.00')),
    ('Barba', 'Modelagem completa para destacar sua masculinidade.', Decimal('40.00')),
    ('Pézinho', 'Acabamento perfeito para um visual renovado.', Decimal('35.00')),
    ('Sobrancelha', 'Expressão acentuada com modelagem precisa.', Decimal('20.00')),
]


class Command(BaseCommand):
    help = 'Seed demo barbershops and their services'

    def add_arguments(self, parser):
        parser.add_argument(
            '--flush', action='store_true',
            help='Delete the existing catalog before creating fresh records',
        )

    def handle(self, *args, **options):
        if options['flush']:
            self.stdout.write('Flushing existing catalog...')
            try:
                Service.all_objects.all().delete()
                Barbershop.all_objects.all().delete()
            except ProtectedError as exc:
                raise CommandError(
                    'Catalog rows are referenced by bookings and cannot be flushed.'
                ) from exc

        self.stdout.write('Seeding barbershops...')
        barbershops = []
        for data in BARBERSHOPS:
            barbershop, _ = Barbershop.objects.get_or_create(
                name=data['name'],
                defaults={
                    'address': data['address'],
                    'phone': data['phone'],
                    'opening_time': time(9, 0),
                    'closing_time': time(19, 0),
                    'slot_minutes': 30,
                },
            )
            barbershops.append(barbershop)
        self.stdout.write(self.style.SUCCESS(f'  ✔ {len(barbershops)} barbershops ready'))

        self.stdout.write('Seeding services...')
        count = 0
        for barbershop in barbershops:
            for name, description, price in SERVICES:
                _, created = Service.objects.get_or_create(
                    barbershop=barbershop, name=name,
                    defaults={'description': description, 'price': price},
                )
                count += int(created)
        self.stdout.write(self.style.SUCCESS(f'  ✔ {count} services created'))
