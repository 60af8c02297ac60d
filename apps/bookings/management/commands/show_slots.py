"""
management command: show_slots

Prints a barbershop's slot grid for one day, marking which slots are taken
by CONFIRMED bookings. Handy when a customer reports a missing time.

    python manage.py show_slots "Vintage Barber" 2024-05-10
"""
from datetime import datetime

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.barbershops.models import Barbershop
from apps.bookings.engine import filter_available, generate_day_time_list
from apps.bookings.store import BookingStore


class Command(BaseCommand):
    help = "Show a barbershop's free and taken slots for a day"

    def add_arguments(self, parser):
        parser.add_argument('barbershop', help='Barbershop name')
        parser.add_argument('date', help='Day as YYYY-MM-DD')

    def handle(self, *args, **options):
        try:
            day = datetime.strptime(options['date'], '%Y-%m-%d').date()
        except ValueError as exc:
            raise CommandError(f"Invalid date '{options['date']}', expected YYYY-MM-DD.") from exc

        try:
            barbershop = Barbershop.objects.get(name=options['barbershop'])
        except Barbershop.DoesNotExist as exc:
            raise CommandError(f"Barbershop '{options['barbershop']}' not found.") from exc

        hours = barbershop.hours_config
        self.stdout.write(f"Barbershop: {barbershop.name}")
        self.stdout.write(
            f"Hours: {hours.opening_time:%H:%M} - {hours.closing_time:%H:%M} every {hours.step_minutes} min"
        )

        grid = generate_day_time_list(day, hours)
        bookings = BookingStore().list_confirmed_for_barbershop_and_day(barbershop.pk, day)
        free = set(filter_available(grid, bookings))
        taken_by = {
            timezone.localtime(b.date).strftime('%H:%M'): b.id_short for b in bookings
        }

        self.stdout.write(f"{len(grid)} slots, {len(free)} free:")
        for slot in grid:
            if slot in free:
                self.stdout.write(f"  {slot}  free")
            else:
                self.stdout.write(f"  {slot}  taken (#{taken_by.get(slot, '?')})")
