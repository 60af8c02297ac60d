import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('barbershops', '0001_initial'),
        ('services', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('date', models.DateTimeField(db_index=True)),
                ('status', models.CharField(
                    choices=[('CONFIRMED', 'Confirmed'), ('CANCELLED', 'Cancelled')],
                    db_index=True,
                    default='CONFIRMED',
                    max_length=20,
                )),
                ('barbershop', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='bookings',
                    to='barbershops.barbershop',
                )),
                ('customer', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='bookings',
                    to=settings.AUTH_USER_MODEL,
                )),
                ('service', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='bookings',
                    to='services.service',
                )),
            ],
            options={
                'verbose_name': 'Booking',
                'verbose_name_plural': 'Bookings',
                'ordering': ['-date'],
            },
        ),
        migrations.CreateModel(
            name='BookingStatusLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('from_status', models.CharField(
                    blank=True,
                    choices=[('CONFIRMED', 'Confirmed'), ('CANCELLED', 'Cancelled')],
                    max_length=20,
                )),
                ('to_status', models.CharField(
                    choices=[('CONFIRMED', 'Confirmed'), ('CANCELLED', 'Cancelled')],
                    max_length=20,
                )),
                ('changed_by', models.CharField(help_text='customer / admin / system', max_length=80)),
                ('reason', models.TextField(blank=True)),
                ('changed_at', models.DateTimeField(auto_now_add=True)),
                ('booking', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='status_logs',
                    to='bookings.booking',
                )),
            ],
            options={
                'verbose_name': 'Booking Status Log',
                'verbose_name_plural': 'Booking Status Logs',
                'ordering': ['changed_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='booking',
            constraint=models.UniqueConstraint(
                condition=models.Q(('status', 'CONFIRMED')),
                fields=('barbershop', 'date'),
                name='uq_confirmed_booking_slot',
            ),
        ),
    ]
