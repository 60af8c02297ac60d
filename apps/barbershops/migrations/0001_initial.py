import datetime
import django.core.validators
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Barbershop',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('name', models.CharField(max_length=120)),
                ('address', models.CharField(max_length=255)),
                ('phone', models.CharField(blank=True, max_length=20)),
                ('image_url', models.URLField(blank=True)),
                ('opening_time', models.TimeField(default=datetime.time(9, 0))),
                ('closing_time', models.TimeField(default=datetime.time(19, 0))),
                ('slot_minutes', models.PositiveIntegerField(
                    default=30,
                    help_text='Distance between two bookable slots, in minutes',
                    validators=[django.core.validators.MinValueValidator(5)],
                )),
            ],
            options={
                'verbose_name': 'Barbershop',
                'verbose_name_plural': 'Barbershops',
                'ordering': ['name'],
            },
        ),
    ]
