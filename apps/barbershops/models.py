"""
Barbershop model: the resource bookings are scheduled against.
"""
from datetime import time
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from apps.core.models import CatalogModel
from .hours import HoursConfig


class Barbershop(CatalogModel):
    name = models.CharField(max_length=120)
    address = models.CharField(max_length=255)
    phone = models.CharField(max_length=20, blank=True)
    image_url = models.URLField(blank=True)

    # Working hours
    opening_time = models.TimeField(default=time(9, 0))
    closing_time = models.TimeField(default=time(19, 0))
    slot_minutes = models.PositiveIntegerField(
        default=30,
        validators=[MinValueValidator(5)],
        help_text='Distance between two bookable slots, in minutes',
    )

    class Meta:
        verbose_name = 'Barbershop'
        verbose_name_plural = 'Barbershops'
        ordering = ['name']

    def __str__(self):
        return self.name

    def clean(self):
        super().clean()
        if self.opening_time and self.closing_time and self.opening_time >= self.closing_time:
            raise ValidationError({'closing_time': 'Closing time must be after opening time.'})

    @property
    def hours_config(self) -> HoursConfig:
        return HoursConfig(
            opening_time=self.opening_time,
            closing_time=self.closing_time,
            step_minutes=self.slot_minutes,
        )
