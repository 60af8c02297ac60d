"""
Service model: a haircut or beard trim offered by one barbershop.

Every service occupies exactly one slot of its barbershop's grid, so there
is no duration field; the barbershop's `slot_minutes` is the duration.
"""
from django.db import models
from django.core.validators import MinValueValidator
from apps.core.models import CatalogModel
from apps.barbershops.models import Barbershop


class Service(CatalogModel):
    barbershop = models.ForeignKey(Barbershop, on_delete=models.PROTECT, related_name='services')
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    image_url = models.URLField(blank=True)

    class Meta:
        verbose_name = 'Service'
        verbose_name_plural = 'Services'
        ordering = ['barbershop__name', 'name']

    def __str__(self):
        return f"{self.name} @ {self.barbershop.name}"
