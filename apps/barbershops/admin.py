from django.contrib import admin
from .models import Barbershop


@admin.register(Barbershop)
class BarbershopAdmin(admin.ModelAdmin):
    list_display = ['name', 'address', 'opening_time', 'closing_time', 'slot_minutes', 'is_active', 'deleted_at']
    list_filter = ['is_active']
    search_fields = ['name', 'address', 'phone']
    list_editable = ['is_active']
    readonly_fields = ['id', 'created_at', 'updated_at', 'deleted_at']
    fieldsets = (
        ('Barbershop Info', {'fields': ('id', 'name', 'address', 'phone', 'image_url')}),
        ('Working Hours', {'fields': ('opening_time', 'closing_time', 'slot_minutes')}),
        ('Status', {'fields': ('is_active',)}),
        ('Audit', {'fields': ('created_at', 'updated_at', 'deleted_at'), 'classes': ('collapse',)}),
    )
