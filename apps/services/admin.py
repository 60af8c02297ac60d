from django.contrib import admin
from .models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ['name', 'barbershop', 'price', 'is_active']
    list_filter = ['barbershop', 'is_active']
    search_fields = ['name', 'barbershop__name']
    list_editable = ['is_active', 'price']
    list_select_related = ['barbershop']
    readonly_fields = ['id', 'created_at', 'updated_at', 'deleted_at']
    fieldsets = (
        ('Service Info', {'fields': ('id', 'barbershop', 'name', 'description', 'image_url')}),
        ('Pricing', {'fields': ('price',)}),
        ('Status', {'fields': ('is_active',)}),
        ('Audit', {'fields': ('created_at', 'updated_at', 'deleted_at'), 'classes': ('collapse',)}),
    )
