import logging

from django.contrib import admin, messages
from django.utils import timezone

from .engine import project_status
from .exceptions import BookingEngineError
from .models import FINISHED, Booking, BookingStatus, BookingStatusLog
from .store import BookingStore

logger = logging.getLogger(__name__)


class BookingStatusLogInline(admin.TabularInline):
    model = BookingStatusLog
    extra = 0
    readonly_fields = ['from_status', 'to_status', 'changed_by', 'reason', 'changed_at']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ['short_id', 'customer', 'barbershop', 'service', 'date', 'status', 'current_status']
    list_filter = ['status', 'barbershop']
    search_fields = ['customer__username', 'customer__email', 'barbershop__name', 'service__name']
    list_select_related = ['customer', 'barbershop', 'service']
    readonly_fields = ['id', 'barbershop', 'service', 'customer', 'date', 'status', 'created_at', 'updated_at']
    date_hierarchy = 'date'
    inlines = [BookingStatusLogInline]
    actions = ['cancel_bookings']
    fieldsets = (
        ('Booking', {'fields': ('id', 'barbershop', 'service', 'customer')}),
        ('Schedule', {'fields': ('date', 'status')}),
        ('Audit', {'fields': ('created_at', 'updated_at'), 'classes': ('collapse',)}),
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description='ID')
    def short_id(self, obj):
        return obj.id_short

    @admin.display(description='Now')
    def current_status(self, obj):
        return obj.display_status

    @admin.action(description='Cancel selected bookings')
    def cancel_bookings(self, request, queryset):
        store = BookingStore()
        now = timezone.now()
        cancelled = skipped = 0
        for booking in queryset.filter(status=BookingStatus.CONFIRMED):
            if project_status(booking.status, booking.date, now) == FINISHED:
                skipped += 1
                continue
            try:
                store.set_status(booking.pk, BookingStatus.CANCELLED,
                                 changed_by=f'admin:{request.user.get_username()}',
                                 reason='Cancelled from admin')
            except BookingEngineError:
                logger.exception('Admin cancel failed for booking %s', booking.id_short)
                skipped += 1
                continue
            cancelled += 1

        self.message_user(request, f'Cancelled {cancelled} booking(s).', messages.SUCCESS)
        if skipped:
            self.message_user(request, f'Skipped {skipped} booking(s) that already finished or could not be cancelled.', messages.WARNING)


@admin.register(BookingStatusLog)
class BookingStatusLogAdmin(admin.ModelAdmin):
    list_display = ['booking', 'from_status', 'to_status', 'changed_by', 'changed_at']
    readonly_fields = ['id', 'booking', 'from_status', 'to_status', 'changed_by', 'reason', 'changed_at']
    search_fields = ['booking__customer__username']
