from django.contrib import admin, messages

from rentals.dependencies import get_booking_ledger
from rentals.domain import BookingId
from rentals.domain.errors import InvalidTransitionError
from rentals.models import Booking, BookingStatus, Vehicle


class BookingInline(admin.TabularInline):
    model = Booking
    extra = 0
    can_delete = False
    fields = ["user", "start_date", "end_date", "status", "total_price"]
    readonly_fields = fields

    def has_add_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ["name", "type", "category", "rate_per_day", "available"]
    list_filter = ["type", "available"]
    search_fields = ["name", "category"]
    # availability belongs to the booking ledger
    readonly_fields = ["available", "created_at", "updated_at"]
    inlines = [BookingInline]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["vehicle", "user", "start_date", "end_date", "status", "total_price"]
    list_filter = ["status", "vehicle__type"]
    search_fields = ["vehicle__name", "user__username", "payment_reference"]
    actions = ["cancel_pending"]

    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False

    @admin.action(description="Cancel selected pending bookings")
    def cancel_pending(self, request, queryset):
        ledger = get_booking_ledger()
        cancelled = 0
        for booking in queryset.filter(status=BookingStatus.PENDING):
            try:
                ledger.cancel(BookingId(booking.pk))
            except InvalidTransitionError:
                continue
            cancelled += 1
        self.message_user(request, f"Cancelled {cancelled} booking(s).", messages.SUCCESS)
