from django.contrib import admin

from bookings.models import Booking, Room


class BookingInline(admin.TabularInline):
    model = Booking
    extra = 0
    fields = ["guest_name", "check_in", "check_out", "status", "total_price"]
    readonly_fields = fields
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ["name", "category", "weekday_price", "weekend_price", "capacity", "manual_pricing"]
    list_filter = ["category", "manual_pricing"]
    search_fields = ["name", "description"]
    inlines = [BookingInline]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """View-only: bookings are created and moved through the booking service."""

    list_display = ["guest_name", "room", "check_in", "check_out", "status", "total_price"]
    list_filter = ["status", "room"]
    search_fields = ["guest_name", "guest_email"]

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.concrete_fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
