"""
Admin configuration for accounts app.
"""

from django.contrib import admin

from apps.accounts.models import AppUser, PhoneIndex


@admin.register(AppUser)
class AppUserAdmin(admin.ModelAdmin):
    """Admin for provisioned users."""

    list_display = ["uid", "first_name", "last_name", "phone_masked", "role", "active", "created_at"]
    list_filter = ["role", "active"]
    search_fields = ["uid", "first_name", "last_name", "phone"]
    readonly_fields = ["uid", "created_at", "updated_at"]
    ordering = ["-created_at"]

    @admin.display(description="Phone")
    def phone_masked(self, obj: AppUser) -> str:
        """Show only last 4 digits of phone for privacy."""
        return f"***{obj.phone[-4:]}"


@admin.register(PhoneIndex)
class PhoneIndexAdmin(admin.ModelAdmin):
    """Admin for the phone -> uid index."""

    list_display = ["key", "uid", "created_at"]
    search_fields = ["key", "uid"]
    readonly_fields = ["created_at"]
