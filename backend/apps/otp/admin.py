"""
Admin configuration for login codes.
"""

from django.contrib import admin

from apps.otp.models import AuthCode


@admin.register(AuthCode)
class AuthCodeAdmin(admin.ModelAdmin):
    """
    Read-only view of in-flight login codes.

    Records cannot be edited or deleted here. A locked code stays locked
    until it expires or a new code is requested after the resend cooldown,
    which bounds guessing to max_attempts per cooldown window.
    """

    list_display = [
        "key_masked",
        "attempts",
        "is_expired_display",
        "last_sent_at",
        "expires_at",
    ]
    list_filter = ["created_at"]
    readonly_fields = [
        "key",
        "code_hash",
        "created_at",
        "expires_at",
        "last_sent_at",
        "attempts",
        "delete_after",
    ]

    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False

    @admin.display(description="Phone")
    def key_masked(self, obj: AuthCode) -> str:
        """Show only last 4 digits of phone for privacy."""
        return f"***{obj.key[-4:]}"

    @admin.display(boolean=True, description="Expired")
    def is_expired_display(self, obj: AuthCode) -> bool:
        """Display expired status."""
        return obj.is_expired
