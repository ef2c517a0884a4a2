"""
Management command to purge expired login code records.

Run periodically via cron or scheduled task. Expiry is enforced on every
verification regardless; this only keeps the table small.
Example: ./manage.py cleanup_auth_codes
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.otp.models import AuthCode
from apps.otp.services import cleanup_expired_codes


class Command(BaseCommand):
    help = "Delete login code records whose delete_after time has passed"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be deleted without actually deleting",
        )

    def handle(self, *args, **options):
        now = timezone.now()

        if options["dry_run"]:
            count = AuthCode.objects.filter(delete_after__lt=now).count()
            self.stdout.write(self.style.WARNING(f"[DRY RUN] Would delete {count} login codes"))
            return

        deleted = cleanup_expired_codes(now)
        self.stdout.write(self.style.SUCCESS(f"Successfully deleted {deleted} login codes"))
