"""
Management command to index phones of users created before the phone index.

Once every environment has run this, the legacy lookup in
apps.accounts.resolver can be removed.
"""

from django.core.management.base import BaseCommand

from apps.accounts.services import backfill_phone_index


class Command(BaseCommand):
    help = "Create phone index entries for users that lack one"

    def handle(self, *args, **options):
        created = backfill_phone_index()
        self.stdout.write(self.style.SUCCESS(f"Created {created} phone index entries"))
