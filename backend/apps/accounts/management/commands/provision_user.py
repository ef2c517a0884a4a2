"""
Management command to provision a user who can log in by phone.

Example:
    ./manage.py provision_user 054-643-2705 Dana Levi employee --manager-id abc123
    ./manage.py provision_user +972501234567 Noam Cohen manager --site-id north --site-id east
"""

from django.core.management.base import BaseCommand, CommandError

from apps.accounts.constants import UserRole
from apps.accounts.services import InvalidRoleError, provision_user
from apps.otp.exceptions import OTPError


class Command(BaseCommand):
    help = "Create or update a phone-login user and index their phone number"

    def add_arguments(self, parser):
        parser.add_argument("phone", help="Phone number in any accepted format")
        parser.add_argument("first_name")
        parser.add_argument("last_name")
        parser.add_argument("role", choices=UserRole.values)
        parser.add_argument("--manager-id", default=None, help="Employee's manager uid")
        parser.add_argument("--subcontractor-id", default=None, help="Employee's subcontractor id")
        parser.add_argument(
            "--site-id",
            action="append",
            dest="site_ids",
            default=[],
            help="Site overseen by a manager (repeatable)",
        )

    def handle(self, *args, **options):
        try:
            user = provision_user(
                phone=options["phone"],
                first_name=options["first_name"],
                last_name=options["last_name"],
                role=options["role"],
                manager_id=options["manager_id"],
                subcontractor_id=options["subcontractor_id"],
                site_ids=options["site_ids"],
            )
        except (InvalidRoleError, OTPError) as e:
            raise CommandError(str(e)) from e

        self.stdout.write(self.style.SUCCESS(f"Provisioned {user.role} {user.uid}"))
