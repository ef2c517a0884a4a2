"""
Account provisioning services.
"""

from django.db import transaction

from apps.accounts.constants import UserRole
from apps.accounts.models import AppUser, PhoneIndex
from apps.core.logging import get_logger, mask_phone
from apps.otp.exceptions import OTPError
from apps.otp.phone import canonicalize

logger = get_logger(__name__)


class InvalidRoleError(ValueError):
    """Raised when provisioning with a role outside UserRole."""

    pass


@transaction.atomic
def provision_user(
    phone: str,
    first_name: str,
    last_name: str,
    role: str,
    manager_id: str | None = None,
    subcontractor_id: str | None = None,
    site_ids: list[str] | None = None,
) -> AppUser:
    """
    Create or update the AppUser for a phone and index it.

    The phone is canonicalized and stored digits-only. Re-provisioning the
    same phone updates the existing user rather than creating a second one.

    Args:
        phone: Phone number in any accepted spelling
        first_name: Given name
        last_name: Family name
        role: "manager" or "employee"
        manager_id: Employee's manager uid
        subcontractor_id: Employee's subcontractor id
        site_ids: Sites a manager oversees

    Returns:
        The saved AppUser

    Raises:
        InvalidRoleError: If role is not a UserRole value
        InvalidPhoneFormatError / EmptyPhoneInputError: If phone is unusable
    """
    if role not in UserRole.values:
        raise InvalidRoleError(f"Invalid role: {role!r}")

    canonical = canonicalize(phone)
    user_role = UserRole(role)

    entry = PhoneIndex.objects.select_for_update().filter(pk=canonical.key).first()
    user = AppUser.objects.filter(pk=entry.uid).first() if entry else None
    if user is None:
        user = AppUser.objects.filter(phone__in=[canonical.key, canonical.plus_key]).first()
    if user is None:
        user = AppUser(phone=canonical.key)

    user.first_name = first_name
    user.last_name = last_name
    user.phone = canonical.key
    user.role = user_role
    user.active = True
    if user_role == UserRole.MANAGER:
        user.site_ids = list(site_ids or [])
        user.manager_id = None
        user.subcontractor_id = None
    else:
        user.site_ids = []
        user.manager_id = manager_id
        user.subcontractor_id = subcontractor_id
    user.save()

    PhoneIndex.objects.update_or_create(key=canonical.key, defaults={"uid": user.uid})

    logger.info("user_provisioned", uid=user.uid, role=user_role.value, phone_suffix=mask_phone(canonical.key))
    return user


def backfill_phone_index() -> int:
    """
    Create PhoneIndex entries for users provisioned before the index existed.

    Users whose phone cannot be canonicalized are skipped. Existing entries
    are left untouched.

    Returns:
        Number of entries created
    """
    created = 0
    for user in AppUser.objects.order_by("created_at").iterator():
        try:
            canonical = canonicalize(user.phone)
        except OTPError:
            logger.warning("backfill_unparseable_phone", uid=user.uid)
            continue
        _, was_created = PhoneIndex.objects.get_or_create(key=canonical.key, defaults={"uid": user.uid})
        if was_created:
            created += 1

    logger.info("phone_index_backfilled", created=created)
    return created
