"""
Identity resolution by phone key.

Two strategies are tried in order:

1. PhoneIndex (key -> uid), then the AppUser row. Authoritative: an index
   entry pointing at a missing or inactive user resolves to nothing.
2. Legacy scan over AppUser.phone matching either "<digits>" or "+<digits>",
   for users provisioned before the index existed. Remove once
   backfill_phone_index has run everywhere.
"""

from dataclasses import dataclass

from apps.accounts.constants import UserRole, to_role
from apps.accounts.models import AppUser, PhoneIndex
from apps.core.logging import get_logger, mask_phone

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedIdentity:
    """Who a verified phone belongs to."""

    uid: str
    role: UserRole


class IdentityResolver:
    """Maps canonical phone keys to application identities."""

    def resolve(self, key: str) -> ResolvedIdentity | None:
        """
        Resolve key to an identity.

        Returns:
            ResolvedIdentity, or None if the phone is not provisioned
        """
        entry = PhoneIndex.objects.filter(pk=key).first()
        if entry is not None and entry.uid:
            return self._resolve_indexed(key, entry.uid)
        return self._resolve_legacy(key)

    def _resolve_indexed(self, key: str, uid: str) -> ResolvedIdentity | None:
        user = AppUser.objects.filter(pk=uid).first()
        if user is None or not user.active:
            logger.warning("phone_index_dangling", phone_suffix=mask_phone(key), uid=uid)
            return None
        return ResolvedIdentity(uid=user.uid, role=to_role(user.role))

    def _resolve_legacy(self, key: str) -> ResolvedIdentity | None:
        user = (
            AppUser.objects.filter(phone__in=[key, f"+{key}"], active=True)
            .order_by("created_at")
            .first()
        )
        if user is None:
            return None
        role = to_role(user.role)
        if role != user.role:
            logger.warning("legacy_role_defaulted", uid=user.uid, stored_role=user.role, role=role.value)
        logger.info("identity_resolved_by_legacy_scan", phone_suffix=mask_phone(key), uid=user.uid)
        return ResolvedIdentity(uid=user.uid, role=role)
