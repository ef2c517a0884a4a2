"""
Login code record storage.

CodeRecordStore is the seam between the issue/verify state machines and
durable storage. Writes come in two shapes: put() replaces the whole record
(minting a code), while increment_attempts() and consume() are conditional
on the stored code_hash so they never touch a record minted concurrently.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from django.db.models import F

from apps.otp.models import AuthCode


@dataclass(frozen=True)
class CodeRecord:
    """Snapshot of the stored login code for one phone key."""

    key: str
    code_hash: str
    created_at: datetime
    expires_at: datetime
    last_sent_at: datetime
    attempts: int
    delete_after: datetime

    def is_expired(self, now: datetime) -> bool:
        """The code is unusable strictly after expires_at."""
        return now > self.expires_at


class CodeRecordStore(ABC):
    """Abstract keyed storage for CodeRecords."""

    @abstractmethod
    def get(self, key: str) -> CodeRecord | None:
        """Return the record for key, or None."""

    @abstractmethod
    def put(self, record: CodeRecord) -> None:
        """Store record, replacing every field of any existing record."""

    @abstractmethod
    def increment_attempts(self, key: str, code_hash: str) -> int | None:
        """
        Atomically add one to attempts.

        Returns the new count, or None if no record with this code_hash exists.
        """

    @abstractmethod
    def consume(self, key: str, code_hash: str, max_attempts: int) -> bool:
        """
        Delete the record if it still holds code_hash and is not locked.

        The attempt limit is re-checked at delete time, so wrong guesses
        persisted after the caller read the record still lock it out.
        Returns True for exactly one caller per minted code.
        """

    @abstractmethod
    def purge_expired(self, now: datetime) -> int:
        """Delete records whose delete_after has passed. Returns count."""


class DatabaseCodeRecordStore(CodeRecordStore):
    """CodeRecordStore backed by the AuthCode table."""

    def get(self, key: str) -> CodeRecord | None:
        row = AuthCode.objects.filter(pk=key).first()
        if row is None:
            return None
        return CodeRecord(
            key=row.key,
            code_hash=row.code_hash,
            created_at=row.created_at,
            expires_at=row.expires_at,
            last_sent_at=row.last_sent_at,
            attempts=row.attempts,
            delete_after=row.delete_after,
        )

    def put(self, record: CodeRecord) -> None:
        AuthCode.objects.update_or_create(
            key=record.key,
            defaults={
                "code_hash": record.code_hash,
                "created_at": record.created_at,
                "expires_at": record.expires_at,
                "last_sent_at": record.last_sent_at,
                "attempts": record.attempts,
                "delete_after": record.delete_after,
            },
        )

    def increment_attempts(self, key: str, code_hash: str) -> int | None:
        updated = AuthCode.objects.filter(pk=key, code_hash=code_hash).update(
            attempts=F("attempts") + 1
        )
        if not updated:
            return None
        return (
            AuthCode.objects.filter(pk=key, code_hash=code_hash)
            .values_list("attempts", flat=True)
            .first()
        )

    def consume(self, key: str, code_hash: str, max_attempts: int) -> bool:
        deleted, _ = AuthCode.objects.filter(
            pk=key, code_hash=code_hash, attempts__lt=max_attempts
        ).delete()
        return deleted > 0

    def purge_expired(self, now: datetime) -> int:
        deleted, _ = AuthCode.objects.filter(delete_after__lt=now).delete()
        return deleted


def get_code_store() -> CodeRecordStore:
    """Get the configured code record store."""
    return DatabaseCodeRecordStore()
