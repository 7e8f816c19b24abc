"""Per-user session persistence with expiry."""

import logging
from dataclasses import dataclass
from typing import Protocol

from issue_reporter.clock import Clock, now_millis
from issue_reporter.domain.sessions import SessionRecord

SESSION_KEY_PREFIX = "issue-reporter-user:"

_logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Key-value persistence interface for serialized sessions."""

    def get(self, key: str) -> dict[str, object] | None:
        """Return the stored session for key, if present and not expired."""

    def put(self, key: str, value: dict[str, object], ttl_seconds: int) -> None:
        """Store value under key, replacing any previous value."""


@dataclass
class SessionStore:
    """Load and save session records keyed by user id.

    Load and save are not coordinated: two dispatches for the same user that
    overlap both write a full record and the later save wins.
    """

    repository: SessionRepository
    max_age_seconds: int
    clock: Clock = now_millis

    def load(self, user_id: str) -> SessionRecord:
        """Return the user's session, or a fresh one when missing or expired."""
        stored = self.repository.get(_build_key(user_id))
        if stored is None:
            return SessionRecord()
        record = SessionRecord.from_dict(stored)
        if self._is_expired(record):
            _logger.info(
                "Previous session discarded for user %s (state=%s)",
                user_id,
                record.state,
            )
            return SessionRecord(locale_override=record.locale_override)
        return record

    def save(
        self, user_id: str, record: SessionRecord, ttl_seconds: int | None = None
    ) -> None:
        """Persist the full record with an absolute expiry."""
        ttl = ttl_seconds if ttl_seconds is not None else self.max_age_seconds
        self.repository.put(_build_key(user_id), record.to_dict(), ttl)
        _logger.debug("Saved session for user %s (state=%s)", user_id, record.state)

    def _is_expired(self, record: SessionRecord) -> bool:
        if record.first_received is None:
            return False
        age_ms = self.clock() - record.first_received
        return age_ms >= self.max_age_seconds * 1000


def _build_key(user_id: str) -> str:
    return f"{SESSION_KEY_PREFIX}{user_id}"
