"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from supabase import Client

from issue_reporter.services.session_store import SessionRepository

_TABLE = "chat_sessions"


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation storing one row per session key."""

    client: Client

    def get(self, key: str) -> dict[str, object] | None:
        """Return the stored record unless its row has expired."""
        now = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table(_TABLE)
            .select("session_key, record_json, expires_at")
            .eq("session_key", key)
            .gt("expires_at", now)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        record = response.data[0].get("record_json")
        return record if isinstance(record, dict) else None

    def put(self, key: str, value: dict[str, object], ttl_seconds: int) -> None:
        """Upsert the record with an absolute expiry."""
        now = datetime.now(tz=UTC)
        self.client.table(_TABLE).upsert(
            {
                "session_key": key,
                "record_json": value,
                "expires_at": (now + timedelta(seconds=ttl_seconds)).isoformat(),
                "updated_at": now.isoformat(),
            },
            on_conflict="session_key",
        ).execute()
