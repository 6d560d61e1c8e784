"""Login sessions stored in Valkey under opaque random tokens.

A session lives for session_expiry_hours after its last validated use; the
Valkey TTL mirrors that window so abandoned sessions disappear on their own.
"""

import logging
import secrets
from datetime import timedelta
from uuid import UUID

from auth.config import AuthConfig
from auth.exceptions import SessionExpiredError
from auth.types import Session
from clients.valkey_client import ValkeyClient
from utils.timezone import now_utc, parse_iso

logger = logging.getLogger(__name__)

_TIMESTAMP_FIELDS = ("created_at", "expires_at", "last_activity_at")


class SessionManager:
    """Creates, validates (with sliding expiry) and revokes sessions."""

    KEY_PREFIX = "session:"

    def __init__(self, valkey: ValkeyClient, config: AuthConfig):
        self._valkey = valkey
        self._lifetime = timedelta(hours=config.session_expiry_hours)

    def _key(self, token: str) -> str:
        return f"{self.KEY_PREFIX}{token}"

    def _store(self, session: Session) -> None:
        record = {"user_id": str(session.user_id)}
        record.update({name: getattr(session, name).isoformat() for name in _TIMESTAMP_FIELDS})
        self._valkey.set_json(
            self._key(session.token),
            record,
            expire_seconds=int(self._lifetime.total_seconds()),
        )

    def _load(self, token: str) -> Session | None:
        record = self._valkey.get_json(self._key(token))
        if record is None:
            return None
        return Session(
            token=token,
            user_id=UUID(record["user_id"]),
            **{name: parse_iso(record[name]) for name in _TIMESTAMP_FIELDS},
        )

    def create_session(self, user_id: UUID) -> Session:
        now = now_utc()
        session = Session(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + self._lifetime,
            last_activity_at=now,
        )
        self._store(session)
        return session

    def validate_session(self, token: str) -> Session:
        """
        Return the session for token with its expiry pushed forward.

        Raises:
            SessionExpiredError: Unknown, revoked or lapsed token.
        """
        session = self._load(token)
        if session is None:
            raise SessionExpiredError("Session not found or expired")

        now = now_utc()
        if now > session.expires_at:
            # Normally the TTL evicts first; clean up if it hasn't yet
            self._valkey.delete(self._key(token))
            logger.info(f"Session for user {session.user_id} lapsed")
            raise SessionExpiredError("Session expired")

        extended = session.model_copy(update={"expires_at": now + self._lifetime, "last_activity_at": now})
        self._store(extended)
        return extended

    def revoke_session(self, token: str) -> None:
        """Forget the session. Unknown tokens are ignored."""
        self._valkey.delete(self._key(token))
