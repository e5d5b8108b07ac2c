"""Session registry for tracking profile-bearing Airtop sessions."""

import datetime
from dataclasses import dataclass, field
from typing import Dict, Optional

import logging
logger = logging.getLogger(__name__)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


@dataclass(frozen=True)
class SessionMetadata:
    """
    What we remember about a backend session.

    Attributes:
        session_id: Backend-assigned session identifier
        profile_name: Profile to persist when the session terminates
        created_at: When the backend confirmed the session
    """

    session_id: str
    profile_name: Optional[str] = None
    created_at: datetime.datetime = field(default_factory=_utcnow)


class SessionRegistry:
    """
    Keyed store of SessionMetadata, owned by the GatewayContext.

    The backend owns the real session lifecycle. Losing an entry here only
    disables the profile-save message at termination; it never invalidates
    the session. Entries do not expire: every path that calls ``track`` must
    be matched by a ``release`` from the termination tool.

    None of the methods await, so on a single event loop each call is atomic
    with respect to the others.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, SessionMetadata] = {}

    def track(self, session_id: str, profile_name: Optional[str]) -> SessionMetadata:
        """Insert or overwrite the entry for ``session_id``."""
        entry = SessionMetadata(session_id=session_id, profile_name=profile_name)
        self._sessions[session_id] = entry
        logger.debug(f"Tracking session {session_id} (profile={profile_name!r})")
        return entry

    def release(self, session_id: str) -> Optional[SessionMetadata]:
        """Remove the entry for ``session_id``. Unknown ids are a no-op."""
        entry = self._sessions.pop(session_id, None)
        if entry is not None:
            logger.debug(f"Released session {session_id}")
        return entry

    def lookup(self, session_id: str) -> Optional[SessionMetadata]:
        return self._sessions.get(session_id)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = [
    "SessionMetadata",
    "SessionRegistry",
]
