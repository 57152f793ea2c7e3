"""Session cart storage"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from ..models.cart import Cart

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CartSession:
    """Shopper session holding the current cart value"""
    session_id: str
    created_at: datetime
    updated_at: datetime
    cart: Cart = field(default_factory=Cart)


class CartDatabase:
    """
    In-memory cart storage, one cart per shopper session.

    Carts are not persisted. Each mutation stores the cart returned by a
    ledger transition in place of the previous value. Sessions idle for
    longer than max_age_hours are dropped when a new session starts.
    """

    def __init__(self, max_age_hours: float = 24):
        self.sessions: dict[str, CartSession] = {}
        self.max_age_hours = max_age_hours

    def create_session(self) -> CartSession:
        """Create a session with an empty cart, expiring idle sessions first"""
        self.cleanup_old_sessions(self.max_age_hours)
        now = _utcnow()
        session = CartSession(
            session_id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
        )
        self.sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[CartSession]:
        """Get a session by ID"""
        return self.sessions.get(session_id)

    def apply(self, session_id: str, transition: Callable[[Cart], Cart]) -> Optional[CartSession]:
        """
        Replace a session's cart with the result of a ledger transition.

        Returns:
            The session, or None if it does not exist. If the transition
            raises, the stored cart is left as it was.
        """
        session = self.get_session(session_id)
        if not session:
            return None

        cart = transition(session.cart)
        if cart is not session.cart:
            session.cart = cart
            session.updated_at = _utcnow()
        return session

    def delete_session(self, session_id: str) -> bool:
        """Delete a session"""
        if session_id in self.sessions:
            del self.sessions[session_id]
            return True
        return False

    def cleanup_old_sessions(self, max_age_hours: float = 24) -> int:
        """Remove sessions idle for longer than max_age_hours"""
        now = _utcnow()
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for sid in old_sessions:
            self.delete_session(sid)
        if old_sessions:
            logger.info(f"Expired {len(old_sessions)} idle cart sessions")
        return len(old_sessions)
