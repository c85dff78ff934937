"""
Vendor Session Store

Keeps a lightweight vendor identity ({id, email, name}) on the local device
so the vendor console does not ask for credentials on every launch.

The token has no expiry and no server-side revocation: it lives until
logout() clears it or the file is removed.

Lifecycle: none -> active -> cleared
"""
import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from app.core.exceptions import NotFoundError
from app.domain.vendor import VendorSession

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    NONE = "none"
    ACTIVE = "active"
    CLEARED = "cleared"


class SessionStore:
    """JSON file persistence for the vendor session token"""

    def __init__(self, path: str):
        self.path = Path(os.path.expanduser(path))

    def save(self, session: VendorSession):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(session.model_dump(mode="json")))

    def load(self) -> Optional[VendorSession]:
        if not self.path.exists():
            return None
        try:
            return VendorSession(**json.loads(self.path.read_text()))
        except (json.JSONDecodeError, ValidationError, TypeError):
            logger.warning(f"Ignoring unreadable session file {self.path}")
            return None

    def remove(self):
        if self.path.exists():
            self.path.unlink()


class VendorSessionContext:
    """
    Explicit vendor identity passed to whatever needs it

    Usage:
        context = VendorSessionContext(SessionStore(settings.SESSION_FILE))
        context.restore()
        vendor = context.require()
    """

    def __init__(self, store: SessionStore):
        self.store = store
        self.session: Optional[VendorSession] = None
        self.state = SessionState.NONE

    def restore(self) -> Optional[VendorSession]:
        """Load a previously stored session, if any"""
        session = self.store.load()
        if session is not None:
            self.session = session
            self.state = SessionState.ACTIVE
        return session

    def login(self, session: VendorSession):
        self.store.save(session)
        self.session = session
        self.state = SessionState.ACTIVE
        logger.info(f"Vendor session stored for {session.email}")

    def logout(self):
        self.store.remove()
        self.session = None
        self.state = SessionState.CLEARED

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def require(self) -> VendorSession:
        """Return the active session or ask the caller to re-authenticate"""
        if not self.is_active or self.session is None:
            raise NotFoundError("No vendor session, please log in")
        return self.session
