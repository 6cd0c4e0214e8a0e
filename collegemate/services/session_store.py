"""
Session Store - the single "currently logged in" record

One session per store: starting a session overwrites any previous one.
"""

from datetime import datetime
from typing import Callable, Optional

from pydantic import ValidationError

from collegemate.core.logging_config import logger, set_user_email
from collegemate.schemas.auth import Account, Session
from collegemate.services.storage import KeyValueStore, StorageKeys


class SessionStore:
    """Signed-in user snapshot over a KeyValueStore"""

    def __init__(
        self,
        store: KeyValueStore,
        keys: Optional[StorageKeys] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.store = store
        self.keys = keys or StorageKeys()
        self.clock = clock

    def start_session(self, account: Account) -> Session:
        session = Session.from_account(account, started_at=self.clock())
        self.store.set(self.keys.session, session.model_dump(mode="json"))
        set_user_email(session.email)
        logger.info(f"Session started for {session.email}")
        return session

    def current_session(self) -> Optional[Session]:
        data = self.store.get(self.keys.session)
        if not data:
            return None
        try:
            return Session.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Ignoring unreadable session record: {e.error_count()} error(s)")
            return None

    def end_session(self) -> None:
        self.store.delete(self.keys.session)
        set_user_email(None)
        logger.info("Session ended")
