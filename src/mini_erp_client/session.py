from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from .credentials import CredentialStore

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    UNSET = "unset"
    CREDENTIALS_SET = "credentials_set"
    AUTHENTICATED = "authenticated"


Listener = Callable[[SessionStatus, SessionStatus], None]


class SessionController:
    """Lazy authentication state machine.

    Credentials are accepted without a round trip. The first privileged
    response of the session decides: success confirms, 401 tears it down.
    ``epoch`` changes on every login and logout so late responses from an
    earlier session cannot confirm or reset the current one.
    """

    def __init__(self, credentials: CredentialStore | None = None) -> None:
        self.credentials = credentials or CredentialStore()
        self.status = SessionStatus.UNSET
        self.epoch = 0
        self._listeners: list[Listener] = []

    @property
    def is_active(self) -> bool:
        return self.status is not SessionStatus.UNSET and self.credentials.has_credentials

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def login(self, username: str, password: str) -> None:
        self.credentials.set_credentials(username, password)
        self.epoch += 1
        logger.info("session_credentials_set", extra={"username": username, "epoch": self.epoch})
        self._transition(SessionStatus.CREDENTIALS_SET)

    def logout(self) -> None:
        self.credentials.clear()
        self.epoch += 1
        logger.info("session_logout", extra={"epoch": self.epoch})
        self._transition(SessionStatus.UNSET)

    def confirm(self, epoch: int) -> None:
        if epoch != self.epoch or self.status is not SessionStatus.CREDENTIALS_SET:
            return
        logger.info("session_authenticated", extra={"epoch": epoch})
        self._transition(SessionStatus.AUTHENTICATED)

    def deny(self, epoch: int) -> bool:
        """Tear the session down after a 401; returns False for stale epochs."""
        if epoch != self.epoch or self.status is SessionStatus.UNSET:
            logger.debug("session_deny_ignored", extra={"epoch": epoch, "current_epoch": self.epoch})
            return False
        self.credentials.clear()
        self.epoch += 1
        logger.warning("session_denied", extra={"epoch": epoch})
        self._transition(SessionStatus.UNSET)
        return True

    def _transition(self, new_status: SessionStatus) -> None:
        old_status = self.status
        self.status = new_status
        for listener in list(self._listeners):
            listener(old_status, new_status)
