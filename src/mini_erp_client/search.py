from __future__ import annotations

import logging

from .session import SessionController, SessionStatus
from .sync import ProductSyncEngine

logger = logging.getLogger(__name__)


class SearchController:
    """Keeps the filter text and re-reads the list whenever it changes.

    A login submission also triggers a read with the current filter; that
    read is what confirms or rejects the freshly entered credentials.
    """

    def __init__(self, engine: ProductSyncEngine, session: SessionController) -> None:
        self.engine = engine
        self.session = session
        self.filter_text = ""
        session.subscribe(self._on_session_change)

    def set_filter(self, text: str) -> int | None:
        if text == self.filter_text:
            return None
        self.filter_text = text
        logger.debug("search_filter_changed", extra={"filter_text": text})
        return self.engine.refresh(text)

    def clear(self) -> int | None:
        return self.set_filter("")

    def reset(self) -> None:
        self.filter_text = ""

    def _on_session_change(self, old: SessionStatus, new: SessionStatus) -> None:
        if new is SessionStatus.CREDENTIALS_SET:
            self.engine.refresh(self.filter_text)
