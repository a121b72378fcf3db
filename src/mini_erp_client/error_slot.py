from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ErrorSlot:
    """Holds the latest user-facing error; a new one replaces the old."""

    def __init__(self) -> None:
        self._message: str | None = None
        self.version = 0

    @property
    def message(self) -> str | None:
        return self._message

    def set(self, message: str) -> None:
        if self._message and self._message != message:
            logger.debug("error_slot_overwritten", extra={"previous": self._message})
        self._message = message
        self.version += 1

    def clear(self) -> None:
        if self._message is None:
            return
        self._message = None
        self.version += 1

    def __bool__(self) -> bool:
        return self._message is not None
