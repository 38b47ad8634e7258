"""Experimental clipboard watch mode."""
from __future__ import annotations

import threading
from typing import Callable, Optional, Protocol

import structlog

from .models import RedactionResult
from .redactor import sanitize
from .scanner import Scanner

logger = structlog.get_logger(__name__)


class ClipboardIO(Protocol):
    def read(self) -> str: ...

    def write(self, text: str) -> None: ...


class ClipboardWatcher:
    """Poll the clipboard and sanitize new content.

    Each iteration reads, redacts and writes back independently; nothing is
    held between iterations except the last text seen. Before writing, the
    clipboard is read again and the write is dropped if the content changed
    in the meantime, so newer user content is never overwritten.
    """

    def __init__(
        self,
        clipboard: ClipboardIO,
        *,
        interval: float = 0.75,
        stable: bool = False,
        scanner: Scanner | None = None,
        on_redacted: Callable[[RedactionResult], None] | None = None,
    ) -> None:
        self.clipboard = clipboard
        self.interval = interval
        self.stable = stable
        self.scanner = scanner or Scanner()
        self.on_redacted = on_redacted
        self._last_seen: Optional[str] = None

    def poll_once(self) -> Optional[RedactionResult]:
        current = self.clipboard.read()
        if current == self._last_seen:
            return None
        self._last_seen = current
        result = sanitize(current, stable=self.stable, scanner=self.scanner)
        if result.total == 0 or result.text == current:
            return None
        latest = self.clipboard.read()
        if latest != current:
            logger.info("watch.stale_write_discarded")
            return None
        self.clipboard.write(result.text)  # type: ignore[arg-type]
        self._last_seen = result.text  # type: ignore[assignment]
        logger.info("watch.redacted", replaced=result.total)
        if self.on_redacted:
            self.on_redacted(result)
        return result

    def run(self, stop: threading.Event) -> None:
        logger.info("watch.start", interval=self.interval)
        while not stop.is_set():
            self.poll_once()
            stop.wait(self.interval)
        logger.info("watch.stop")


__all__ = ["ClipboardIO", "ClipboardWatcher"]
