from __future__ import annotations

import logging
import threading
from typing import Optional

from ..utils import file_fingerprint
from .builder import KnowledgeStore, ReloadStatus

logger = logging.getLogger("changekb")

DEFAULT_POLL_INTERVAL = 2.0


class SourceWatcher:
    """
    Poll the store's source document and reload the store whenever the file
    appears, disappears, or its size or mtime differs from what the store's
    latest reload saw.
    """

    def __init__(self, store: KnowledgeStore, *, interval: float = DEFAULT_POLL_INTERVAL) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.store = store
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def check_once(self) -> Optional[ReloadStatus]:
        """Poll once; returns the reload outcome, or None if nothing changed."""
        current = file_fingerprint(self.store.source_path)
        if current == self.store.last_fingerprint:
            return None
        logger.info("[KB] %s changed, reloading", self.store.source_path)
        return self.store.reload()

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="changekb-watcher", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.check_once()
            except Exception:  # keep polling after unexpected reload errors
                logger.exception("[KB] Reload after file change failed")


__all__ = ["DEFAULT_POLL_INTERVAL", "SourceWatcher"]
