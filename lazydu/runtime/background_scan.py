"""Background worker for the initial directory scan."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from queue import Empty, Queue

from ..size_tree import ScanResult

logger = logging.getLogger(__name__)


class BackgroundScan:
    """Run one scan on a daemon thread and hand back the outcome once.

    The worker puts either the ``ScanResult`` or the exception it raised on a
    queue; the foreground polls ``poll`` and never touches the result before
    it arrives.
    """

    def __init__(self, scan: Callable[[Path], ScanResult], root: Path) -> None:
        self._scan = scan
        self._root = root
        self._outcome: Queue[ScanResult | BaseException] = Queue(maxsize=1)
        self._result: ScanResult | None = None
        self._thread: threading.Thread | None = None

    def _worker(self) -> None:
        try:
            outcome: ScanResult | BaseException = self._scan(self._root)
        except BaseException as exc:
            logger.exception("initial scan of %s failed", self._root)
            outcome = exc
        self._outcome.put(outcome)

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("scan already started")
        self._thread = threading.Thread(
            target=self._worker,
            name="lazydu-initial-scan",
            daemon=True,
        )
        self._thread.start()

    def poll(self, timeout: float | None = None) -> ScanResult | None:
        """Return the result once available, else ``None``.

        Exceptions raised by the scan are re-raised here, in the caller.
        """
        if self._result is not None:
            return self._result
        try:
            if timeout is None:
                outcome = self._outcome.get_nowait()
            else:
                outcome = self._outcome.get(timeout=timeout)
        except Empty:
            return None
        if isinstance(outcome, BaseException):
            raise outcome
        self._result = outcome
        return outcome

    def wait(self) -> ScanResult:
        """Block until the scan completes."""
        while True:
            result = self.poll(timeout=0.1)
            if result is not None:
                return result


__all__ = ["BackgroundScan"]
