"""Concurrent directory-size scanning with bounded fan-out.

Children of one directory are scanned either inline or on a new thread. A
single admission gate per scanner caps how many spawned scan tasks run at
once across the whole tree; when the gate is full the caller scans the entry
itself. A directory's size is only summed once all of its children joined.
"""

from __future__ import annotations

import enum
import errno
import logging
import os
import stat
import threading
from dataclasses import dataclass
from pathlib import Path

from .types import ScannedDirectory, ScannedEntry, ScannedFile, ScanWarning

logger = logging.getLogger(__name__)


class ScanErrorPolicy(enum.Enum):
    """How non-permission I/O errors during a scan are handled."""

    TOLERANT = "tolerant"
    STRICT = "strict"


class ScanError(RuntimeError):
    """Raised by strict scans when an entry or directory cannot be read."""

    def __init__(self, path: Path, error: OSError) -> None:
        super().__init__(f"failed to scan {path}: {_describe_os_error(error)}")
        self.path = path
        self.error = error


def _describe_os_error(error: OSError) -> str:
    return error.strerror or str(error)


def default_max_tasks() -> int:
    """Return the default admission cap: one task per available CPU."""
    return max(1, os.cpu_count() or 1)


class ScanAdmission:
    """Gate limiting concurrently running scan tasks.

    Slots come from a bounded semaphore. ``active`` and ``peak`` are tracked
    under a lock so callers can observe the gate without racing it.
    """

    def __init__(self, max_tasks: int) -> None:
        if max_tasks < 1:
            raise ValueError("max_tasks must be >= 1")
        self.max_tasks = max_tasks
        self._slots = threading.BoundedSemaphore(max_tasks)
        self._lock = threading.Lock()
        self._active = 0
        self._peak = 0

    def try_admit(self) -> bool:
        """Take a slot without blocking; return ``False`` when the gate is full."""
        if not self._slots.acquire(blocking=False):
            return False
        with self._lock:
            self._active += 1
            self._peak = max(self._peak, self._active)
        return True

    def release(self) -> None:
        with self._lock:
            self._active -= 1
        self._slots.release()

    @property
    def active(self) -> int:
        with self._lock:
            return self._active

    @property
    def peak(self) -> int:
        with self._lock:
            return self._peak

    def reset_peak(self) -> None:
        with self._lock:
            self._peak = self._active


@dataclass(frozen=True)
class ScanResult:
    """Scanned root directory plus warnings collected along the way."""

    root: ScannedDirectory
    warnings: tuple[ScanWarning, ...] = ()


class _ScanRun:
    """Per-scan error policy and thread-safe warning sink."""

    def __init__(self, policy: ScanErrorPolicy) -> None:
        self.policy = policy
        self._lock = threading.Lock()
        self._warnings: list[ScanWarning] = []

    def warn(self, path: Path, message: str) -> None:
        logger.warning("scan: %s: %s", path, message)
        with self._lock:
            self._warnings.append(ScanWarning(path=path, message=message))

    def handle_error(self, path: Path, error: OSError) -> None:
        if self.policy is ScanErrorPolicy.STRICT:
            raise ScanError(path, error) from error
        self.warn(path, _describe_os_error(error))

    def warnings(self) -> tuple[ScanWarning, ...]:
        with self._lock:
            return tuple(sorted(self._warnings, key=lambda item: str(item.path)))


class _ScanTask:
    """One admitted directory entry scanned on its own thread."""

    def __init__(self, scanner: ConcurrentScanner, dir_entry: os.DirEntry, run: _ScanRun) -> None:
        self._scanner = scanner
        self._dir_entry = dir_entry
        self._run = run
        self._result: ScannedEntry | None = None
        self._error: Exception | None = None
        self._thread = threading.Thread(target=self._work, name="lazydu-scan", daemon=True)

    def _work(self) -> None:
        try:
            self._result = self._scanner._scan_entry(self._dir_entry, self._run)
        except Exception as exc:
            self._error = exc
        finally:
            self._scanner.admission.release()

    def start(self) -> None:
        self._thread.start()

    def wait(self) -> None:
        self._thread.join()

    def join(self) -> ScannedEntry | None:
        """Wait for the task and re-raise whatever it raised."""
        self.wait()
        if self._error is not None:
            raise self._error
        return self._result


class _DirectoryFrame:
    """A directory whose entries are still being walked on the inline stack."""

    def __init__(self, name: str, path: Path, own_size: int, dir_entries: list[os.DirEntry]) -> None:
        self.name = name
        self.path = path
        self.own_size = own_size
        self.pending = iter(dir_entries)
        self.children: dict[str, ScannedEntry] = {}
        self.tasks: list[tuple[str, _ScanTask]] = []

    def finish(self) -> ScannedDirectory:
        """Join every spawned child, then sum the directory."""
        # Siblings must all join before an error propagates.
        first_error: Exception | None = None
        for name, task in self.tasks:
            try:
                scanned = task.join()
            except Exception as exc:
                if first_error is None:
                    first_error = exc
                continue
            if scanned is not None:
                self.children[name] = scanned
        self.tasks = []
        if first_error is not None:
            raise first_error

        ordered = dict(sorted(self.children.items()))
        total = self.own_size + sum(child.size for child in ordered.values())
        return ScannedDirectory(size=total, own_size=self.own_size, children=ordered)

    def abandon(self) -> None:
        for _name, task in self.tasks:
            task.wait()
        self.tasks = []


class ConcurrentScanner:
    """Build ``ScannedDirectory`` trees from the filesystem.

    One scanner is shared by the initial scan and every rescan, so its
    admission gate caps scan tasks for the whole process.
    """

    def __init__(
        self,
        max_tasks: int | None = None,
        *,
        policy: ScanErrorPolicy = ScanErrorPolicy.TOLERANT,
        admission: ScanAdmission | None = None,
    ) -> None:
        if admission is None:
            admission = ScanAdmission(max_tasks if max_tasks is not None else default_max_tasks())
        self.admission = admission
        self.policy = policy

    def scan(self, root: Path | str) -> ScanResult:
        """Scan ``root`` recursively and return its sizes.

        The root itself is followed if it is a symlink; everything below it is
        measured with ``lstat`` and links stay leaves.
        """
        root_path = Path(root)
        run = _ScanRun(self.policy)
        try:
            info = os.stat(root_path)
        except OSError as exc:
            run.handle_error(root_path, exc)
            return ScanResult(ScannedDirectory(size=0, own_size=0), run.warnings())
        if not stat.S_ISDIR(info.st_mode):
            not_dir = NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(root_path))
            run.handle_error(root_path, not_dir)
            return ScanResult(ScannedDirectory(size=0, own_size=0), run.warnings())

        logger.info("scan started: %s (max %d tasks)", root_path, self.admission.max_tasks)
        scanned = self._scan_directory(root_path, int(info.st_size), run)
        warnings = run.warnings()
        logger.info("scan finished: %s, %d bytes, %d warnings", root_path, scanned.size, len(warnings))
        return ScanResult(root=scanned, warnings=warnings)

    def _list_directory(self, path: Path, run: _ScanRun) -> list[os.DirEntry] | None:
        """Return the entries of ``path``, or ``None`` when it reads as empty."""
        try:
            with os.scandir(path) as iterator:
                return list(iterator)
        except PermissionError as exc:
            run.warn(path, f"permission denied ({_describe_os_error(exc)})")
            return None
        except OSError as exc:
            run.handle_error(path, exc)
            return None

    def _stat_entry(self, dir_entry: os.DirEntry, run: _ScanRun) -> os.stat_result | None:
        path = Path(dir_entry.path)
        try:
            return dir_entry.stat(follow_symlinks=False)
        except FileNotFoundError:
            logger.debug("scan: entry vanished: %s", path)
            return None
        except OSError as exc:
            run.handle_error(path, exc)
            return None

    def _start_task(self, dir_entry: os.DirEntry, run: _ScanRun) -> _ScanTask:
        task = _ScanTask(self, dir_entry, run)
        try:
            task.start()
        except BaseException:
            self.admission.release()
            raise
        return task

    def _scan_directory(self, path: Path, own_size: int, run: _ScanRun) -> ScannedDirectory:
        """Walk ``path`` with an explicit stack so depth never grows the call stack.

        Admitted entries go to their own threads; the rest are walked inline
        by pushing a frame per directory and summing it once it is drained.
        """
        dir_entries = self._list_directory(path, run)
        if dir_entries is None:
            return ScannedDirectory(size=own_size, own_size=own_size)

        stack = [_DirectoryFrame(path.name, path, own_size, dir_entries)]
        try:
            while True:
                frame = stack[-1]
                dir_entry = next(frame.pending, None)
                if dir_entry is None:
                    stack.pop()
                    scanned = frame.finish()
                    if not stack:
                        return scanned
                    stack[-1].children[frame.name] = scanned
                    continue

                if self.admission.try_admit():
                    frame.tasks.append((dir_entry.name, self._start_task(dir_entry, run)))
                    continue

                info = self._stat_entry(dir_entry, run)
                if info is None:
                    continue
                entry_size = int(info.st_size)
                if not stat.S_ISDIR(info.st_mode):
                    frame.children[dir_entry.name] = ScannedFile(size=entry_size)
                    continue
                child_path = Path(dir_entry.path)
                child_entries = self._list_directory(child_path, run)
                if child_entries is None:
                    frame.children[dir_entry.name] = ScannedDirectory(size=entry_size, own_size=entry_size)
                else:
                    stack.append(_DirectoryFrame(dir_entry.name, child_path, entry_size, child_entries))
        except BaseException:
            for frame in stack:
                frame.abandon()
            raise

    def _scan_entry(self, dir_entry: os.DirEntry, run: _ScanRun) -> ScannedEntry | None:
        """Scan one entry on a task thread."""
        info = self._stat_entry(dir_entry, run)
        if info is None:
            return None
        if stat.S_ISDIR(info.st_mode):
            return self._scan_directory(Path(dir_entry.path), int(info.st_size), run)
        return ScannedFile(size=int(info.st_size))


__all__ = [
    "ConcurrentScanner",
    "ScanAdmission",
    "ScanError",
    "ScanErrorPolicy",
    "ScanResult",
    "default_max_tasks",
]
