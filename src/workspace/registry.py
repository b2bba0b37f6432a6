"""Process-wide set of live workspace directories.

Each request owns its workspace privately; this registry is the only
state shared between concurrent requests, so every operation takes the
lock. The shutdown sweep drains it to remove anything left behind.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import List, Set


class WorkspaceRegistry:
    def __init__(self) -> None:
        self._paths: Set[Path] = set()
        self._lock = threading.Lock()

    def add(self, path: Path) -> None:
        with self._lock:
            self._paths.add(Path(path))

    def discard(self, path: Path) -> None:
        with self._lock:
            self._paths.discard(Path(path))

    def drain(self) -> List[Path]:
        """Atomically empty the registry and return what it held (sorted)."""
        with self._lock:
            paths = sorted(self._paths)
            self._paths.clear()
        return paths

    def snapshot(self) -> List[Path]:
        with self._lock:
            return sorted(self._paths)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        with self._lock:
            return Path(path) in self._paths

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)
