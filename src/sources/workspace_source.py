from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

from core.discovery import discover_markdown_files
from core.errors import NotFoundError, ValidationError
from core.models import FileMatches
from core.paths import resolve_under_root
from core.search import read_text, search_files


"""Read-only operations over one materialized workspace.

Provides markdown listing, single-file reads and literal search under a
workspace root, with every caller-supplied path checked for containment.
"""


class WorkspaceSource:
    # Filesystem view of a cloned repository.

    def __init__(self, *, root: Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    async def list_markdown_files(self, *, path_filter: Optional[str] = None) -> List[str]:
        # Offload blocking filesystem IO to a thread to keep the event loop responsive
        return await asyncio.to_thread(discover_markdown_files, self._root, path_filter)

    async def read_file(self, *, path: str) -> str:
        p = resolve_under_root(self._root, path)

        def _do() -> str:
            if not p.exists():
                raise NotFoundError(f"File not found: {path}")
            if not p.is_file():
                raise ValidationError(f"Not a file: {path}")
            return read_text(p)

        return await asyncio.to_thread(_do)

    async def search(self, *, term: str, case_sensitive: bool = False) -> List[FileMatches]:
        def _do() -> List[FileMatches]:
            files = discover_markdown_files(self._root)
            return search_files(self._root, files, term, case_sensitive=case_sensitive)

        return await asyncio.to_thread(_do)
