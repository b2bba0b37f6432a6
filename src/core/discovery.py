"""Markdown file discovery over a materialized workspace.

Walks the tree depth-first with os.scandir, skipping hidden entries (and
everything below a hidden directory) and symlinks, and yields POSIX paths
relative to the workspace root.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List, Optional

from config import MARKDOWN_EXTENSION
from core.filters import matches_filter
from core.paths import is_hidden


def is_markdown_name(name: str) -> bool:
    return name.lower().endswith(MARKDOWN_EXTENSION)


def iter_markdown_files(root: Path, path_filter: Optional[str] = None) -> Iterator[str]:
    """Yield markdown paths lazily, in filesystem enumeration order."""
    expr = path_filter if path_filter and path_filter.strip() else None

    def walk(directory: Path, prefix: str) -> Iterator[str]:
        with os.scandir(directory) as it:
            entries = list(it)

        for entry in entries:
            if is_hidden(entry.name):
                continue

            rel = f"{prefix}{entry.name}"

            # Symlinks are neither followed nor reported
            if entry.is_dir(follow_symlinks=False):
                yield from walk(Path(entry.path), f"{rel}/")
            elif entry.is_file(follow_symlinks=False) and is_markdown_name(entry.name):
                if expr is None or matches_filter(rel, expr):
                    yield rel

    yield from walk(Path(root), "")


def discover_markdown_files(root: Path, path_filter: Optional[str] = None) -> List[str]:
    """Return every markdown file under `root`, sorted by relative path."""
    return sorted(iter_markdown_files(root, path_filter))
