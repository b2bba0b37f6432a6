"""Line-oriented literal search over workspace files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Sequence

from core.models import FileMatches, SearchMatch


def compile_term(term: str, *, case_sensitive: bool) -> "re.Pattern[str]":
    # The term is always literal text, never a regex
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(re.escape(term), flags)


def read_text(path: Path) -> str:
    # Bytes first: read_text() would translate '\r\n' and change the content
    return path.read_bytes().decode("utf-8", errors="replace")


def scan_lines(text: str, pattern: "re.Pattern[str]") -> List[SearchMatch]:
    return [
        SearchMatch(line_number=i, line_content=line.strip())
        for i, line in enumerate(text.split("\n"), start=1)
        if pattern.search(line)
    ]


def search_files(
    root: Path,
    files: Iterable[str],
    term: str,
    *,
    case_sensitive: bool = False,
) -> List[FileMatches]:
    """Search `files` (relative to `root`, in the given order) for `term`.

    Files without a matching line are omitted from the result.
    """
    pattern = compile_term(term, case_sensitive=case_sensitive)
    base = Path(root)

    out: List[FileMatches] = []
    for rel in files:
        matches = scan_lines(read_text(base / rel), pattern)
        if matches:
            out.append(FileMatches(file_path=rel, matches=matches))
    return out


def total_match_count(results: Sequence[FileMatches]) -> int:
    return sum(r.total_matches for r in results)
