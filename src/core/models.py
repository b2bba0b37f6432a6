"""Immutable dataclasses shared by the workspace, search and tool layers.

Includes the per-request repository reference and the two result shapes
produced by the search backends (line-level matches from a local scan,
file-level hits from the GitHub code-search API).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence, Union


BackendName = Literal["clone", "github"]


@dataclass(frozen=True)
class RepositoryRef:
    """Effective repository for one request.

    `url` is always non-empty; `access_token` may be absent for public
    repositories or SSH URLs.
    """

    url: str
    branch: str = "main"
    access_token: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True)
class SearchMatch:
    line_number: int  # 1-based
    line_content: str

    def to_dict(self) -> dict:
        return {"line_number": self.line_number, "line_content": self.line_content}


@dataclass(frozen=True)
class FileMatches:
    file_path: str
    matches: Sequence[SearchMatch]

    @property
    def total_matches(self) -> int:
        return len(self.matches)

    def to_dict(self) -> dict:
        return {
            "file_path": self.file_path,
            "matches": [m.to_dict() for m in self.matches],
            "total_matches": self.total_matches,
        }


@dataclass(frozen=True)
class RemoteHit:
    """File-level hit from the GitHub code-search API (no line numbers)."""

    file_path: str
    repository: Optional[str] = None
    url: Optional[str] = None

    def to_dict(self) -> dict:
        return {"file_path": self.file_path, "repository": self.repository, "url": self.url}


@dataclass(frozen=True)
class SearchOutcome:
    backend: BackendName
    results: List[Union[FileMatches, RemoteHit]]

    @property
    def total_files_with_matches(self) -> int:
        return len(self.results)

    @property
    def total_matches(self) -> int:
        # A remote hit counts once per file
        return sum(r.total_matches if isinstance(r, FileMatches) else 1 for r in self.results)
