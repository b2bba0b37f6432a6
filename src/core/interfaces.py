"""Core protocol and interface definitions.

Defines the SearchBackend protocol implemented by the clone-and-scan
backend and the GitHub code-search backend.
"""

from __future__ import annotations

from typing import Protocol

from core.models import RepositoryRef, SearchOutcome


class SearchBackend(Protocol):
    """Contract for any markdown search backend (local scan, GitHub API)."""
    async def search(
        self,
        repo: RepositoryRef,
        *,
        term: str,
        case_sensitive: bool = False,
    ) -> SearchOutcome:
        ...
