"""Search backend that clones the repository and scans it line by line."""

from __future__ import annotations

from core.models import RepositoryRef, SearchOutcome
from sources.workspace_source import WorkspaceSource
from workspace.manager import WorkspaceManager


class CloneSearchBackend:
    def __init__(self, *, manager: WorkspaceManager) -> None:
        self._manager = manager

    async def search(
        self,
        repo: RepositoryRef,
        *,
        term: str,
        case_sensitive: bool = False,
    ) -> SearchOutcome:
        async with self._manager.workspace(repo) as root:
            results = await WorkspaceSource(root=root).search(term=term, case_sensitive=case_sensitive)
        return SearchOutcome(backend="clone", results=list(results))
