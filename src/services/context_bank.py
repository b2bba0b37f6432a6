"""Request orchestration for the three markdown tools.

Each operation validates its input, resolves the effective repository
(request values first, server defaults second), materializes a workspace,
runs the operation and releases the workspace on every exit path. Errors
propagate as ContextBankError subclasses; the tool layer renders them.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from clients.github.client import GitHubClient
from core.errors import ConfigurationError
from core.models import RepositoryRef
from core.validation import normalize_branch, optional_text, require_text
from sources.source_factory import get_search_backend
from sources.workspace_source import WorkspaceSource
from workspace.manager import WorkspaceManager

logger = logging.getLogger(__name__)

MISSING_REPOSITORY_MESSAGE = (
    "No repository URL provided and no default repository configured. "
    "Set MCP_CONTEXT_BANK_REPOSITORY environment variable or provide repository_url parameter."
)


class ContextBank:
    def __init__(
        self,
        manager: WorkspaceManager,
        *,
        default_repository: Optional[str] = None,
        default_access_token: Optional[str] = None,
        github_client: Optional[GitHubClient] = None,
        remote_search_enabled: bool = True,
    ) -> None:
        self._manager = manager
        self._default_repository = optional_text(default_repository)
        self._default_access_token = optional_text(default_access_token)
        self._github_client = github_client
        self._remote_search_enabled = remote_search_enabled

    def resolve_repository(
        self,
        repository_url: Optional[str],
        branch: Optional[str],
        access_token: Optional[str],
    ) -> RepositoryRef:
        url = optional_text(repository_url) or self._default_repository
        if not url:
            raise ConfigurationError(MISSING_REPOSITORY_MESSAGE)

        # A missing token is fine: public repositories and SSH URLs need none
        token = optional_text(access_token) or self._default_access_token
        return RepositoryRef(url=url, branch=normalize_branch(branch), access_token=token)

    async def list_markdown_files(
        self,
        *,
        repository_url: Optional[str] = None,
        branch: str = "main",
        path_filter: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        repo = self.resolve_repository(repository_url, branch, access_token)

        async with self._manager.workspace(repo) as root:
            files = await WorkspaceSource(root=root).list_markdown_files(path_filter=path_filter)

        return {
            "repository": repo.url,
            "branch": repo.branch,
            "files": files,
            "total_files": len(files),
        }

    async def get_file_content(
        self,
        *,
        repository_url: Optional[str] = None,
        file_path: str = "",
        branch: str = "main",
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        file_path = require_text(file_path, "File path cannot be empty")
        repo = self.resolve_repository(repository_url, branch, access_token)

        async with self._manager.workspace(repo) as root:
            content = await WorkspaceSource(root=root).read_file(path=file_path)

        return {
            "repository": repo.url,
            "branch": repo.branch,
            "file_path": file_path,
            "content": content,
            "size": len(content),
        }

    async def search_markdown_content(
        self,
        *,
        repository_url: Optional[str] = None,
        search_term: str = "",
        branch: str = "main",
        case_sensitive: bool = False,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        search_term = require_text(search_term, "Search term cannot be empty")
        repo = self.resolve_repository(repository_url, branch, access_token)

        backend = get_search_backend(
            repo,
            manager=self._manager,
            github_client=self._github_client,
            remote_enabled=self._remote_search_enabled,
        )
        outcome = await backend.search(repo, term=search_term, case_sensitive=case_sensitive)
        logger.debug(
            "Search for %r in %s via %s: %d file(s)",
            search_term,
            repo.url,
            outcome.backend,
            outcome.total_files_with_matches,
        )

        return {
            "repository": repo.url,
            "branch": repo.branch,
            "search_term": search_term,
            "case_sensitive": case_sensitive,
            "results": [r.to_dict() for r in outcome.results],
            "total_files_with_matches": outcome.total_files_with_matches,
            "total_matches": outcome.total_matches,
        }
