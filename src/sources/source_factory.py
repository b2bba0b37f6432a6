"""Factory for selecting the appropriate SearchBackend implementation.

Exposes get_search_backend which returns either a GitHubSearchBackend or
a CloneSearchBackend based on the repository host and credential.
"""

from __future__ import annotations

from typing import Optional

from clients.github.client import GitHubClient
from clients.github.inputs import is_github_url
from core.interfaces import SearchBackend
from core.models import RepositoryRef
from sources.clone_search import CloneSearchBackend
from sources.github_search import GitHubSearchBackend
from workspace.manager import WorkspaceManager


def remote_search_available(repo: RepositoryRef, *, enabled: bool = True) -> bool:
    return bool(enabled and repo.access_token and is_github_url(repo.url))


def get_search_backend(
    repo: RepositoryRef,
    *,
    manager: WorkspaceManager,
    github_client: Optional[GitHubClient] = None,
    remote_enabled: bool = True,
) -> SearchBackend:
    """
    Factory that returns the correct SearchBackend implementation.

    Priority Logic:
    1. github.com repository + access token (and remote search enabled) -> GitHubSearchBackend.
    2. Anything else -> CloneSearchBackend.
    """

    if github_client is not None and remote_search_available(repo, enabled=remote_enabled):
        return GitHubSearchBackend(client=github_client)

    return CloneSearchBackend(manager=manager)
