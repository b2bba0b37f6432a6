"""Search backend backed by the GitHub code-search API.

Returns file-level hits (path + html URL) instead of line matches, and
cannot honor case sensitivity; the flag is only echoed in the payload.
"""

from __future__ import annotations

from clients.github.client import GitHubClient
from core.errors import ConfigurationError
from core.models import RepositoryRef, SearchOutcome


class GitHubSearchBackend:
    def __init__(self, *, client: GitHubClient) -> None:
        self._client = client

    async def search(
        self,
        repo: RepositoryRef,
        *,
        term: str,
        case_sensitive: bool = False,
    ) -> SearchOutcome:
        if not repo.access_token:
            raise ConfigurationError("GitHub code search requires an access token")

        hits = await self._client.search_code(
            repo_url=repo.url,
            term=term,
            token=repo.access_token,
        )
        return SearchOutcome(backend="github", results=list(hits))
