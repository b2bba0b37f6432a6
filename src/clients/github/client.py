"""GitHub client module: code search restricted to one repository.

This module provides a small async client around the GitHub code-search
API (`GET /search/code`) used as the remote search backend. Results are
file-level only; the API reports no line numbers.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

import httpx

from core.errors import ExternalServiceError
from core.models import RemoteHit

from .inputs import normalize_term, parse_repo_url

logger = logging.getLogger(__name__)


class GitHubClient:
    """Async GitHub client for repository-scoped code search.

    Purpose:
      - search_code(repo_url, term, token, extension='md') -> List[RemoteHit]

    The access token is per call (it comes from the request or the server
    default), so no Authorization header is baked into the client.
    """

    BASE_URL = "https://api.github.com"
    JSON_ACCEPT = "application/vnd.github+json"
    PER_PAGE = 100

    def __init__(self, *, timeout: float = 20.0, verify: bool = True) -> None:
        self._timeout = float(timeout)
        self._verify = bool(verify)
        self._headers = {
            "Accept": self.JSON_ACCEPT,
            "User-Agent": "context-bank-mcp",
        }

    async def search_code(
        self,
        *,
        repo_url: str,
        term: str,
        token: str,
        extension: str = "md",
    ) -> List[RemoteHit]:
        """Search `term` in files with `extension` of the repository at `repo_url`."""
        owner, repo = parse_repo_url(repo_url)
        term_clean = normalize_term(term)

        params = {
            "q": f"{term_clean} repo:{owner}/{repo} extension:{extension}",
            "per_page": str(self.PER_PAGE),
        }

        async with self._create_client({"Authorization": f"token {token}"}) as client:
            resp = await self._request(client, "/search/code", params=params)
            self._raise_for_status(resp, context="search_code")
            items = (resp.json() or {}).get("items") or []

        hits = [
            RemoteHit(file_path=item["path"], repository=repo_url, url=item.get("html_url"))
            for item in items
            if isinstance(item.get("path"), str)
        ]
        logger.debug("GitHub code search %s/%s returned %d hit(s)", owner, repo, len(hits))
        return hits

    # --- HTTP helpers ---

    def _create_client(self, custom_headers: Optional[Mapping[str, str]] = None) -> httpx.AsyncClient:
        headers = {**self._headers, **dict(custom_headers or {})}
        return httpx.AsyncClient(
            base_url=self.BASE_URL,
            headers=headers,
            timeout=self._timeout,
            verify=self._verify,
        )

    def _external(self, context: str, detail: Any) -> ExternalServiceError:
        return ExternalServiceError(f"GitHub API error ({context}): {detail}")

    def _raise_for_status(self, resp: httpx.Response, *, context: str) -> None:
        if resp.is_success:
            return
        # Surface the API's own message (bad credentials, rate limit, invalid query)
        try:
            message = (resp.json() or {}).get("message")
        except ValueError:
            message = None
        raise self._external(context, f"{resp.status_code} {message or resp.reason_phrase}")

    async def _request(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        try:
            return await client.get(url, params=dict(params or {}))
        except httpx.HTTPError as e:
            raise self._external(f"GET {url}", e) from e
