"""MCP tool that searches markdown files of a git repository for text."""

from __future__ import annotations

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from core.errors import ContextBankError
from core.responses import render_error, render_success
from services.context_bank import ContextBank

logger = logging.getLogger(__name__)


def register(mcp: FastMCP, *, context_bank: ContextBank) -> None:
    @mcp.tool(name="search_markdown_content")
    async def search_markdown_content(
        search_term: str = "",
        repository_url: Optional[str] = None,
        branch: str = "main",
        case_sensitive: bool = False,
        access_token: Optional[str] = None,
    ) -> str:
        """Search for specific content within markdown files in a Git repository.

        The term is matched literally on each line. For github.com
        repositories with an access token the GitHub code-search API is
        used instead of a clone; its results list matching files (path and
        URL) without line numbers.

        Params:
          - search_term: text to search for (required).
          - repository_url: Git repository URL (optional - uses the configured default).
          - branch: Git branch to fetch from (default: "main").
          - case_sensitive: whether the match is case sensitive (default: False).
          - access_token: Personal Access Token for private repositories (optional).

        Returns:
          JSON text with results, total_files_with_matches and total_matches,
          or "Error: <message>" when the search fails.
        """
        try:
            payload = await context_bank.search_markdown_content(
                repository_url=repository_url,
                search_term=search_term,
                branch=branch,
                case_sensitive=case_sensitive,
                access_token=access_token,
            )
        except ContextBankError as e:
            return render_error(e)
        except Exception as e:
            logger.exception("search_markdown_content failed")
            return render_error(e)

        return render_success(payload)
