"""MCP tool that lists markdown files in a git repository.

Registers the 'list_markdown_files' tool which clones the repository into
a throwaway workspace and returns the sorted markdown paths as JSON text.
"""

from __future__ import annotations

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from core.errors import ContextBankError
from core.responses import render_error, render_success
from services.context_bank import ContextBank

logger = logging.getLogger(__name__)


def register(mcp: FastMCP, *, context_bank: ContextBank) -> None:
    @mcp.tool(name="list_markdown_files")
    async def list_markdown_files(
        repository_url: Optional[str] = None,
        branch: str = "main",
        path_filter: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> str:
        """List all markdown files in a Git repository.

        Params:
          - repository_url: Git repository URL (optional - uses the configured default).
          - branch: Git branch to fetch from (default: "main").
          - path_filter: optional filter on the relative path:
              "docs/" matches that directory at any depth,
              a pattern with "*" must match the whole path (e.g. "*.md"),
              anything else matches as a substring.
          - access_token: Personal Access Token for private repositories (optional).

        Returns:
          JSON text with repository, branch, files (sorted) and total_files,
          or "Error: <message>" when the operation fails.
        """
        try:
            payload = await context_bank.list_markdown_files(
                repository_url=repository_url,
                branch=branch,
                path_filter=path_filter,
                access_token=access_token,
            )
        except ContextBankError as e:
            return render_error(e)
        except Exception as e:
            logger.exception("list_markdown_files failed")
            return render_error(e)

        return render_success(payload)
