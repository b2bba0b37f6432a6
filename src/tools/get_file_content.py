"""MCP tool that reads one file from a git repository.

Registers the 'get_file_content' tool. The path is validated before any
clone and checked for containment inside the workspace before reading.
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
    @mcp.tool(name="get_file_content")
    async def get_file_content(
        file_path: str = "",
        repository_url: Optional[str] = None,
        branch: str = "main",
        access_token: Optional[str] = None,
    ) -> str:
        """Get the content of a specific markdown file from a Git repository.

        Parameters:
          - file_path: path to the file within the repository (required).
          - repository_url: Git repository URL (optional - uses the configured default).
          - branch: Git branch to fetch from (default: "main").
          - access_token: Personal Access Token for private repositories (optional).

        Returns:
          JSON text with repository, branch, file_path, content and size,
          or "Error: <message>" (e.g. "Error: File not found: docs/x.md").
        """
        try:
            payload = await context_bank.get_file_content(
                repository_url=repository_url,
                file_path=file_path,
                branch=branch,
                access_token=access_token,
            )
        except ContextBankError as e:
            return render_error(e)
        except Exception as e:
            logger.exception("get_file_content failed")
            return render_error(e)

        return render_success(payload)
