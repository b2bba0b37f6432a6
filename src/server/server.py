"""Server bootstrap for the context bank MCP service.

Creates the FastMCP instance, wires the workspace manager, GitHub client
and orchestrator into the tools, and runs the MCP server (stdio
transport). Workspaces still registered when the server stops are swept
before the process exits.
"""

import logging
import signal
import sys

from mcp.server.fastmcp import FastMCP

from clients.github.client import GitHubClient
from config import (
    DEFAULT_ACCESS_TOKEN,
    DEFAULT_REPOSITORY,
    GITHUB_API_TIMEOUT,
    HTTP_VERIFY,
    LOG_LEVEL,
    REMOTE_SEARCH_ENABLED,
    WORKSPACE_DIR,
)
from services.context_bank import ContextBank
from workspace.manager import WorkspaceManager

from tools.get_file_content import register as register_get_file_content
from tools.list_markdown_files import register as register_list_markdown_files
from tools.search_markdown_content import register as register_search_markdown_content

logger = logging.getLogger(__name__)

mcp = FastMCP("context-bank")

workspace_manager = WorkspaceManager(base_dir=WORKSPACE_DIR)


def configure_logging(level_name: str = LOG_LEVEL) -> None:
    # stdout carries the MCP stream, so logs go to stderr.
    # FastMCP may already have installed a (stderr) handler; only the level is ours then.
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        logging.basicConfig(level=logging.WARNING, stream=sys.stderr)
        logger.warning("Unknown CONTEXT_BANK_LOG_LEVEL %r. Falling back to WARNING.", level_name)
        return
    logging.basicConfig(level=level, stream=sys.stderr)
    logging.getLogger().setLevel(level)


def register_tools() -> None:
    github_client = GitHubClient(timeout=GITHUB_API_TIMEOUT, verify=HTTP_VERIFY)
    context_bank = ContextBank(
        workspace_manager,
        default_repository=DEFAULT_REPOSITORY,
        default_access_token=DEFAULT_ACCESS_TOKEN,
        github_client=github_client,
        remote_search_enabled=REMOTE_SEARCH_ENABLED,
    )

    register_list_markdown_files(mcp, context_bank=context_bank)
    register_get_file_content(mcp, context_bank=context_bank)
    register_search_markdown_content(mcp, context_bank=context_bank)


register_tools()


def _exit_on_sigterm(signum, frame) -> None:
    raise SystemExit(128 + signum)


def main() -> None:
    configure_logging()
    signal.signal(signal.SIGTERM, _exit_on_sigterm)
    try:
        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        pass
    finally:
        workspace_manager.shutdown()


if __name__ == "__main__":
    main()
