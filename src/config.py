"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (default
repository and access token, workspace location, GitHub API settings and
the log level).
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_str(name: str) -> Optional[str]:
    # Blank values count as unset
    raw = (os.environ.get(name) or "").strip()
    return raw or None


# Repository defaults used when a request does not name its own
DEFAULT_REPOSITORY = _env_str("MCP_CONTEXT_BANK_REPOSITORY")
DEFAULT_ACCESS_TOKEN = _env_str("MCP_CONTEXT_BANK_REPOSITORY_PAT")

# Parent directory for per-request clones
WORKSPACE_DIR = Path(_env_str("CONTEXT_BANK_WORKSPACE_DIR") or tempfile.gettempdir())

# GitHub code-search backend
REMOTE_SEARCH_ENABLED = _env_bool("CONTEXT_BANK_REMOTE_SEARCH", True)
HTTP_VERIFY = _env_bool("HTTP_VERIFY", True)
GITHUB_API_TIMEOUT = _env_float("GITHUB_API_TIMEOUT", 20.0)

# Logging (stderr only, stdout carries the MCP stream)
LOG_LEVEL = (_env_str("CONTEXT_BANK_LOG_LEVEL") or "WARNING").upper()

MARKDOWN_EXTENSION = ".md"
