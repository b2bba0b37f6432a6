from __future__ import annotations

import re
from typing import Optional, Tuple

from core.errors import ValidationError


# https://github.com/owner/repo(.git), ssh://git@github.com/owner/repo, git@github.com:owner/repo.git
_REPO_URL_RE = re.compile(
    r"^(?:https?://(?:[^@/]+@)?github\.com/"
    r"|ssh://(?:[^@/]+@)?github\.com/"
    r"|[^@/\s]+@github\.com:)"
    r"([^/\s]+)/([^/\s]+?)(?:\.git)?/?$"
)


def match_repo_url(repo_url: str) -> Optional[Tuple[str, str]]:
    m = _REPO_URL_RE.match((repo_url or "").strip())
    if not m:
        return None
    return m.group(1), m.group(2)


def parse_repo_url(repo_url: str) -> Tuple[str, str]:
    parsed = match_repo_url(repo_url)
    if parsed is None:
        raise ValidationError("Invalid GitHub repository URL")
    return parsed


def is_github_url(repo_url: str) -> bool:
    return match_repo_url(repo_url) is not None


def normalize_term(term: str) -> str:
    term_clean = (term or "").strip()
    if not term_clean:
        raise ValidationError("Search term cannot be empty")
    return term_clean
