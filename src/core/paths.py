from __future__ import annotations

from pathlib import Path

from core.errors import PathTraversalError, ValidationError

"""
Path utilities used across the project.

Provides consistent POSIX-style normalization, the hidden-entry test used
by discovery, and the containment check applied to every caller-supplied
path before it is read from a workspace.
"""

HIDDEN_PREFIX = "."


def normalize_posix_relpath(p: str) -> str:
    """Normalize a user path to a clean POSIX relative path.

    Converts backslashes to '/', trims whitespace, removes leading '/'
    and repeated './' markers.
    """
    s = (p or "").strip()
    s = s.replace("\\", "/")        # Unify path separators across OSes.
    s = s.lstrip("/")               # Paths are always workspace-relative.
    while s.startswith("./"):       # Drop repeated "./" prefixes.
        s = s[2:]
    return s


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def resolve_under_root(root: Path, rel_path: str) -> Path:
    """Resolve `rel_path` inside `root`, refusing anything that escapes it.

    Both sides are canonicalized with Path.resolve() so '..' segments and
    symlinks pointing outside the root are caught, not just lexical escapes.
    """
    raw = normalize_posix_relpath(rel_path)
    if not raw:
        raise ValidationError("File path cannot be empty")

    root_resolved = Path(root).resolve()
    candidate = (root_resolved / raw).resolve()

    try:
        candidate.relative_to(root_resolved)
    except ValueError as e:
        raise PathTraversalError("Invalid file path: Path traversal detected") from e

    return candidate
