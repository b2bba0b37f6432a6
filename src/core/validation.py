from __future__ import annotations

from typing import Optional

from core.errors import ValidationError


def normalize_branch(branch: Optional[str]) -> str:
    branch_clean = (branch or "main").strip()
    if not branch_clean:
        raise ValidationError("branch must be non-empty")
    return branch_clean


def require_text(value: Optional[str], message: str) -> str:
    # Whitespace-only counts as empty; other values are returned unstripped
    if value is None or not value.strip():
        raise ValidationError(message)
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    s = (value or "").strip()
    return s or None
