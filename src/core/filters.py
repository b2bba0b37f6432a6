"""Path filter expressions for markdown discovery.

Three forms, picked structurally and checked in this order:

- directory prefix: ends with '/'  ("docs/" matches "docs/a.md" and "x/docs/b.md")
- wildcard: contains '*'           ("*.md", "guides/*-intro.md"); must match the whole path
- substring: anything else         ("notes" matches "notes.md")

This is deliberately not a glob engine: '*' crosses '/' boundaries and
'?' or '[...]' have no special meaning.
"""

from __future__ import annotations

import re
from typing import Literal

FilterKind = Literal["prefix", "wildcard", "substring"]


def classify_filter(expr: str) -> FilterKind:
    if expr.endswith("/"):
        return "prefix"
    if "*" in expr:
        return "wildcard"
    return "substring"


def wildcard_to_regex(expr: str) -> "re.Pattern[str]":
    # Escape everything, then turn the escaped '*' back into '.*'
    pattern = re.escape(expr).replace(r"\*", ".*")
    return re.compile(f"^{pattern}$", re.DOTALL)


def matches_filter(rel_path: str, expr: str) -> bool:
    kind = classify_filter(expr)

    if kind == "prefix":
        return rel_path.startswith(expr) or f"/{expr}" in rel_path

    if kind == "wildcard":
        return wildcard_to_regex(expr).match(rel_path) is not None

    return expr in rel_path
