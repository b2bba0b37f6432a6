"""Text payloads returned by the MCP tools.

Success payloads are pretty-printed JSON; failures are reported in-band as
"Error: <message>" so the protocol-level call always succeeds.
"""

from __future__ import annotations

import json
from typing import Any, Mapping


def render_success(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_error(err: BaseException) -> str:
    message = str(err) or err.__class__.__name__
    return f"Error: {message}"
