# Area: Shared
"""Error formatting for structured rejection logs."""

from __future__ import annotations
import json
from typing import Any, Dict, List, Optional


def format_error_block(
    error_type: str,
    operation: Optional[str],
    game_id: Optional[int],
    reason: str,
    input_payload: Dict[str, Any],
    details: Optional[List[str]] = None,
) -> str:
    """Format a structured error block for a rejected operation."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " OPERATION REJECTED — NOTHING WRITTEN",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Operation:    {operation or '-'}",
    ]

    if game_id is not None:
        lines.append(f" Game:         {game_id}")

    lines.append(f" Reason:       {reason}")

    lines.append("")
    lines.append(" ── INPUT ARGUMENTS " + "─" * 44)
    lines.append(indent_json(input_payload))

    if details:
        lines.append("")
        lines.append(" ── DETAILS " + "─" * 52)
        for detail in details:
            lines.append(f" • {detail}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
