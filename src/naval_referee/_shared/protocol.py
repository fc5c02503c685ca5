# Area: Shared
"""
naval_referee._shared.protocol — Hub envelope helpers
=====================================================

Builds the envelopes used to deliver lifecycle notifications
(start_game / end_game) to the hub.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

# Protocol version
HUB_PROTOCOL = "naval-hub.v1"


def generate_tx_id(prefix: str = "tx") -> str:
    """Generate unique transaction ID.

    Format: prefix-YYYYMMDD-XXXXXX
    """
    date_part = datetime.now().strftime("%Y%m%d")
    unique_part = uuid.uuid4().hex[:6]
    return f"{prefix}-{date_part}-{unique_part}"


def generate_message_id() -> str:
    """Generate unique message ID."""
    return str(uuid.uuid4())


def current_timestamp() -> str:
    """Generate ISO 8601 timestamp with timezone."""
    return datetime.now(timezone.utc).isoformat()


def build_hub_envelope(
    hub_address: str,
    function: str,
    args: Sequence[Any],
    sender: str,
    message_id: Optional[str] = None,
    protocol: str = HUB_PROTOCOL,
) -> Dict[str, Any]:
    """Build a hub call envelope.

    Args:
        hub_address: Address of the hub receiving the call
        function: Symbolic function name (start_game, end_game)
        args: Positional argument tuple
        sender: Address of the calling contract
        message_id: Message ID (auto-generated if not provided)
        protocol: Protocol version

    Returns:
        Complete envelope dict
    """
    if message_id is None:
        message_id = generate_message_id()

    return {
        "protocol": protocol,
        "message_id": message_id,
        "tx_id": generate_tx_id("hub"),
        "timestamp": current_timestamp(),
        "sender": sender,
        "recipient": hub_address,
        "function": function,
        "args": list(args),
    }
