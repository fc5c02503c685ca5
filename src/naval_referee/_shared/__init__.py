# Area: Shared
"""
Shared utilities used by the engine and the CLI.

This package contains:
- Logging configuration
- Hub envelope helpers
"""

from .logging_config import (
    setup_logging,
    log_rejection,
    enable_quiet_mode,
    disable_quiet_mode,
    is_quiet_mode_enabled,
)
from .protocol import (
    HUB_PROTOCOL,
    build_hub_envelope,
    generate_tx_id,
    generate_message_id,
    current_timestamp,
)

__all__ = [
    "setup_logging",
    "log_rejection",
    "enable_quiet_mode",
    "disable_quiet_mode",
    "is_quiet_mode_enabled",
    "HUB_PROTOCOL",
    "build_hub_envelope",
    "generate_tx_id",
    "generate_message_id",
    "current_timestamp",
]
