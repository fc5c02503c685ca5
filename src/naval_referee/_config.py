# Area: Shared
"""
naval_referee._config — Runner configuration
============================================

Configuration defaults, loading and validation for the CLI.

Values are resolved in order: defaults, JSON config file, environment
variables (a .env file in the working directory is loaded first).
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger("naval_referee")

DEFAULT_CONFIG: Dict[str, Any] = {
    "db_path": "naval_referee.db",
    "contract_address": "naval-referee",
    "hub_outbox_path": None,
    "log_file": "naval_referee.log",
    "log_level": "INFO",
    "caller": None,
}

ENV_MAPPINGS = {
    "NAVAL_DB_PATH": "db_path",
    "NAVAL_CONTRACT_ADDRESS": "contract_address",
    "NAVAL_HUB_OUTBOX": "hub_outbox_path",
    "NAVAL_LOG_FILE": "log_file",
    "NAVAL_LOG_LEVEL": "log_level",
    "NAVAL_CALLER": "caller",
}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_config(config_path: Optional[str] = None, use_dotenv: bool = True) -> Dict[str, Any]:
    """
    Load config from defaults, file and environment.

    Args:
        config_path: Optional path to a JSON config file
        use_dotenv: Load a .env file into the environment first

    Returns:
        Merged configuration dict
    """
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    config: Dict[str, Any] = dict(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config.update(json.load(f))
        else:
            logger.warning(f"Config file not found: {config_path}")

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            config[config_key] = os.environ[env_key]

    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration dict

    Raises:
        ValueError: If a value is missing or invalid
    """
    if not config.get("db_path"):
        raise ValueError("Missing required config key: db_path")
    level = str(config.get("log_level", "INFO")).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {config.get('log_level')}")


def log_level(config: Dict[str, Any]) -> int:
    return getattr(logging, str(config.get("log_level", "INFO")).upper())
