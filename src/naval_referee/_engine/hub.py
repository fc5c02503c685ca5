# Area: Engine
"""
naval_referee._engine.hub — Hub notifier
========================================

Outbound lifecycle calls to the external hub. The referee only
knows the symbolic function names and argument tuples:

    start_game(contract_address, session_id, player1, player2, 0, 0)
    end_game(session_id, player1_won)

The two trailing zeros of start_game are a reserved stake pair.
Return values are discarded.
"""

from __future__ import annotations
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, NamedTuple, Tuple

from .._shared.protocol import build_hub_envelope

logger = logging.getLogger("naval_referee.engine.hub")

START_GAME = "start_game"
END_GAME = "end_game"


def start_game_args(
    contract_address: str, session_id: int, player1: str, player2: str
) -> Tuple[Any, ...]:
    return (contract_address, session_id, player1, player2, 0, 0)


def end_game_args(session_id: int, player1_won: bool) -> Tuple[Any, ...]:
    return (session_id, player1_won)


class HubCall(NamedTuple):
    hub_address: str
    function: str
    args: Tuple[Any, ...]


class HubNotifier(ABC):
    """Delivers a call to the hub. Raising aborts the calling operation."""

    @abstractmethod
    def invoke(self, hub_address: str, function: str, args: Tuple[Any, ...]) -> Any:
        pass


class NullHubNotifier(HubNotifier):
    """Drops every call. For standalone play and tests."""

    def invoke(self, hub_address: str, function: str, args: Tuple[Any, ...]) -> Any:
        return None


class RecordingHubNotifier(HubNotifier):
    """Keeps every delivered call in ``calls``."""

    def __init__(self):
        self.calls: List[HubCall] = []

    def invoke(self, hub_address: str, function: str, args: Tuple[Any, ...]) -> Any:
        self.calls.append(HubCall(hub_address, function, tuple(args)))
        return None

    def calls_to(self, function: str) -> List[HubCall]:
        return [call for call in self.calls if call.function == function]


class LoggingHubNotifier(HubNotifier):
    """Logs each call as a hub envelope."""

    def __init__(self, sender: str = "naval-referee"):
        self.sender = sender

    def invoke(self, hub_address: str, function: str, args: Tuple[Any, ...]) -> Any:
        envelope = build_hub_envelope(hub_address, function, args, sender=self.sender)
        logger.info(f"Hub call {function} → {hub_address}: {json.dumps(envelope['args'])}")
        return envelope


class OutboxHubNotifier(HubNotifier):
    """
    Appends each call as a JSON line to an outbox file.

    A separate relay delivers the outbox to the hub; a failed append
    aborts the operation, so no committed transition lacks its line.
    """

    def __init__(self, outbox_path: str, sender: str = "naval-referee"):
        self.outbox_path = Path(outbox_path)
        self.sender = sender

    def invoke(self, hub_address: str, function: str, args: Tuple[Any, ...]) -> Any:
        envelope = build_hub_envelope(hub_address, function, args, sender=self.sender)
        self.outbox_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.outbox_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(envelope) + "\n")
        logger.info(f"Queued hub call {function} in {self.outbox_path}")
        return envelope

    def read_outbox(self) -> List[dict]:
        """Return all queued envelopes."""
        if not self.outbox_path.exists():
            return []
        with open(self.outbox_path, encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]
