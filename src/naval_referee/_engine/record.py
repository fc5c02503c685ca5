# Area: Engine
"""
naval_referee._engine.record — Match record
===========================================

The per-match record kept in the persistent namespace. Holds the
two seats, the board commitments, turn and hit counters, and the
outstanding shot or sonar scan. Side-indexed helpers keep the
referee free of player1/player2 branching.
"""

from __future__ import annotations
import re
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import GameStatus, GRID_SIZE, MAX_SONAR_COUNT

ZERO_HASH = "00" * 32

_HEX_DIGEST = re.compile(r"^[0-9a-f]{64}$")


def normalize_commitment(value: Union[bytes, bytearray, str]) -> Optional[str]:
    """
    Convert a board commitment to its 64-char lowercase hex form.

    Args:
        value: 32 raw bytes, or a hex string with optional 0x prefix

    Returns:
        The hex digest, or None if the value is not a 32-byte digest
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex() if len(value) == 32 else None
    if not isinstance(value, str):
        return None
    text = value.strip().lower()
    if text.startswith("0x"):
        text = text[2:]
    return text if _HEX_DIGEST.match(text) else None


def is_zero_hash(digest: str) -> bool:
    return digest == ZERO_HASH


class GameRecord(BaseModel):
    """
    Full state of one match.

    During the open-seat phase player2 equals player1; that sentinel
    means "no opponent yet". A board hash equal to ZERO_HASH means
    "uncommitted". Assignments are validated, so a record that reached
    storage always loads back.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    player1: str
    player2: str
    board_hash1: str = ZERO_HASH
    board_hash2: str = ZERO_HASH
    boards_committed: int = Field(0, ge=0, le=2)
    turn: int = Field(1, ge=1, le=2)
    p1_hits: int = Field(0, ge=0)
    p2_hits: int = Field(0, ge=0)
    status: GameStatus = GameStatus.CREATED
    session_id: int = Field(ge=0)
    awaiting_report: bool = False
    last_shot_x: int = Field(0, ge=0, lt=GRID_SIZE)
    last_shot_y: int = Field(0, ge=0, lt=GRID_SIZE)
    p1_turns_taken: int = Field(0, ge=0)
    p2_turns_taken: int = Field(0, ge=0)
    p1_sonar_used: bool = False
    p2_sonar_used: bool = False
    awaiting_sonar: bool = False
    sonar_center_x: int = Field(0, ge=0, lt=GRID_SIZE)
    sonar_center_y: int = Field(0, ge=0, lt=GRID_SIZE)
    last_sonar_count: int = Field(0, ge=0, le=MAX_SONAR_COUNT)

    @field_validator("board_hash1", "board_hash2")
    @classmethod
    def _check_digest(cls, value: str) -> str:
        if not _HEX_DIGEST.match(value):
            raise ValueError("board hash must be 64 lowercase hex chars")
        return value

    @classmethod
    def open(cls, player1: str, session_id: int) -> "GameRecord":
        """Build a fresh record in setup with the second seat open."""
        return cls(player1=player1, player2=player1, session_id=session_id)

    # ── Seats ─────────────────────────────────────────────────

    def seat_open(self) -> bool:
        return self.player2 == self.player1

    def player(self, side: int) -> str:
        return self.player1 if side == 1 else self.player2

    @property
    def shooter(self) -> str:
        """Address of the side whose turn it is to act."""
        return self.player(self.turn)

    @property
    def defender(self) -> str:
        """Address of the side that owes the report."""
        return self.player(self.other(self.turn))

    @staticmethod
    def other(side: int) -> int:
        return 2 if side == 1 else 1

    # ── Side-indexed counters ─────────────────────────────────

    def hits(self, side: int) -> int:
        return self.p1_hits if side == 1 else self.p2_hits

    def add_hit(self, side: int) -> None:
        if side == 1:
            self.p1_hits += 1
        else:
            self.p2_hits += 1

    def turns_taken(self, side: int) -> int:
        return self.p1_turns_taken if side == 1 else self.p2_turns_taken

    def add_turn(self, side: int) -> None:
        if side == 1:
            self.p1_turns_taken += 1
        else:
            self.p2_turns_taken += 1

    def sonar_used(self, side: int) -> bool:
        return self.p1_sonar_used if side == 1 else self.p2_sonar_used

    def mark_sonar_used(self, side: int) -> None:
        if side == 1:
            self.p1_sonar_used = True
        else:
            self.p2_sonar_used = True

    def board_hash(self, side: int) -> str:
        return self.board_hash1 if side == 1 else self.board_hash2

    def set_board_hash(self, side: int, digest: str) -> None:
        if side == 1:
            self.board_hash1 = digest
        else:
            self.board_hash2 = digest

    def toggle_turn(self) -> None:
        self.turn = self.other(self.turn)
