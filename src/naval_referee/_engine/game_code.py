# Area: Engine
"""Short alphanumeric game codes that players can read out to each other."""

from typing import Optional

OFFSET = 36 ** 3                                # ensures 4-char minimum
CHARS = "0123456789ABCDEFGHJKMNPQRSTUVWXYZ"     # no I, L, O
BASE = len(CHARS)


def game_id_to_code(game_id: int) -> str:
    n = game_id + OFFSET
    code = ""
    while n > 0:
        code = CHARS[n % BASE] + code
        n //= BASE
    return code or "0"


def code_to_game_id(code: str) -> Optional[int]:
    """Decode a game code; None if it has foreign chars or maps to no game."""
    n = 0
    for ch in code.strip().upper():
        idx = CHARS.find(ch)
        if idx == -1:
            return None
        n = n * BASE + idx
    game_id = n - OFFSET
    return game_id if game_id > 0 else None
