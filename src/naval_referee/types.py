"""
naval_referee.types — TypedDict schemas for views and hub envelopes
====================================================================

Documents the exact structure of the dictionaries the package hands
out: match snapshots (``build_game_snapshot`` / ``naval-referee show``)
and hub envelopes (``LoggingHubNotifier`` / ``OutboxHubNotifier``).

Use __annotations__ to inspect fields:

    >>> HubEnvelope.__annotations__["function"]
    <class 'str'>
"""

from typing import Any, List, Optional, TypedDict


class GameView(TypedDict):
    """Snapshot of one match.

    Fields
    ------
    game_id : int
        Numeric match id (also the hub session id).
    game_code : str
        Short code for the id, e.g. "1DJ1" for game 1.
    phase : str
        One of "setup", "active", "await_shot_report",
        "await_sonar_report", "done".
    status : int
        0 = created, 1 = in progress, 2 = completed.
    player2 : Optional[str]
        None while the second seat is open.
    to_act : Optional[str]
        Address expected to move next (shooter, or defender owing
        a report); None in setup and after completion.
    """
    game_id: int
    game_code: str
    phase: str
    status: int
    player1: str
    player2: Optional[str]
    turn: int
    to_act: Optional[str]
    boards_committed: int
    p1_hits: int
    p2_hits: int
    p1_turns_taken: int
    p2_turns_taken: int
    p1_sonar_used: bool
    p2_sonar_used: bool
    last_shot: List[int]
    sonar_center: List[int]
    last_sonar_count: int


class HubEnvelope(TypedDict):
    """A hub call as written to the outbox.

    Fields
    ------
    function : str
        "start_game" or "end_game".
    args : List[Any]
        start_game: [contract_address, session_id, player1, player2, 0, 0]
        end_game:   [session_id, player1_won]
    """
    protocol: str
    message_id: str
    tx_id: str
    timestamp: str
    sender: str
    recipient: str
    function: str
    args: List[Any]
