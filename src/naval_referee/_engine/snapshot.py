# Area: Engine
"""
naval_referee._engine.snapshot — Phase, invariants and snapshots
================================================================

Derives the coarse phase of a record, checks the global invariants
that every committed transition must preserve, and builds
serializable snapshots for display and logging.
"""

from typing import List, Optional

from ..types import GameView
from .enums import GamePhase, GameStatus, SONAR_MIN_TURNS
from .game_code import game_id_to_code
from .record import GameRecord, is_zero_hash


def derive_phase(record: GameRecord) -> GamePhase:
    """Map status and await flags to a phase."""
    if record.status == GameStatus.CREATED:
        return GamePhase.SETUP
    if record.status == GameStatus.COMPLETED:
        return GamePhase.DONE
    if record.awaiting_report:
        return GamePhase.AWAIT_SHOT_REPORT
    if record.awaiting_sonar:
        return GamePhase.AWAIT_SONAR_REPORT
    return GamePhase.ACTIVE


def check_invariants(record: GameRecord, previous: Optional[GameRecord] = None) -> List[str]:
    """
    Check the global invariants of a match record.

    Args:
        record: The record about to be persisted
        previous: The record as loaded, for monotonicity checks

    Returns:
        List of human-readable violations (empty if none)
    """
    violations = []

    committed = (not is_zero_hash(record.board_hash1)) + (not is_zero_hash(record.board_hash2))
    if record.boards_committed != committed:
        violations.append(
            f"boards_committed={record.boards_committed} but {committed} hash(es) present"
        )

    if record.status == GameStatus.IN_PROGRESS and record.boards_committed != 2:
        violations.append("in progress without both boards committed")
    if record.status == GameStatus.CREATED and record.boards_committed == 2:
        violations.append("both boards committed but game still in setup")

    if record.awaiting_report and record.awaiting_sonar:
        violations.append("awaiting both a shot report and a sonar report")

    if (record.awaiting_report or record.awaiting_sonar) and record.status != GameStatus.IN_PROGRESS:
        violations.append("awaiting a report outside of play")

    if record.turn not in (1, 2):
        violations.append(f"turn={record.turn} is not a side")

    for side in (1, 2):
        if record.sonar_used(side) and record.turns_taken(side) < SONAR_MIN_TURNS + 1:
            violations.append(f"player {side} used sonar before {SONAR_MIN_TURNS} actions")

    if previous is not None:
        if record.status < previous.status:
            violations.append(f"status went back from {previous.status} to {record.status}")
        if previous.status == GameStatus.COMPLETED and record != previous:
            violations.append("completed game was modified")
        for side in (1, 2):
            if previous.sonar_used(side) and not record.sonar_used(side):
                violations.append(f"player {side} sonar privilege restored")

    return violations


def build_game_snapshot(game_id: int, record: GameRecord) -> GameView:
    """Build a JSON-safe view of a match."""
    phase = derive_phase(record)
    return {
        "game_id": game_id,
        "game_code": game_id_to_code(game_id),
        "phase": phase.value,
        "status": int(record.status),
        "player1": record.player1,
        "player2": None if record.seat_open() else record.player2,
        "turn": record.turn,
        "to_act": _to_act(record, phase),
        "boards_committed": record.boards_committed,
        "p1_hits": record.p1_hits,
        "p2_hits": record.p2_hits,
        "p1_turns_taken": record.p1_turns_taken,
        "p2_turns_taken": record.p2_turns_taken,
        "p1_sonar_used": record.p1_sonar_used,
        "p2_sonar_used": record.p2_sonar_used,
        "last_shot": [record.last_shot_x, record.last_shot_y],
        "sonar_center": [record.sonar_center_x, record.sonar_center_y],
        "last_sonar_count": record.last_sonar_count,
    }


def _to_act(record: GameRecord, phase: GamePhase) -> Optional[str]:
    """Address expected to make the next move, if a single one is."""
    if phase in (GamePhase.AWAIT_SHOT_REPORT, GamePhase.AWAIT_SONAR_REPORT):
        return record.defender
    if phase == GamePhase.ACTIVE:
        return record.shooter
    return None
