# Area: Engine
"""
naval_referee._engine.referee — Match state machine
===================================================

Arbitrates a two-player battleship match between untrusting parties:

    (none) --new_game-->       SETUP  (seat 2 open)
    SETUP  --join_game-->      SETUP  (seat 2 filled)
    SETUP  --commit_board x2-> ACTIVE
    ACTIVE --take_shot-->      AWAIT_SHOT_REPORT
    ACTIVE --use_sonar-->      AWAIT_SONAR_REPORT
    AWAIT_SHOT_REPORT  --report_result--> ACTIVE (turn toggles)
    AWAIT_SONAR_REPORT --report_sonar-->  ACTIVE (turn toggles)
    ACTIVE --claim_victory-->  DONE

Every mutating operation runs inside one store transaction: it
authorizes the named principal, loads the record, checks phase and
preconditions, mutates its private copy, and saves it (plus any hub
call). Concurrent operations on one store are serialized, and a
failure anywhere aborts the operation with nothing written.

The defender self-reports hits and sonar counts. report_result and
report_sonar are the only places a proof against the defender's
board commitment would need to be checked.
"""

from __future__ import annotations
import functools
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

from pydantic import ValidationError

from ..errors import ContractError, HubCallError, InvariantViolationError
from .auth import Authorizer, MockAllAuths
from .enums import GameStatus, GRID_SIZE, HITS_TO_WIN, MAX_SONAR_COUNT, SONAR_MIN_TURNS
from .hub import (
    END_GAME,
    START_GAME,
    HubNotifier,
    NullHubNotifier,
    end_game_args,
    start_game_args,
)
from .record import GameRecord, is_zero_hash, normalize_commitment
from .snapshot import check_invariants, derive_phase
from .store import ContractStorage

logger = logging.getLogger("naval_referee.engine.referee")

F = TypeVar("F", bound=Callable[..., Any])
HubMessage = Tuple[str, Tuple[Any, ...]]


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ContractError(message)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _in_grid(x: int, y: int) -> bool:
    return _is_int(x) and _is_int(y) and 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE


def _describe(error: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]


def _operation(name: str) -> Callable[[F], F]:
    """
    Run the operation in one store transaction, then attach operation
    context to rejections and log them. A record that fails model
    validation is rejected as an invariant violation.
    """

    def decorator(fn: F) -> F:
        signature = inspect.signature(fn)

        def reject(error: ContractError, args: tuple, kwargs: Dict[str, Any]) -> None:
            bound = signature.bind(*args, **kwargs)
            arguments = {k: v for k, v in bound.arguments.items() if k != "self"}
            error.with_context(name, arguments.get("game_id"), arguments)
            logger.warning(f"Rejected {name}: {error}")

        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            try:
                with self.storage.transaction():
                    return fn(self, *args, **kwargs)
            except ContractError as e:
                reject(e, (self,) + args, kwargs)
                raise
            except ValidationError as e:
                error = InvariantViolationError(_describe(e))
                reject(error, (self,) + args, kwargs)
                raise error from e

        return wrapper  # type: ignore[return-value]

    return decorator


class BattleshipReferee:
    """
    Authenticated state machine over a keyed store.

    Attributes:
        storage: Typed facade over the store holding all match records
        authorizer: Gate asserting the named principal authorized a call
        hub: Notifier receiving start_game / end_game
        contract_address: Address reported to the hub in start_game
    """

    def __init__(
        self,
        storage: ContractStorage,
        authorizer: Optional[Authorizer] = None,
        hub: Optional[HubNotifier] = None,
        contract_address: str = "naval-referee",
    ):
        self.storage = storage
        self.authorizer = authorizer or MockAllAuths()
        self.hub = hub or NullHubNotifier()
        self.contract_address = contract_address

    # ══════════════════════════════════════════════════════════
    # SETUP
    # ══════════════════════════════════════════════════════════

    @_operation("initialize")
    def initialize(self, hub: str) -> None:
        """Set the hub address and reset the game counter. Callable once."""
        _require(not self.storage.has_hub(), "already initialized")
        with self.storage.transaction():
            self.storage.set_hub(hub)
            self.storage.set_game_count(0)
        logger.info(f"Initialized with hub {hub}")

    @_operation("new_game")
    def new_game(self, player1: str) -> int:
        """
        Open a new match with player1 in seat 1 and seat 2 open.

        Returns:
            The new game id, which is also the hub session id
        """
        self.authorizer.require_auth(player1)
        game_id = self.storage.get_game_count() + 1
        record = GameRecord.open(player1, session_id=game_id)
        self._check(record, None)
        with self.storage.transaction():
            self.storage.save_game(game_id, record)
            self.storage.set_game_count(game_id)
        logger.info(f"[game {game_id}] Created by {player1}")
        return game_id

    @_operation("join_game")
    def join_game(self, game_id: int, player2: str) -> None:
        """Fill the open second seat."""
        self.authorizer.require_auth(player2)
        record, previous = self._load(game_id)
        _require(record.status == GameStatus.CREATED, "game not in setup phase")
        _require(record.seat_open(), "player 2 already joined")
        _require(player2 != record.player1, "cannot join your own game")

        record.player2 = player2
        self._save(game_id, previous, record)
        logger.info(f"[game {game_id}] {player2} joined")

    @_operation("commit_board")
    def commit_board(self, game_id: int, player: str, board_hash: Union[bytes, str]) -> None:
        """
        Commit a player's board digest. The second commit starts play
        and notifies the hub with start_game.
        """
        self.authorizer.require_auth(player)
        record, previous = self._load(game_id)
        _require(record.status == GameStatus.CREATED, "game not in setup phase")
        digest = normalize_commitment(board_hash)
        _require(digest is not None and not is_zero_hash(digest), "invalid board hash")

        # While seat 2 is open, player2 == player1; that address is player 1 only.
        if player == record.player1:
            side = 1
        elif not record.seat_open() and player == record.player2:
            side = 2
        else:
            raise ContractError("not a player in this game")
        _require(is_zero_hash(record.board_hash(side)), "board already committed")

        record.set_board_hash(side, digest)
        record.boards_committed += 1
        logger.info(f"[game {game_id}] Player {side} committed board")

        hub_message = None
        if record.boards_committed == 2:
            record.status = GameStatus.IN_PROGRESS
            hub_message = (
                START_GAME,
                start_game_args(
                    self.contract_address, record.session_id, record.player1, record.player2
                ),
            )
        self._save(game_id, previous, record, hub_message)

    # ══════════════════════════════════════════════════════════
    # PLAY
    # ══════════════════════════════════════════════════════════

    @_operation("take_shot")
    def take_shot(self, game_id: int, player: str, x: int, y: int) -> None:
        """Fire at (x, y). The defender then owes report_result."""
        self.authorizer.require_auth(player)
        record, previous = self._load(game_id)
        _require(record.status == GameStatus.IN_PROGRESS, "game not in progress")
        _require(not record.awaiting_report, "waiting for hit report")
        _require(not record.awaiting_sonar, "waiting for sonar report")
        _require(_in_grid(x, y), "shot out of bounds")
        _require(player == record.shooter, "not your turn")

        record.last_shot_x = x
        record.last_shot_y = y
        record.awaiting_report = True
        record.add_turn(record.turn)
        self._save(game_id, previous, record)
        logger.info(f"[game {game_id}] Player {record.turn} fired at ({x}, {y})")

    @_operation("report_result")
    def report_result(self, game_id: int, player: str, hit: bool) -> None:
        """Defender reports whether the outstanding shot hit."""
        self.authorizer.require_auth(player)
        record, previous = self._load(game_id)
        _require(record.status == GameStatus.IN_PROGRESS, "game not in progress")
        _require(record.awaiting_report, "no shot to report on")
        _require(player == record.defender, "wrong player reporting")

        shooter_side = record.turn
        if hit:
            record.add_hit(shooter_side)
        record.awaiting_report = False
        record.toggle_turn()
        self._save(game_id, previous, record)
        logger.info(
            f"[game {game_id}] Shot by player {shooter_side} "
            f"{'hit' if hit else 'missed'} ({record.hits(shooter_side)} hits)"
        )

    @_operation("use_sonar")
    def use_sonar(self, game_id: int, player: str, center_x: int, center_y: int) -> None:
        """
        Spend the one-per-match sonar on the 3x3 area around the center.
        Allowed once the player has taken at least 3 actions. The turn
        passes only when the defender reports the count.
        """
        self.authorizer.require_auth(player)
        record, previous = self._load(game_id)
        _require(record.status == GameStatus.IN_PROGRESS, "game not in progress")
        _require(not record.awaiting_report, "waiting for hit report")
        _require(not record.awaiting_sonar, "waiting for sonar report")
        _require(_in_grid(center_x, center_y), "sonar out of bounds")
        _require(player == record.shooter, "not your turn")

        side = record.turn
        _require(not record.sonar_used(side), "sonar already used")
        _require(record.turns_taken(side) >= SONAR_MIN_TURNS, "sonar not available this turn")

        record.mark_sonar_used(side)
        record.add_turn(side)
        record.sonar_center_x = center_x
        record.sonar_center_y = center_y
        record.awaiting_sonar = True
        self._save(game_id, previous, record)
        logger.info(f"[game {game_id}] Player {side} used sonar at ({center_x}, {center_y})")

    @_operation("report_sonar")
    def report_sonar(self, game_id: int, player: str, count: int) -> None:
        """Defender reports how many ship cells the scan covered."""
        self.authorizer.require_auth(player)
        record, previous = self._load(game_id)
        _require(record.status == GameStatus.IN_PROGRESS, "game not in progress")
        _require(record.awaiting_sonar, "no sonar to report on")
        _require(_is_int(count) and 0 <= count <= MAX_SONAR_COUNT, "invalid sonar count")
        _require(player == record.defender, "wrong player reporting")

        record.last_sonar_count = count
        record.awaiting_sonar = False
        record.toggle_turn()
        self._save(game_id, previous, record)
        logger.info(f"[game {game_id}] Sonar reported {count} ship cell(s)")

    @_operation("claim_victory")
    def claim_victory(self, game_id: int, player: str) -> None:
        """
        End the match in the claimer's favour once they have 17 hits.
        Notifies the hub with end_game. Accepted while a shot or sonar
        report is still owed; the outstanding request is dropped.
        """
        self.authorizer.require_auth(player)
        record, previous = self._load(game_id)
        _require(record.status == GameStatus.IN_PROGRESS, "game not in progress")

        if player == record.player1:
            side = 1
        elif player == record.player2:
            side = 2
        else:
            raise ContractError("not a player")
        _require(record.hits(side) >= HITS_TO_WIN, "not enough hits to win")

        record.status = GameStatus.COMPLETED
        record.awaiting_report = False
        record.awaiting_sonar = False
        self._save(game_id, previous, record, (END_GAME, end_game_args(record.session_id, side == 1)))
        logger.info(f"[game {game_id}] Player {side} ({player}) won")

    # ══════════════════════════════════════════════════════════
    # READS
    # ══════════════════════════════════════════════════════════

    def sonar_available(self, game_id: int, player: str) -> bool:
        """True iff player could call use_sonar right now."""
        record = self.storage.load_game(game_id)
        if record.status != GameStatus.IN_PROGRESS:
            return False
        if record.awaiting_report or record.awaiting_sonar:
            return False
        if player == record.player1:
            side = 1
        elif player == record.player2:
            side = 2
        else:
            return False
        if record.turn != side or record.sonar_used(side):
            return False
        return record.turns_taken(side) >= SONAR_MIN_TURNS

    def get_game(self, game_id: int) -> GameRecord:
        """Return a detached copy of the match record."""
        return self.storage.load_game(game_id)

    def game_count(self) -> int:
        return self.storage.get_game_count()

    # ══════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════

    def _load(self, game_id: int) -> Tuple[GameRecord, GameRecord]:
        """Load the record twice: a working copy and the original."""
        record = self.storage.load_game(game_id)
        return record, record.model_copy(deep=True)

    def _check(self, record: GameRecord, previous: Optional[GameRecord]) -> None:
        violations = check_invariants(record, previous)
        if violations:
            logger.error(f"Invariant violation: {violations}")
            raise InvariantViolationError(violations)

    def _save(
        self,
        game_id: int,
        previous: GameRecord,
        record: GameRecord,
        hub_message: Optional[HubMessage] = None,
    ) -> None:
        """Check invariants, then persist and notify as one unit."""
        self._check(record, previous)
        with self.storage.transaction():
            self.storage.save_game(game_id, record)
            if hub_message is not None:
                self._notify(*hub_message)

        old_phase, new_phase = derive_phase(previous), derive_phase(record)
        if old_phase != new_phase:
            logger.info(f"[game {game_id}] Phase: {old_phase.value} → {new_phase.value}")

    def _notify(self, function: str, args: Tuple[Any, ...]) -> None:
        hub_address = self.storage.get_hub()
        if hub_address is None:
            logger.debug(f"No hub configured, skipping {function}")
            return
        logger.info(f"Notifying hub {hub_address}: {function}{args}")
        try:
            self.hub.invoke(hub_address, function, args)
        except Exception as e:
            raise HubCallError(function, e) from e
