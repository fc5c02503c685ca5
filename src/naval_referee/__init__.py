"""
naval_referee — Authenticated battleship match engine
=====================================================

Arbitrates two-player battleship matches between parties who keep
their boards private: each side commits a board digest, shots and
sonar scans alternate, the defender reports results, and 17 hits
let a side claim victory. A hub is notified when play starts and ends.

Quick Start:
    from naval_referee import BattleshipReferee, ContractStorage, MemoryStore
    referee = BattleshipReferee(ContractStorage(MemoryStore()))
    game_id = referee.new_game("alice")
    referee.join_game(game_id, "bob")

Persistent Storage:
    from naval_referee import SqliteStore
    storage = ContractStorage(SqliteStore("naval_referee.db"))

Command Line:
    python -m naval_referee --as alice new-game alice
"""

from ._engine import (
    BattleshipReferee,
    GameRecord,
    GameStatus,
    GamePhase,
    ZERO_HASH,
    Store,
    MemoryStore,
    SqliteStore,
    ContractStorage,
    Authorizer,
    MockAllAuths,
    SignerSetAuthorizer,
    HubCall,
    HubNotifier,
    NullHubNotifier,
    RecordingHubNotifier,
    LoggingHubNotifier,
    OutboxHubNotifier,
    build_game_snapshot,
    derive_phase,
    game_id_to_code,
    code_to_game_id,
)
from .errors import (
    NavalRefereeError,
    ContractError,
    UnauthorizedError,
    GameNotFoundError,
    HubCallError,
    InvariantViolationError,
)
from .types import GameView, HubEnvelope

__all__ = [
    # Engine
    "BattleshipReferee",
    "GameRecord",
    "GameStatus",
    "GamePhase",
    "ZERO_HASH",
    # Storage
    "Store",
    "MemoryStore",
    "SqliteStore",
    "ContractStorage",
    # Authorization
    "Authorizer",
    "MockAllAuths",
    "SignerSetAuthorizer",
    # Hub
    "HubCall",
    "HubNotifier",
    "NullHubNotifier",
    "RecordingHubNotifier",
    "LoggingHubNotifier",
    "OutboxHubNotifier",
    # Views
    "build_game_snapshot",
    "derive_phase",
    "game_id_to_code",
    "code_to_game_id",
    "GameView",
    "HubEnvelope",
    # Errors
    "NavalRefereeError",
    "ContractError",
    "UnauthorizedError",
    "GameNotFoundError",
    "HubCallError",
    "InvariantViolationError",
]
__version__ = "1.0.0"
