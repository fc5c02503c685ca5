# Area: Engine
"""
Engine - the match state machine and its collaborators.

This package handles:
- Match records and their serialization
- Keyed store backends (memory, SQLite) and the typed storage facade
- The authorization gate
- Hub notifications on match start and end
- Phase derivation, invariant checks and snapshots
"""

from .enums import GameStatus, GamePhase, StorageNamespace, DataKey
from .record import GameRecord, ZERO_HASH, normalize_commitment
from .store import Store, MemoryStore, ContractStorage
from .database import SqliteStore, init_database
from .auth import Authorizer, MockAllAuths, SignerSetAuthorizer
from .hub import (
    HubCall,
    HubNotifier,
    NullHubNotifier,
    RecordingHubNotifier,
    LoggingHubNotifier,
    OutboxHubNotifier,
)
from .referee import BattleshipReferee
from .snapshot import derive_phase, check_invariants, build_game_snapshot
from .game_code import game_id_to_code, code_to_game_id

__all__ = [
    "GameStatus",
    "GamePhase",
    "StorageNamespace",
    "DataKey",
    "GameRecord",
    "ZERO_HASH",
    "normalize_commitment",
    "Store",
    "MemoryStore",
    "ContractStorage",
    "SqliteStore",
    "init_database",
    "Authorizer",
    "MockAllAuths",
    "SignerSetAuthorizer",
    "HubCall",
    "HubNotifier",
    "NullHubNotifier",
    "RecordingHubNotifier",
    "LoggingHubNotifier",
    "OutboxHubNotifier",
    "BattleshipReferee",
    "derive_phase",
    "check_invariants",
    "build_game_snapshot",
    "game_id_to_code",
    "code_to_game_id",
]
