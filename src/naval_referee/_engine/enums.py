# Area: Engine
"""
naval_referee._engine.enums — Match state enums and rule constants
==================================================================

Defines the persisted match status, the derived phase used for
logging and snapshots, and the storage keys of the two namespaces.
"""

from enum import Enum, IntEnum

# Board geometry and match rules
GRID_SIZE = 10
HITS_TO_WIN = 17          # 5 + 4 + 3 + 3 + 2 ship cells
SONAR_MIN_TURNS = 3
MAX_SONAR_COUNT = 9       # 3x3 scan


class GameStatus(IntEnum):
    """
    Persisted match status.

    Transitions are monotone:
    CREATED -> IN_PROGRESS (second board committed)
    IN_PROGRESS -> COMPLETED (victory claimed)
    """
    CREATED = 0
    IN_PROGRESS = 1
    COMPLETED = 2


class GamePhase(Enum):
    """
    Phase derived from status and the two await flags.

    SETUP -> ACTIVE (on second commit_board)
    ACTIVE -> AWAIT_SHOT_REPORT (on take_shot)
    ACTIVE -> AWAIT_SONAR_REPORT (on use_sonar)
    AWAIT_SHOT_REPORT -> ACTIVE (on report_result)
    AWAIT_SONAR_REPORT -> ACTIVE (on report_sonar)
    ACTIVE -> DONE (on claim_victory)
    """
    SETUP = "setup"
    ACTIVE = "active"
    AWAIT_SHOT_REPORT = "await_shot_report"
    AWAIT_SONAR_REPORT = "await_sonar_report"
    DONE = "done"


class StorageNamespace(Enum):
    """Logical namespaces of the keyed store."""
    INSTANCE = "instance"        # singletons: hub address, game counter
    PERSISTENT = "persistent"    # per-match records


class DataKey:
    """Keys used in the store."""
    HUB = "Hub"
    GAME_COUNT = "GameCount"

    @staticmethod
    def game(game_id: int) -> str:
        return f"Game({game_id})"
