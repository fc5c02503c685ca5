# Area: Engine
"""
naval_referee._engine.store — Keyed store and contract storage facade
=====================================================================

A Store holds string values under (namespace, key). Writes made inside
``transaction()`` are staged and only become visible to other callers
when the block exits normally; an exception discards them. Transactions
on one store are serialized; backends shared between processes take
their own lock in ``_begin()``.

ContractStorage layers typed access to the hub address, the game
counter, and match records on top of any Store backend.
"""

from __future__ import annotations
import json
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

from ..errors import GameNotFoundError
from .enums import DataKey, StorageNamespace
from .record import GameRecord

logger = logging.getLogger("naval_referee.engine.store")

StoreKey = Tuple[StorageNamespace, str]


class Store(ABC):
    """
    Abstract keyed store with two logical namespaces.

    Subclasses implement the committed reads/writes and may hook the
    transaction boundary; staging and the in-process lock are shared here.
    """

    def __init__(self):
        self._staged: Optional[Dict[StoreKey, str]] = None
        self._depth = 0
        self._owner: Optional[int] = None
        self._lock = threading.RLock()

    @abstractmethod
    def _read(self, namespace: StorageNamespace, key: str) -> Optional[str]:
        """Read a committed value."""

    @abstractmethod
    def _write_all(self, writes: Dict[StoreKey, str]) -> None:
        """Atomically persist a batch of writes."""

    def _begin(self) -> None:
        """Called when the outermost transaction opens."""

    def _commit(self, writes: Dict[StoreKey, str]) -> None:
        """Persist the staged writes of the outermost transaction."""
        if writes:
            self._write_all(writes)

    def _rollback(self) -> None:
        """Called when the outermost transaction is abandoned."""

    def in_transaction(self) -> bool:
        """True if the calling thread holds the open transaction."""
        return self._owner == threading.get_ident()

    def get(self, namespace: StorageNamespace, key: str) -> Optional[str]:
        if self.in_transaction() and (namespace, key) in self._staged:
            return self._staged[(namespace, key)]
        return self._read(namespace, key)

    def has(self, namespace: StorageNamespace, key: str) -> bool:
        return self.get(namespace, key) is not None

    def set(self, namespace: StorageNamespace, key: str, value: str) -> None:
        if self.in_transaction():
            self._staged[(namespace, key)] = value
        else:
            self._write_all({(namespace, key): value})

    @contextmanager
    def transaction(self) -> Iterator["Store"]:
        """
        Stage writes until the outermost block exits.

        Nested blocks join the outer transaction. Other threads block
        until the outermost block has committed or rolled back.
        """
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._begin()
                self._staged = {}
                self._owner = threading.get_ident()
            self._depth += 1
            try:
                yield self
            except BaseException:
                self._depth -= 1
                if outermost:
                    logger.debug(f"Rolling back {len(self._staged or {})} staged write(s)")
                    self._staged, self._owner = None, None
                    self._rollback()
                raise
            self._depth -= 1
            if outermost:
                writes = self._staged or {}
                self._staged, self._owner = None, None
                self._commit(writes)
                if writes:
                    logger.debug(f"Committed {len(writes)} write(s)")


class MemoryStore(Store):
    """Dict-backed store for tests and embedding."""

    def __init__(self):
        super().__init__()
        self._data: Dict[StoreKey, str] = {}

    def _read(self, namespace: StorageNamespace, key: str) -> Optional[str]:
        return self._data.get((namespace, key))

    def _write_all(self, writes: Dict[StoreKey, str]) -> None:
        self._data.update(writes)

    def __len__(self) -> int:
        return len(self._data)


class ContractStorage:
    """
    Typed facade over a Store.

    Singletons (hub address, game counter) live in the instance
    namespace; match records live in the persistent namespace keyed
    by ``Game(<id>)``.
    """

    def __init__(self, store: Store):
        self.store = store

    # ── Singletons ────────────────────────────────────────────

    def has_hub(self) -> bool:
        return self.store.has(StorageNamespace.INSTANCE, DataKey.HUB)

    def get_hub(self) -> Optional[str]:
        raw = self.store.get(StorageNamespace.INSTANCE, DataKey.HUB)
        return json.loads(raw) if raw is not None else None

    def set_hub(self, hub_address: str) -> None:
        self.store.set(StorageNamespace.INSTANCE, DataKey.HUB, json.dumps(hub_address))

    def get_game_count(self) -> int:
        raw = self.store.get(StorageNamespace.INSTANCE, DataKey.GAME_COUNT)
        return int(json.loads(raw)) if raw is not None else 0

    def set_game_count(self, count: int) -> None:
        self.store.set(StorageNamespace.INSTANCE, DataKey.GAME_COUNT, json.dumps(count))

    # ── Match records ─────────────────────────────────────────

    def has_game(self, game_id: int) -> bool:
        return self.store.has(StorageNamespace.PERSISTENT, DataKey.game(game_id))

    def load_game(self, game_id: int) -> GameRecord:
        """
        Load a fresh copy of a match record.

        Raises:
            GameNotFoundError: If no record exists under game_id
        """
        raw = self.store.get(StorageNamespace.PERSISTENT, DataKey.game(game_id))
        if raw is None:
            raise GameNotFoundError(game_id)
        return GameRecord.model_validate_json(raw)

    def save_game(self, game_id: int, record: GameRecord) -> None:
        self.store.set(
            StorageNamespace.PERSISTENT, DataKey.game(game_id), record.model_dump_json()
        )

    def transaction(self):
        return self.store.transaction()
