"""
naval_referee.errors — Custom exception classes
===============================================

Defines the exception hierarchy for rejected operations.
Every precondition failure raises a ContractError whose string form
is the distinguishing fault message (e.g. "not your turn"). Each
exception stores the operation context for structured logging.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from .error_formatter import format_error_block


class NavalRefereeError(Exception):
    """Base exception for all naval_referee package errors."""
    pass


class ContractError(NavalRefereeError):
    """Raised when an operation violates a precondition.

    The operation aborts atomically; nothing is written to the store
    and no hub call is delivered.
    """

    error_type = "PRECONDITION_FAILED"

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        game_id: Optional[int] = None,
        args: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.operation = operation
        self.game_id = game_id
        self.arguments: Dict[str, Any] = dict(args or {})
        super().__init__(message)

    def with_context(
        self,
        operation: str,
        game_id: Optional[int],
        args: Dict[str, Any],
    ) -> "ContractError":
        """Fill in operation context that was unknown where the error was raised."""
        if self.operation is None:
            self.operation = operation
        if self.game_id is None:
            self.game_id = game_id
        if not self.arguments:
            self.arguments = dict(args)
        return self

    def details(self) -> Optional[List[str]]:
        return None

    def format_error_log(self) -> str:
        return format_error_block(
            error_type=self.error_type,
            operation=self.operation,
            game_id=self.game_id,
            reason=self.message,
            input_payload=self.arguments,
            details=self.details(),
        )


class UnauthorizedError(ContractError):
    """Raised when the named principal did not authorize the invocation."""

    error_type = "UNAUTHORIZED"

    def __init__(self, address: str, **kwargs: Any):
        self.address = address
        super().__init__("unauthorized", **kwargs)

    def details(self) -> Optional[List[str]]:
        return [f"Missing authorization from {self.address}"]


class GameNotFoundError(ContractError):
    """Raised when no record is stored under the requested game id."""

    error_type = "GAME_NOT_FOUND"

    def __init__(self, game_id: int, **kwargs: Any):
        super().__init__("game not found", game_id=game_id, **kwargs)


class HubCallError(ContractError):
    """Raised when the hub notifier fails; the whole operation rolls back."""

    error_type = "HUB_CALL_FAILED"

    def __init__(self, function: str, cause: Exception, **kwargs: Any):
        self.function = function
        self.cause = cause
        super().__init__(f"hub call failed: {function}", **kwargs)

    def details(self) -> Optional[List[str]]:
        return [f"{self.cause.__class__.__name__}: {self.cause}"]


class InvariantViolationError(ContractError):
    """Raised when a transition would persist a record breaking a global invariant."""

    error_type = "INVARIANT_VIOLATION"

    def __init__(self, violations: List[str], **kwargs: Any):
        self.violations = list(violations)
        super().__init__("invariant violated", **kwargs)

    def details(self) -> Optional[List[str]]:
        return self.violations
