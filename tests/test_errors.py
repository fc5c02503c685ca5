# Area: Shared Tests
"""Tests for the exception hierarchy and rejection blocks."""

from naval_referee import BattleshipReferee, ContractStorage, MemoryStore
from naval_referee.errors import (
    ContractError,
    GameNotFoundError,
    HubCallError,
    InvariantViolationError,
    NavalRefereeError,
    UnauthorizedError,
)
import pytest


class TestHierarchy:
    def test_all_contract_errors_share_base(self):
        for cls in (UnauthorizedError, GameNotFoundError, HubCallError, InvariantViolationError):
            assert issubclass(cls, ContractError)
        assert issubclass(ContractError, NavalRefereeError)

    def test_message_is_string_form(self):
        assert str(ContractError("not your turn")) == "not your turn"
        assert str(GameNotFoundError(3)) == "game not found"


class TestContext:
    """Rejections raised by the referee carry operation context."""

    def test_context_attached(self):
        referee = BattleshipReferee(ContractStorage(MemoryStore()))
        game_id = referee.new_game("alice")
        with pytest.raises(ContractError) as exc_info:
            referee.take_shot(game_id, "alice", 3, 4)
        err = exc_info.value
        assert err.operation == "take_shot"
        assert err.game_id == game_id
        assert err.arguments == {"game_id": game_id, "player": "alice", "x": 3, "y": 4}

    def test_with_context_keeps_existing_values(self):
        err = ContractError("x", operation="join_game", game_id=1)
        err.with_context("other", 2, {"a": 1})
        assert (err.operation, err.game_id, err.arguments) == ("join_game", 1, {"a": 1})


class TestFormatErrorLog:
    """Tests for format_error_log()."""

    def test_block_contains_reason_and_arguments(self):
        err = ContractError(
            "not your turn", operation="take_shot", game_id=1,
            args={"player": "bob", "x": 0, "y": 0},
        )
        block = err.format_error_log()
        assert "OPERATION REJECTED" in block
        assert "PRECONDITION_FAILED" in block
        assert "take_shot" in block
        assert "not your turn" in block
        assert '"player": "bob"' in block

    def test_details_listed(self):
        err = InvariantViolationError(["turn=3 is not a side"], operation="report_result")
        block = err.format_error_log()
        assert "INVARIANT_VIOLATION" in block
        assert "• turn=3 is not a side" in block

    def test_bytes_arguments_render(self):
        err = ContractError("invalid board hash", operation="commit_board", args={"board_hash": b"\x00"})
        assert "board_hash" in err.format_error_log()

    def test_hub_error_details_cause(self):
        err = HubCallError("start_game", ConnectionError("down"))
        assert "ConnectionError: down" in err.format_error_log()
