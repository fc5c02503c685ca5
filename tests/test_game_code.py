# Area: Engine Tests
"""Tests for short game codes."""

import pytest
from naval_referee._engine.game_code import code_to_game_id, game_id_to_code


class TestGameCode:
    """Tests for game_id_to_code() / code_to_game_id()."""

    def test_first_game(self):
        assert game_id_to_code(1) == "1DJ1"

    def test_codes_are_at_least_four_chars(self):
        assert all(len(game_id_to_code(i)) >= 4 for i in range(1, 500))

    def test_codes_avoid_ambiguous_letters(self):
        codes = "".join(game_id_to_code(i) for i in range(1, 5000))
        assert not set(codes) & {"I", "L", "O"}

    @pytest.mark.parametrize("game_id", [1, 2, 31, 32, 1000, 123456])
    def test_decode_inverts_encode(self, game_id):
        assert code_to_game_id(game_id_to_code(game_id)) == game_id

    def test_decode_is_case_and_space_insensitive(self):
        assert code_to_game_id("  1dj1 ") == 1

    @pytest.mark.parametrize("code", ["1IJ1", "ABC!", "0", ""])
    def test_invalid_codes(self, code):
        assert code_to_game_id(code) is None
