# Area: Engine Tests
"""Randomized operation walks checking the global invariants."""

import random

import pytest
from naval_referee import (
    BattleshipReferee,
    ContractStorage,
    MemoryStore,
    RecordingHubNotifier,
    ContractError,
    GameStatus,
)
from naval_referee._engine.snapshot import check_invariants

PLAYERS = ["alice", "bob", "mallory"]


def random_operation(rng, referee, game_id):
    """Attempt one random operation; return its name and whether it committed."""
    player = rng.choice(PLAYERS)
    coord = lambda: rng.choice([0, 4, 9, 10])  # noqa: E731
    ops = {
        "join_game": lambda: referee.join_game(game_id, player),
        "commit_board": lambda: referee.commit_board(game_id, player, bytes([rng.randint(1, 255)] * 32)),
        "take_shot": lambda: referee.take_shot(game_id, player, coord(), coord()),
        "report_result": lambda: referee.report_result(game_id, player, rng.random() < 0.7),
        "use_sonar": lambda: referee.use_sonar(game_id, player, coord(), coord()),
        "report_sonar": lambda: referee.report_sonar(game_id, player, rng.choice([0, 3, 9, 10])),
        "claim_victory": lambda: referee.claim_victory(game_id, player),
    }
    name = rng.choice(list(ops))
    try:
        ops[name]()
    except ContractError:
        return name, False
    return name, True


class TestRandomWalks:
    """Property checks over seeded random operation sequences."""

    @pytest.mark.parametrize("seed", range(20))
    def test_invariants_hold_after_every_operation(self, seed):
        rng = random.Random(seed)
        hub = RecordingHubNotifier()
        referee = BattleshipReferee(ContractStorage(MemoryStore()), hub=hub)
        referee.initialize("HUB")
        game_id = referee.new_game("alice")

        previous = referee.get_game(game_id)
        pending = None
        for _ in range(1500):
            name, committed = random_operation(rng, referee, game_id)
            game = referee.get_game(game_id)

            assert check_invariants(game, previous) == []
            # status and sonar privileges are monotone
            assert game.status >= previous.status
            assert game.p1_sonar_used >= previous.p1_sonar_used
            assert game.p2_sonar_used >= previous.p2_sonar_used

            if not committed:
                assert game == previous
            elif pending is not None and game.status != GameStatus.COMPLETED:
                # after a shot or scan the only accepted action is the matching report
                expected, shooter_turn = pending
                assert name == expected
                assert game.turn != shooter_turn
            if committed and name in ("take_shot", "use_sonar"):
                pending = ("report_result" if name == "take_shot" else "report_sonar", game.turn)
            elif committed:
                pending = None

            if committed and name == "claim_victory":
                winner_hits = game.p1_hits if game.p1_hits >= 17 else game.p2_hits
                assert winner_hits >= 17

            previous = game

        assert len(hub.calls_to("end_game")) <= 1
        assert len(hub.calls_to("start_game")) <= 1

    def test_turn_toggles_once_per_round(self):
        referee = BattleshipReferee(ContractStorage(MemoryStore()))
        game_id = referee.new_game("alice")
        referee.join_game(game_id, "bob")
        referee.commit_board(game_id, "alice", bytes([1] * 32))
        referee.commit_board(game_id, "bob", bytes([2] * 32))

        turns = [referee.get_game(game_id).turn]
        for i in range(4):
            shooter, defender = ("alice", "bob") if i % 2 == 0 else ("bob", "alice")
            referee.take_shot(game_id, shooter, i, i)
            turns.append(referee.get_game(game_id).turn)
            referee.report_result(game_id, defender, False)
            turns.append(referee.get_game(game_id).turn)
        assert turns == [1, 1, 2, 2, 1, 1, 2, 2, 1]

    def test_game_count_matches_successful_new_games(self):
        referee = BattleshipReferee(ContractStorage(MemoryStore()))
        for i in range(5):
            referee.new_game(f"player{i}")
        assert referee.game_count() == 5
        assert referee.get_game(5).session_id == 5
