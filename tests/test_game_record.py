# Area: Engine Tests
"""Tests for GameRecord and commitment helpers."""

import pytest
from pydantic import ValidationError
from naval_referee._engine.enums import GameStatus
from naval_referee._engine.record import GameRecord, ZERO_HASH, normalize_commitment


class TestNormalizeCommitment:
    """Tests for normalize_commitment()."""

    def test_bytes(self):
        assert normalize_commitment(bytes(range(32))) == bytes(range(32)).hex()

    def test_hex_with_prefix_and_case(self):
        assert normalize_commitment("0xABCD" + "00" * 30) == "abcd" + "00" * 30

    def test_zero_digest_is_still_a_digest(self):
        assert normalize_commitment(bytes(32)) == ZERO_HASH

    @pytest.mark.parametrize("value", [b"\x01" * 31, b"\x01" * 33, "12", "g" * 64, 42, None])
    def test_rejects_non_digests(self, value):
        assert normalize_commitment(value) is None


class TestGameRecord:
    """Tests for the record model and its side helpers."""

    def test_open_record(self):
        record = GameRecord.open("alice", session_id=3)
        assert record.seat_open()
        assert record.session_id == 3
        assert record.status == GameStatus.CREATED

    def test_shooter_and_defender_follow_turn(self):
        record = GameRecord(player1="alice", player2="bob", session_id=1)
        assert (record.shooter, record.defender) == ("alice", "bob")
        record.toggle_turn()
        assert (record.shooter, record.defender) == ("bob", "alice")

    def test_side_counters(self):
        record = GameRecord(player1="alice", player2="bob", session_id=1)
        record.add_hit(2)
        record.add_turn(1)
        record.mark_sonar_used(2)
        assert (record.p1_hits, record.p2_hits) == (0, 1)
        assert (record.p1_turns_taken, record.p2_turns_taken) == (1, 0)
        assert record.sonar_used(2) and not record.sonar_used(1)

    def test_json_roundtrip(self):
        record = GameRecord(
            player1="alice", player2="bob", session_id=2, status=GameStatus.IN_PROGRESS,
            board_hash1="11" * 32, board_hash2="22" * 32, boards_committed=2,
        )
        restored = GameRecord.model_validate_json(record.model_dump_json())
        assert restored == record
        assert restored.status is GameStatus.IN_PROGRESS

    def test_status_serialized_as_integer(self):
        record = GameRecord.open("alice", session_id=1)
        assert '"status":0' in record.model_dump_json()

    @pytest.mark.parametrize("field, value", [
        ("turn", 3),
        ("last_shot_x", 10),
        ("last_sonar_count", 10),
        ("boards_committed", 3),
        ("board_hash1", "xyz"),
    ])
    def test_out_of_range_fields_rejected(self, field, value):
        with pytest.raises(ValidationError):
            GameRecord(player1="alice", player2="bob", session_id=1, **{field: value})

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            GameRecord(player1="alice", player2="bob", session_id=1, stake=100)

    @pytest.mark.parametrize("field, value", [
        ("last_shot_x", 3.5),
        ("turn", 3),
        ("board_hash2", "00"),
    ])
    def test_invalid_assignment_rejected(self, field, value):
        record = GameRecord.open("alice", session_id=1)
        with pytest.raises(ValidationError):
            setattr(record, field, value)

    def test_assigned_record_loads_back(self):
        record = GameRecord.open("alice", session_id=1)
        record.last_shot_x = 7
        record.add_hit(2)
        assert GameRecord.model_validate_json(record.model_dump_json()) == record
