"""
Unit tests for bracket JSON encoding.
"""

import json

import pytest

from pentascore.bracket import (
    BracketError,
    MatchResult,
    advance_winner,
    bracket_to_dict,
    deserialize_bracket,
    generate_bracket,
    serialize_bracket,
)


class TestSerializeBracket:
    """Tests for serialize_bracket/deserialize_bracket."""

    def test_round_trip_fresh(self, bracket_5):
        assert deserialize_bracket(serialize_bracket(bracket_5)) == bracket_5

    def test_round_trip_partially_resolved(self, bracket_8):
        bracket = advance_winner(bracket_8, MatchResult("R1-M0", "a1", 15, 7))
        bracket = advance_winner(bracket, MatchResult("R1-M1", "a5", 12, 15))
        restored = deserialize_bracket(serialize_bracket(bracket))
        assert restored == bracket
        assert restored.generated_at == bracket.generated_at

    def test_round_trip_with_placements(self, make_seeds):
        bracket = generate_bracket("evt", make_seeds(1))
        restored = deserialize_bracket(serialize_bracket(bracket))
        assert restored.placements == {"a1": 1}

    def test_restored_bracket_accepts_results(self, bracket_8):
        restored = deserialize_bracket(serialize_bracket(bracket_8))
        updated = advance_winner(restored, MatchResult("R1-M0", "a8", 10, 15))
        assert updated.rounds[1][0].athlete1_id == "a8"

    def test_camel_case_keys(self, bracket_5):
        data = json.loads(serialize_bracket(bracket_5))
        assert data["eventId"] == "evt-5"
        assert data["tableauSize"] == 8
        assert data["numCompetitors"] == 5
        assert data["placements"] is None
        assert data["generatedAt"].startswith("2026-05-17T09:30:00")

        match = data["rounds"][0][0]
        assert match["matchId"] == "R1-M0"
        assert match["isBye"] is True
        assert match["winnerId"] == "a1"
        assert match["winnerSeed"] == 1
        assert match["feederMatch1Id"] is None
        assert data["rounds"][1][0]["feederMatch2Id"] == "R1-M1"

    def test_to_dict_is_json_ready(self, bracket_8):
        data = bracket_to_dict(bracket_8)
        assert json.loads(json.dumps(data)) == data


class TestDeserializeErrors:
    """Malformed payloads raise BracketError rather than returning junk."""

    def test_not_json(self):
        with pytest.raises(BracketError, match="not valid JSON"):
            deserialize_bracket("{not json")

    def test_not_an_object(self):
        with pytest.raises(BracketError):
            deserialize_bracket("[1, 2, 3]")

    def test_missing_key(self, bracket_5):
        data = json.loads(serialize_bracket(bracket_5))
        del data["tableauSize"]
        with pytest.raises(BracketError, match="tableauSize"):
            deserialize_bracket(json.dumps(data))

    def test_empty_rounds(self, bracket_5):
        data = json.loads(serialize_bracket(bracket_5))
        data["rounds"] = []
        with pytest.raises(BracketError, match="rounds"):
            deserialize_bracket(json.dumps(data))

    def test_bad_timestamp(self, bracket_5):
        data = json.loads(serialize_bracket(bracket_5))
        data["generatedAt"] = "yesterday"
        with pytest.raises(BracketError, match="generatedAt"):
            deserialize_bracket(json.dumps(data))

    def test_non_integer_placement(self, make_seeds):
        data = json.loads(serialize_bracket(generate_bracket("evt", make_seeds(1))))
        data["placements"] = {"a1": "first"}
        with pytest.raises(BracketError, match="placements"):
            deserialize_bracket(json.dumps(data))

    @pytest.mark.parametrize("key", ["tableauSize", "numCompetitors"])
    def test_string_size_rejected(self, bracket_5, key):
        data = json.loads(serialize_bracket(bracket_5))
        data[key] = str(data[key])
        with pytest.raises(BracketError, match=key):
            deserialize_bracket(json.dumps(data))

    @pytest.mark.parametrize("key", ["roundNumber", "matchPosition", "winnerSeed"])
    def test_match_int_fields_checked(self, bracket_5, key):
        data = json.loads(serialize_bracket(bracket_5))
        data["rounds"][0][0][key] = "1"
        with pytest.raises(BracketError, match=key):
            deserialize_bracket(json.dumps(data))

    def test_non_finite_score_rejected(self, bracket_5):
        data = json.loads(serialize_bracket(bracket_5))
        data["rounds"][0][0]["score1"] = float("nan")
        with pytest.raises(BracketError, match="score1"):
            deserialize_bracket(json.dumps(data))

    def test_match_missing_id(self, bracket_5):
        data = json.loads(serialize_bracket(bracket_5))
        del data["rounds"][0][0]["matchId"]
        with pytest.raises(BracketError, match="matchId"):
            deserialize_bracket(json.dumps(data))
