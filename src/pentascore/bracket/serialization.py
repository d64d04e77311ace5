"""
JSON encoding for brackets.

Brackets are stored as a single JSON document per event. Keys are
camelCase so the stored document can be read directly by the web
client. Round-tripping through serialize/deserialize reproduces an
equal Bracket.
"""

import json
import math
from datetime import datetime
from numbers import Real
from typing import Any

from pentascore.bracket.engine import BracketError
from pentascore.bracket.models import Bracket, DEMatch

# DEMatch attribute -> JSON key
MATCH_FIELDS = {
    "match_id": "matchId",
    "round_number": "roundNumber",
    "match_position": "matchPosition",
    "bracket_position": "bracketPosition",
    "athlete1_id": "athlete1Id",
    "athlete2_id": "athlete2Id",
    "athlete1_seed": "athlete1Seed",
    "athlete2_seed": "athlete2Seed",
    "athlete1_name": "athlete1Name",
    "athlete2_name": "athlete2Name",
    "winner_id": "winnerId",
    "winner_seed": "winnerSeed",
    "score1": "score1",
    "score2": "score2",
    "is_bye": "isBye",
    "feeder_match1_id": "feederMatch1Id",
    "feeder_match2_id": "feederMatch2Id",
}

REQUIRED_MATCH_KEYS = ("matchId", "roundNumber", "matchPosition", "bracketPosition")

MATCH_INT_KEYS = ("roundNumber", "matchPosition", "bracketPosition")
MATCH_OPTIONAL_INT_KEYS = ("athlete1Seed", "athlete2Seed", "winnerSeed")
MATCH_SCORE_KEYS = ("score1", "score2")


def _require_int(key: str, value: Any, *, optional: bool = False) -> None:
    if optional and value is None:
        return
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise BracketError(f"{key} must be an integer, got {value!r}")


def bracket_to_dict(bracket: Bracket) -> dict[str, Any]:
    """Convert a bracket to a JSON-ready dict."""
    return {
        "eventId": bracket.event_id,
        "tableauSize": bracket.tableau_size,
        "numCompetitors": bracket.participant_count,
        "rounds": [
            [
                {key: getattr(match, attr) for attr, key in MATCH_FIELDS.items()}
                for match in round_matches
            ]
            for round_matches in bracket.rounds
        ],
        "placements": dict(bracket.placements) if bracket.placements is not None else None,
        "generatedAt": bracket.generated_at.isoformat(),
    }


def _match_from_dict(data: Any) -> DEMatch:
    if not isinstance(data, dict):
        raise BracketError(f"Match entry must be an object, got {type(data).__name__}")

    missing = [key for key in REQUIRED_MATCH_KEYS if key not in data]
    if missing:
        raise BracketError(f"Match entry is missing {', '.join(missing)}")

    if not isinstance(data["matchId"], str):
        raise BracketError(f"matchId must be a string, got {data['matchId']!r}")
    for key in MATCH_INT_KEYS:
        _require_int(key, data[key])
    for key in MATCH_OPTIONAL_INT_KEYS:
        _require_int(key, data.get(key), optional=True)
    for key in MATCH_SCORE_KEYS:
        score = data.get(key)
        if score is None:
            continue
        if isinstance(score, bool) or not isinstance(score, Real) or not math.isfinite(score):
            raise BracketError(f"{key} must be a finite number, got {score!r}")

    kwargs = {attr: data.get(key) for attr, key in MATCH_FIELDS.items() if key in data}
    kwargs["is_bye"] = bool(data.get("isBye", False))
    try:
        return DEMatch(**kwargs)
    except TypeError as e:
        raise BracketError(f"Invalid match entry: {e}") from e


def bracket_from_dict(data: Any) -> Bracket:
    """
    Rebuild a bracket from bracket_to_dict() output.

    Raises:
        BracketError: If required keys are missing or have the wrong shape
    """
    if not isinstance(data, dict):
        raise BracketError(f"Bracket document must be an object, got {type(data).__name__}")

    try:
        event_id = data["eventId"]
        tableau_size = data["tableauSize"]
        participant_count = data["numCompetitors"]
        raw_rounds = data["rounds"]
        generated_at = data["generatedAt"]
    except KeyError as e:
        raise BracketError(f"Bracket document is missing {e.args[0]}") from None

    if not isinstance(event_id, str):
        raise BracketError(f"eventId must be a string, got {event_id!r}")
    _require_int("tableauSize", tableau_size)
    _require_int("numCompetitors", participant_count)

    if not isinstance(raw_rounds, list) or not raw_rounds:
        raise BracketError("rounds must be a non-empty list")
    if any(not isinstance(r, list) for r in raw_rounds):
        raise BracketError("Each round must be a list of matches")

    try:
        generated = datetime.fromisoformat(generated_at)
    except (TypeError, ValueError):
        raise BracketError(f"generatedAt is not an ISO timestamp: {generated_at!r}") from None

    placements = data.get("placements")
    if placements is not None:
        if not isinstance(placements, dict):
            raise BracketError("placements must be an object or null")
        for place in placements.values():
            _require_int("placements", place)
        placements = dict(placements)

    return Bracket(
        event_id=event_id,
        tableau_size=tableau_size,
        participant_count=participant_count,
        rounds=[[_match_from_dict(m) for m in round_matches] for round_matches in raw_rounds],
        placements=placements,
        generated_at=generated,
    )


def serialize_bracket(bracket: Bracket) -> str:
    """Encode a bracket as a JSON string."""
    return json.dumps(bracket_to_dict(bracket))


def deserialize_bracket(payload: str) -> Bracket:
    """
    Decode a JSON string produced by serialize_bracket().

    Raises:
        BracketError: If the payload is not valid JSON or not a bracket
    """
    try:
        data = json.loads(payload)
    except (TypeError, json.JSONDecodeError) as e:
        raise BracketError(f"Bracket payload is not valid JSON: {e}") from e
    return bracket_from_dict(data)
