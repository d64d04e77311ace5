"""
Fencing direct-elimination bracket.

Generates the seeded tableau, records bout results (including
corrections), derives final placements and stores brackets as JSON.
"""

from pentascore.bracket.engine import (
    BracketError,
    BracketStats,
    advance_winner,
    calculate_final_placements,
    find_match,
    generate_bracket,
    get_all_bracket_athletes,
    get_bracket_stats,
    get_pending_matches,
    is_bracket_complete,
)
from pentascore.bracket.models import Bracket, DEMatch, MatchResult, Seed
from pentascore.bracket.serialization import (
    bracket_from_dict,
    bracket_to_dict,
    deserialize_bracket,
    serialize_bracket,
)

__all__ = [
    "Bracket",
    "BracketError",
    "BracketStats",
    "DEMatch",
    "MatchResult",
    "Seed",
    "advance_winner",
    "bracket_from_dict",
    "bracket_to_dict",
    "calculate_final_placements",
    "deserialize_bracket",
    "find_match",
    "generate_bracket",
    "get_all_bracket_athletes",
    "get_bracket_stats",
    "get_pending_matches",
    "is_bracket_complete",
    "serialize_bracket",
]
