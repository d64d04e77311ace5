"""
Draw tableau utility functions.

Provides positional math for fencing direct-elimination tableaux. Match
positions are 0-indexed within each round and follow standard
single-elimination progression:

    Round N, position p  →  Round N+1, position p // 2

So positions 0 and 1 in the first round feed position 0 in the second
round, positions 2 and 3 feed position 1, etc. An even position feeds the
top slot (athlete 1) of the next match, an odd position the bottom slot.

Seed placement uses the recursive binary split, which keeps the top seeds
apart for as long as possible:

    positions(2) = [1, 2]
    positions(T) = for each s in positions(T/2): s, T + 1 - s

These functions are used by:
- Bracket generation (tableau sizing and seed placement)
- Winner propagation and correction clearing (feeder/next positions)
- Display helpers (round names)
"""

import re

# Match ids look like "R1-M0": 1-based round, 0-based position
MATCH_ID_PATTERN = re.compile(r"^R(\d+)-M(\d+)$")


def get_tableau_size(num_competitors: int) -> int:
    """
    Get the tableau size for a number of competitors.

    The tableau is the smallest power of two that holds everyone,
    with a minimum of 2 (a single final).

    Args:
        num_competitors: Number of athletes entering the bracket

    Returns:
        Tableau size (power of two, >= 2)

    Examples:
        >>> get_tableau_size(18)
        32
        >>> get_tableau_size(16)
        16
        >>> get_tableau_size(5)
        8
        >>> get_tableau_size(1)
        2
    """
    if num_competitors <= 1:
        return 2

    size = 2
    while size < num_competitors:
        size *= 2
    return size


def is_valid_tableau_size(tableau_size: int) -> bool:
    """Whether tableau_size is a power of two >= 2."""
    return tableau_size >= 2 and (tableau_size & (tableau_size - 1)) == 0


def get_total_rounds(tableau_size: int) -> int:
    """
    Get the number of rounds in a tableau (log2 of its size).

    Raises:
        ValueError: If tableau_size is not a power of two >= 2

    Examples:
        >>> get_total_rounds(2)
        1
        >>> get_total_rounds(32)
        5
    """
    if not is_valid_tableau_size(tableau_size):
        raise ValueError(f"Tableau size must be a power of two >= 2, got {tableau_size}")
    return tableau_size.bit_length() - 1


def generate_seed_positions(tableau_size: int) -> list[int]:
    """
    Generate the seed number occupying each first-round slot.

    Consecutive pairs of the result form the first-round matches.

    Args:
        tableau_size: Power of two >= 2

    Returns:
        Seed numbers for slots 0..tableau_size-1 (a permutation of 1..T)

    Raises:
        ValueError: If tableau_size is not a power of two >= 2

    Examples:
        >>> generate_seed_positions(4)
        [1, 4, 2, 3]
        >>> generate_seed_positions(8)
        [1, 8, 4, 5, 2, 7, 3, 6]
    """
    if not is_valid_tableau_size(tableau_size):
        raise ValueError(f"Tableau size must be a power of two >= 2, got {tableau_size}")

    if tableau_size == 2:
        return [1, 2]

    positions = []
    for seed in generate_seed_positions(tableau_size // 2):
        positions.append(seed)
        positions.append(tableau_size + 1 - seed)
    return positions


def make_match_id(round_number: int, match_position: int) -> str:
    """
    Build the id for a match.

    Examples:
        >>> make_match_id(1, 0)
        'R1-M0'
        >>> make_match_id(3, 2)
        'R3-M2'
    """
    return f"R{round_number}-M{match_position}"


def parse_match_id(match_id: str) -> tuple[int, int]:
    """
    Split a match id into (round_number, match_position).

    Raises:
        ValueError: If match_id is not of the form "R<round>-M<position>"

    Examples:
        >>> parse_match_id("R2-M3")
        (2, 3)
    """
    match = MATCH_ID_PATTERN.match(match_id or "")
    if not match:
        raise ValueError(f"Malformed match id: {match_id!r}")

    round_number = int(match.group(1))
    if round_number < 1:
        raise ValueError(f"Malformed match id: {match_id!r}")
    return round_number, int(match.group(2))


def get_next_match_position(match_position: int) -> int:
    """
    Compute the match position in the next round.

    Examples:
        >>> get_next_match_position(0)
        0
        >>> get_next_match_position(1)
        0
        >>> get_next_match_position(5)
        2
    """
    return match_position // 2


def feeds_top_slot(match_position: int) -> bool:
    """Whether the winner of this position fills athlete 1 of the next match."""
    return match_position % 2 == 0


def get_feeder_positions(match_position: int) -> tuple[int, int]:
    """
    Get the two previous-round positions feeding this position.

    Examples:
        >>> get_feeder_positions(0)
        (0, 1)
        >>> get_feeder_positions(2)
        (4, 5)
    """
    return (2 * match_position, 2 * match_position + 1)


def get_round_name(round_number: int, total_rounds: int) -> str:
    """
    Get a human-readable name for a round.

    Args:
        round_number: 1-based round number
        total_rounds: Number of rounds in the tableau

    Returns:
        "Final", "Semifinal", "Quarterfinal" or "Round of N"

    Examples:
        >>> get_round_name(3, 3)
        'Final'
        >>> get_round_name(1, 5)
        'Round of 32'
    """
    rounds_from_end = total_rounds - round_number

    if rounds_from_end == 0:
        return "Final"
    if rounds_from_end == 1:
        return "Semifinal"
    if rounds_from_end == 2:
        return "Quarterfinal"
    return f"Round of {2 ** (rounds_from_end + 1)}"


def get_elimination_placement_start(round_index: int, total_rounds: int) -> int:
    """
    First placement awarded to athletes eliminated in a round.

    Losers of round index r (0-based) share placements starting at
    2^(total_rounds - r - 1) + 1: semifinal losers 3-4, quarterfinal
    losers 5-8, and so on. The final loser is 2nd.

    Examples:
        >>> get_elimination_placement_start(2, 3)  # final
        2
        >>> get_elimination_placement_start(1, 3)  # semifinal
        3
        >>> get_elimination_placement_start(0, 3)  # quarterfinal
        5
    """
    return 2 ** (total_rounds - round_index - 1) + 1
