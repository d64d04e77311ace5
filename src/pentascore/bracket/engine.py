"""
Fencing direct-elimination bracket engine.

Implements the FIE/UIPM tableau:
- Tableau size = next power of 2 >= number of competitors
- Recursive binary-split seed placement (1 v T, then T/2 v T/2+1, ...)
- Top seeds receive byes when competitors < tableau size
- The winner of a bout carries their own seed forward
- Final placements come from the elimination round plus original seed

Every operation is a pure function of its inputs. advance_winner() deep
copies the bracket and returns the copy; the caller's value is never
mutated.

CONCURRENCY: because updates are copy-then-return, two requests that
start from the same stored snapshot and each record a result will both
succeed, and whichever is persisted last silently discards the other.
Callers must serialize writes per event (a lock, or a version column
checked on save). The engine cannot detect stale snapshots.
"""

import copy
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from numbers import Real
from typing import Optional, Sequence

from pentascore.bracket.models import Bracket, DEMatch, MatchResult, Seed
from pentascore.draw import (
    feeds_top_slot,
    generate_seed_positions,
    get_elimination_placement_start,
    get_feeder_positions,
    get_next_match_position,
    get_tableau_size,
    get_total_rounds,
    make_match_id,
    parse_match_id,
)

logger = logging.getLogger(__name__)

# Sort key for a loser whose seed was lost (should not happen in a valid bracket)
UNKNOWN_SEED = 999


class BracketError(ValueError):
    """Raised when seeds or a match result do not fit the bracket."""
    pass


@dataclass
class BracketStats:
    """Progress summary for a bracket."""
    total_matches: int
    completed_matches: int
    bye_count: int
    current_round: int
    is_complete: bool


# =============================================================================
# Generation
# =============================================================================


def _validate_seeds(seeds: Sequence[Seed]) -> None:
    if not seeds:
        raise BracketError("At least one seeded athlete is required")

    num_competitors = len(seeds)
    athlete_ids: set[str] = set()
    seed_numbers: set[int] = set()

    for entry in seeds:
        if not entry.athlete_id:
            raise BracketError(f"Seed {entry.seed} has no athlete id")
        if entry.athlete_id in athlete_ids:
            raise BracketError(f"Duplicate athlete id: {entry.athlete_id}")
        athlete_ids.add(entry.athlete_id)

        if isinstance(entry.seed, bool) or not isinstance(entry.seed, int) or entry.seed < 1:
            raise BracketError(
                f"Seed for {entry.athlete_id} must be a positive integer, got {entry.seed!r}"
            )
        if entry.seed in seed_numbers:
            raise BracketError(f"Duplicate seed number: {entry.seed}")
        if entry.seed > num_competitors:
            raise BracketError(
                f"Seed {entry.seed} for {entry.athlete_id} exceeds the "
                f"number of competitors ({num_competitors})"
            )
        seed_numbers.add(entry.seed)


def _resolve_bye(match: DEMatch) -> None:
    """Advance the sole occupant of a bye without a bout."""
    match.is_bye = True
    sole_id = match.athlete1_id if match.athlete1_id is not None else match.athlete2_id
    match.record_result(sole_id, 0, 0)


def _fill_slot_from_feeder(match: DEMatch, slot: int, feeder: DEMatch) -> None:
    """Set a slot to the feeder's current winner, or empty it if undecided."""
    if feeder.winner_id is None:
        match.clear_slot(slot)
    else:
        match.set_slot(slot, feeder.winner_id, feeder.winner_seed, feeder.winner_name)


def generate_bracket(
    event_id: str,
    seeds: Sequence[Seed],
    generated_at: Optional[datetime] = None,
) -> Bracket:
    """
    Build a complete tableau from ranking-round seeds.

    Byes are resolved immediately (score 0-0) and carried forward, so a
    freshly generated bracket only waits on real bouts.

    Args:
        event_id: Competition event this tableau belongs to
        seeds: Seeded athletes; seed numbers must be exactly 1..n
        generated_at: Timestamp to stamp on the bracket (now, UTC, if omitted)

    Returns:
        New Bracket with every round laid out

    Raises:
        BracketError: On empty seeds, duplicate athlete ids, non-positive,
            duplicate or out-of-range seed numbers

    Example:
        bracket = generate_bracket("evt-1", [
            Seed("a1", 1, "Alice"),
            Seed("a2", 2, "Bea"),
            Seed("a3", 3, "Cleo"),
        ])
        # Tableau of 4: seed 1 has a bye, seed 2 fences seed 3
    """
    _validate_seeds(seeds)

    num_competitors = len(seeds)
    tableau_size = get_tableau_size(num_competitors)
    total_rounds = get_total_rounds(tableau_size)
    seed_positions = generate_seed_positions(tableau_size)
    seed_map = {entry.seed: entry for entry in seeds}

    rounds: list[list[DEMatch]] = []
    bracket_position = 0

    # Round 1: pair consecutive seed positions
    first_round = []
    for position in range(tableau_size // 2):
        match = DEMatch(
            match_id=make_match_id(1, position),
            round_number=1,
            match_position=position,
            bracket_position=bracket_position,
        )
        bracket_position += 1

        for slot, seed_number in ((1, seed_positions[2 * position]), (2, seed_positions[2 * position + 1])):
            entry = seed_map.get(seed_number)
            if entry is not None:
                match.set_slot(slot, entry.athlete_id, entry.seed, entry.display_name)

        # A seed beyond the field means no opponent
        if match.occupant_count == 1:
            _resolve_bye(match)
        first_round.append(match)

    rounds.append(first_round)

    # Later rounds: slots come from feeder winners (byes already resolved)
    for round_number in range(2, total_rounds + 1):
        previous = rounds[-1]
        current = []
        for position in range(len(previous) // 2):
            top_index, bottom_index = get_feeder_positions(position)
            feeder1, feeder2 = previous[top_index], previous[bottom_index]

            match = DEMatch(
                match_id=make_match_id(round_number, position),
                round_number=round_number,
                match_position=position,
                bracket_position=bracket_position,
                feeder_match1_id=feeder1.match_id,
                feeder_match2_id=feeder2.match_id,
            )
            bracket_position += 1

            _fill_slot_from_feeder(match, 1, feeder1)
            _fill_slot_from_feeder(match, 2, feeder2)

            # Only a bye if nobody can ever arrive from the open side
            if match.occupant_count == 1:
                open_feeder = feeder2 if match.athlete1_id is not None else feeder1
                if open_feeder.is_empty:
                    _resolve_bye(match)

            current.append(match)
        rounds.append(current)

    bracket = Bracket(
        event_id=event_id,
        tableau_size=tableau_size,
        participant_count=num_competitors,
        rounds=rounds,
        placements=None,
        generated_at=generated_at or datetime.now(timezone.utc),
    )
    _refresh_placements(bracket)

    logger.debug(
        "Generated bracket for event %s: %d athletes, tableau %d, %d byes",
        event_id, num_competitors, tableau_size,
        sum(1 for m in bracket.iter_matches() if m.is_bye),
    )
    return bracket


# =============================================================================
# Recording results
# =============================================================================


def find_match(bracket: Bracket, match_id: str) -> DEMatch:
    """
    Look up a match by id.

    Raises:
        BracketError: If the id is malformed or not in this bracket
    """
    try:
        round_number, position = parse_match_id(match_id)
    except ValueError:
        raise BracketError(f"Match not found: {match_id}") from None

    if round_number > len(bracket.rounds) or position >= len(bracket.rounds[round_number - 1]):
        raise BracketError(f"Match not found: {match_id}")

    match = bracket.rounds[round_number - 1][position]
    if match.match_id != match_id:
        raise BracketError(f"Match not found: {match_id}")
    return match


def _validate_result(result: MatchResult) -> None:
    for name, score in (("score1", result.score1), ("score2", result.score2)):
        if isinstance(score, bool) or not isinstance(score, Real):
            raise BracketError(f"{name} must be a number, got {score!r}")
        if not math.isfinite(score):
            raise BracketError(f"{name} must be a finite number, got {score!r}")
        if score < 0:
            raise BracketError(f"{name} must be >= 0, got {score!r}")


def _clear_downstream(rounds: list[list[DEMatch]], round_index: int, match_position: int) -> None:
    """
    Void everything that depended on the old winner of a match.

    The fed slot of the next match is emptied. If that match already had a
    result it is void too (its pairing changed), so the walk continues
    down the bracket. Depth is bounded by the number of rounds.
    """
    if round_index + 1 >= len(rounds):
        return

    next_position = get_next_match_position(match_position)
    next_match = rounds[round_index + 1][next_position]
    next_match.clear_slot(1 if feeds_top_slot(match_position) else 2)

    if next_match.winner_id is not None:
        next_match.clear_result()
        _clear_downstream(rounds, round_index + 1, next_position)


def _propagate_winners(rounds: list[list[DEMatch]]) -> None:
    """
    Re-derive every later-round slot from its feeders' current winners.

    Runs as a full forward pass so it stays correct after corrections. A
    recorded winner no longer occupying their match is cleared, and a bye
    whose occupant was replaced is re-resolved.
    """
    for round_index in range(1, len(rounds)):
        previous = rounds[round_index - 1]
        for match in rounds[round_index]:
            top_index, bottom_index = get_feeder_positions(match.match_position)
            _fill_slot_from_feeder(match, 1, previous[top_index])
            _fill_slot_from_feeder(match, 2, previous[bottom_index])

            if match.winner_id is not None:
                slot = match.slot_of(match.winner_id)
                if slot is None:
                    match.clear_result()
                else:
                    match.winner_seed = match.seed_in_slot(slot)

            if match.is_bye and match.winner_id is None and match.occupant_count == 1:
                _resolve_bye(match)


def _refresh_placements(bracket: Bracket) -> None:
    if is_bracket_complete(bracket):
        bracket.placements = calculate_final_placements(bracket)
    else:
        bracket.placements = None


def advance_winner(bracket: Bracket, result: MatchResult) -> Bracket:
    """
    Record a bout result and carry the winner into the next round.

    If the match already had a different winner this is a correction: every
    downstream slot and result that depended on the old winner is cleared
    before winners are propagated again. Recording the same result twice
    gives the same bracket.

    Args:
        bracket: Current bracket (left untouched)
        result: Match id, winner and touches

    Returns:
        A new Bracket with the result applied and placements refreshed

    Raises:
        BracketError: If the match id is unknown, the winner is not in the
            match, the match is a bye or still waiting for an opponent, or a
            score is negative or not finite. Nothing is applied in that case.
    """
    _validate_result(result)

    updated = copy.deepcopy(bracket)
    match = find_match(updated, result.match_id)

    if match.is_bye:
        raise BracketError(f"Match {result.match_id} is a bye and takes no result")
    if match.slot_of(result.winner_id) is None:
        raise BracketError(
            f"Winner {result.winner_id} is not competing in match {result.match_id}"
        )
    if not match.is_ready:
        raise BracketError(f"Match {result.match_id} is still waiting for an opponent")

    previous_winner = match.winner_id
    is_correction = previous_winner is not None and previous_winner != result.winner_id

    match.record_result(result.winner_id, result.score1, result.score2)

    if is_correction:
        logger.warning(
            "Correcting %s in event %s: winner %s -> %s, clearing downstream bouts",
            match.match_id, updated.event_id, previous_winner, result.winner_id,
        )
        _clear_downstream(updated.rounds, match.round_number - 1, match.match_position)

    _propagate_winners(updated.rounds)
    _refresh_placements(updated)

    if updated.placements is not None and bracket.placements is None:
        logger.info("Bracket for event %s is complete", updated.event_id)

    return updated


# =============================================================================
# Queries
# =============================================================================


def is_bracket_complete(bracket: Bracket) -> bool:
    """
    Check whether every bout in the bracket has been decided.

    Matches nobody can reach are ignored. Single-occupant matches still
    waiting on a feeder count as undecided.
    """
    for match in bracket.iter_matches():
        if match.is_empty or match.winner_id is not None:
            continue
        if match.is_ready:
            return False
        if match.feeder_match1_id or match.feeder_match2_id:
            return False

    final_round = bracket.rounds[-1]
    return len(final_round) == 1 and final_round[0].winner_id is not None


def calculate_final_placements(bracket: Bracket) -> dict[str, int]:
    """
    Calculate final placements from a completed bracket.

    Placement rules (UIPM):
    - Winner of final = 1st, loser of final = 2nd
    - Losers of semifinals = 3rd-4th
    - Losers of quarterfinals = 5th-8th
    - Losers of the round of 16 = 9th-16th, and so on
    - Within a group, the better original seed gets the better placement

    Byes produce no loser and award no placement. On an incomplete bracket
    the result is partial; check is_bracket_complete() first.

    Returns:
        Mapping of athlete id -> placement
    """
    placements: dict[str, int] = {}
    total_rounds = bracket.total_rounds

    final = bracket.final_match
    if final.winner_id is not None:
        placements[final.winner_id] = 1
        if final.loser_id is not None:
            placements[final.loser_id] = 2

    # Walk back from the semifinal to the first round
    for round_index in range(total_rounds - 2, -1, -1):
        losers = []
        for match in bracket.rounds[round_index]:
            if match.is_bye or match.loser_id is None:
                continue
            seed = match.loser_seed
            losers.append((seed if seed is not None else UNKNOWN_SEED, match.loser_id))

        losers.sort(key=lambda loser: loser[0])

        start = get_elimination_placement_start(round_index, total_rounds)
        for offset, (_, athlete_id) in enumerate(losers):
            placements[athlete_id] = start + offset

    return placements


def get_pending_matches(bracket: Bracket) -> list[DEMatch]:
    """Bouts that can be fenced now (both athletes known, no result), in round order."""
    return [m for m in bracket.iter_matches() if m.is_ready and m.winner_id is None]


def get_all_bracket_athletes(bracket: Bracket) -> list[str]:
    """Unique athlete ids in the bracket, in order of first appearance."""
    athletes: dict[str, None] = {}
    for match in bracket.iter_matches():
        for athlete_id in (match.athlete1_id, match.athlete2_id):
            if athlete_id is not None:
                athletes.setdefault(athlete_id, None)
    return list(athletes)


def get_bracket_stats(bracket: Bracket) -> BracketStats:
    """
    Summarize bracket progress.

    Byes count as completed matches. current_round is the earliest round
    with a bout still to fence, or the final round once nothing is pending.
    """
    total_matches = 0
    completed_matches = 0
    bye_count = 0

    for match in bracket.iter_matches():
        if match.is_bye:
            bye_count += 1
            total_matches += 1
            completed_matches += 1
        elif match.is_ready:
            total_matches += 1
            if match.winner_id is not None:
                completed_matches += 1

    pending = get_pending_matches(bracket)
    current_round = pending[0].round_number if pending else bracket.total_rounds

    return BracketStats(
        total_matches=total_matches,
        completed_matches=completed_matches,
        bye_count=bye_count,
        current_round=current_round,
        is_complete=is_bracket_complete(bracket),
    )
