"""
Unit tests for the direct-elimination bracket engine.

Tests the bracket lifecycle to ensure:
- Generation places seeds, resolves byes and validates input
- Results advance winners with their original seed
- Corrections clear every result that depended on the old winner
- Final placements follow the elimination round, then original seed
- The caller's bracket is never mutated
"""

import pytest

from pentascore.bracket import (
    BracketError,
    MatchResult,
    Seed,
    advance_winner,
    calculate_final_placements,
    find_match,
    generate_bracket,
    get_all_bracket_athletes,
    get_bracket_stats,
    get_pending_matches,
    is_bracket_complete,
    serialize_bracket,
)


def resolve_by_seed(bracket):
    """Fence every remaining bout, always advancing the better seed."""
    while True:
        pending = get_pending_matches(bracket)
        if not pending:
            return bracket
        match = pending[0]
        if match.athlete1_seed < match.athlete2_seed:
            winner, scores = match.athlete1_id, (15, 10)
        else:
            winner, scores = match.athlete2_id, (10, 15)
        bracket = advance_winner(bracket, MatchResult(match.match_id, winner, *scores))


class TestGenerateBracket:
    """Tests for generate_bracket."""

    def test_full_tableau_has_no_byes(self, bracket_8):
        assert bracket_8.tableau_size == 8
        assert bracket_8.participant_count == 8
        assert [len(r) for r in bracket_8.rounds] == [4, 2, 1]
        assert not any(m.is_bye for m in bracket_8.rounds[0])

    def test_first_round_pairings(self, bracket_8):
        pairs = [(m.athlete1_seed, m.athlete2_seed) for m in bracket_8.rounds[0]]
        assert pairs == [(1, 8), (4, 5), (2, 7), (3, 6)]

    def test_match_ids_and_feeders(self, bracket_8):
        semi = bracket_8.rounds[1][1]
        assert semi.match_id == "R2-M1"
        assert semi.feeder_match1_id == "R1-M2"
        assert semi.feeder_match2_id == "R1-M3"
        assert bracket_8.rounds[0][0].feeder_match1_id is None

    def test_bracket_positions_run_across_rounds(self, bracket_8):
        positions = [m.bracket_position for m in bracket_8.iter_matches()]
        assert positions == list(range(7))

    def test_byes_resolved_on_generation(self, bracket_5):
        """Seeds 1-3 get byes; byes have winners but the bracket is not complete."""
        byes = [m for m in bracket_5.iter_matches() if m.is_bye]
        assert [m.match_id for m in byes] == ["R1-M0", "R1-M2", "R1-M3"]
        assert all(m.winner_id is not None for m in byes)
        assert all(m.score1 == 0 and m.score2 == 0 for m in byes)
        assert not is_bracket_complete(bracket_5)
        assert bracket_5.placements is None

    def test_bye_winners_carried_forward(self, bracket_5):
        semi_top, semi_bottom = bracket_5.rounds[1]
        assert semi_top.athlete1_id == "a1"
        assert semi_top.athlete2_id is None
        assert (semi_bottom.athlete1_id, semi_bottom.athlete2_id) == ("a2", "a3")
        assert semi_bottom.athlete1_seed == 2

    def test_bye_count_matches_missing_seeds(self, make_seeds):
        for n in range(2, 33):
            bracket = generate_bracket("evt", make_seeds(n))
            first_round_byes = sum(1 for m in bracket.rounds[0] if m.is_bye)
            assert first_round_byes == bracket.tableau_size - n

    def test_single_athlete(self, make_seeds):
        bracket = generate_bracket("evt", make_seeds(1))
        assert bracket.tableau_size == 2
        assert bracket.final_match.is_bye
        assert is_bracket_complete(bracket)
        assert bracket.placements == {"a1": 1}

    def test_two_athletes_single_final(self, make_seeds):
        bracket = generate_bracket("evt", make_seeds(2))
        assert bracket.total_rounds == 1
        assert bracket.final_match.is_ready
        assert not is_bracket_complete(bracket)

    def test_seed_order_of_input_does_not_matter(self, make_seeds):
        seeds = make_seeds(6)
        forward = generate_bracket("evt", seeds, generated_at=None)
        backward = generate_bracket("evt", list(reversed(seeds)), generated_at=forward.generated_at)
        assert serialize_bracket(forward) == serialize_bracket(backward)

    def test_display_names_copied(self, bracket_8):
        assert bracket_8.rounds[0][0].athlete1_name == "Athlete 1"

    @pytest.mark.parametrize(
        "seeds",
        [
            [],
            [Seed("a", 1), Seed("a", 2)],
            [Seed("a", 1), Seed("b", 1)],
            [Seed("a", 0), Seed("b", 1)],
            [Seed("a", -1), Seed("b", 1)],
            [Seed("a", 1), Seed("b", 3)],
            [Seed("", 1)],
        ],
        ids=["empty", "dup-athlete", "dup-seed", "zero-seed", "negative-seed", "gap", "no-id"],
    )
    def test_rejects_invalid_seeds(self, seeds):
        with pytest.raises(BracketError):
            generate_bracket("evt", seeds)


class TestAdvanceWinner:
    """Tests for advance_winner."""

    def test_winner_fills_next_slot(self, bracket_8):
        bracket = advance_winner(bracket_8, MatchResult("R1-M1", "a5", 13, 15))
        match = find_match(bracket, "R1-M1")
        assert match.winner_id == "a5"
        assert match.winner_seed == 5
        assert (match.score1, match.score2) == (13, 15)

        semi = find_match(bracket, "R2-M0")
        assert semi.athlete2_id == "a5"
        assert semi.athlete2_seed == 5

    def test_input_not_mutated(self, bracket_8):
        before = serialize_bracket(bracket_8)
        updated = advance_winner(bracket_8, MatchResult("R1-M0", "a1", 15, 3))
        assert serialize_bracket(bracket_8) == before
        assert updated is not bracket_8
        assert find_match(bracket_8, "R1-M0").winner_id is None

    def test_idempotent(self, bracket_8):
        result = MatchResult("R1-M0", "a1", 15, 3)
        once = advance_winner(bracket_8, result)
        twice = advance_winner(once, result)
        assert twice == once
        assert advance_winner(bracket_8, result) == once

    def test_same_winner_new_score_keeps_downstream(self, bracket_8):
        bracket = resolve_by_seed(bracket_8)
        rescored = advance_winner(bracket, MatchResult("R1-M0", "a1", 15, 14))
        assert find_match(rescored, "R1-M0").score2 == 14
        assert find_match(rescored, "R2-M0").winner_id == "a1"
        assert rescored.placements == bracket.placements

    def test_unknown_match(self, bracket_8):
        with pytest.raises(BracketError, match="not found"):
            advance_winner(bracket_8, MatchResult("R9-M0", "a1"))
        with pytest.raises(BracketError, match="not found"):
            advance_winner(bracket_8, MatchResult("R1-M4", "a1"))
        with pytest.raises(BracketError, match="not found"):
            advance_winner(bracket_8, MatchResult("final", "a1"))

    def test_winner_not_in_match(self, bracket_8):
        with pytest.raises(BracketError, match="not competing"):
            advance_winner(bracket_8, MatchResult("R1-M0", "a2"))

    def test_match_waiting_for_opponent(self, bracket_5):
        with pytest.raises(BracketError, match="waiting"):
            advance_winner(bracket_5, MatchResult("R2-M0", "a1", 15, 0))

    def test_negative_score_rejected(self, bracket_8):
        with pytest.raises(BracketError, match="score2"):
            advance_winner(bracket_8, MatchResult("R1-M0", "a1", 15, -1))

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_score_rejected(self, bracket_8, bad):
        with pytest.raises(BracketError, match="score1 must be a finite number"):
            advance_winner(bracket_8, MatchResult("R1-M0", "a1", bad, 3))

    def test_bye_takes_no_result(self, bracket_5):
        """A bye stays resolved 0-0; a submitted result is rejected."""
        with pytest.raises(BracketError, match="is a bye"):
            advance_winner(bracket_5, MatchResult("R1-M0", "a1", 15, 3))

        bye = find_match(bracket_5, "R1-M0")
        assert bye.winner_id == "a1"
        assert (bye.score1, bye.score2) == (0, 0)

    def test_winner_keeps_original_seed(self, bracket_8):
        """An upset winner carries their own seed, not the slot's expected seed."""
        bracket = advance_winner(bracket_8, MatchResult("R1-M0", "a8", 12, 15))
        bracket = advance_winner(bracket, MatchResult("R1-M1", "a4", 15, 11))
        bracket = advance_winner(bracket, MatchResult("R2-M0", "a8", 15, 9))
        assert find_match(bracket, "R2-M0").winner_seed == 8
        assert find_match(bracket, "R3-M0").athlete1_seed == 8


class TestCorrections:
    """Tests for changing a recorded winner."""

    def test_correction_clears_champion_path(self, bracket_8):
        """Flipping the first-round bout that fed the champion voids the semi, final and placements."""
        resolved = resolve_by_seed(bracket_8)
        assert resolved.placements is not None

        corrected = advance_winner(resolved, MatchResult("R1-M0", "a8", 14, 15))

        semi = find_match(corrected, "R2-M0")
        assert semi.winner_id is None
        assert semi.score1 is None
        assert (semi.athlete1_id, semi.athlete2_id) == ("a8", "a4")

        final = find_match(corrected, "R3-M0")
        assert final.winner_id is None
        assert final.athlete1_id is None
        assert final.athlete2_id == "a2"

        assert corrected.placements is None
        assert not is_bracket_complete(corrected)

    def test_correction_leaves_other_half(self, bracket_8):
        resolved = resolve_by_seed(bracket_8)
        corrected = advance_winner(resolved, MatchResult("R1-M0", "a8", 14, 15))

        for match_id in ("R1-M1", "R1-M2", "R1-M3", "R2-M1"):
            assert find_match(corrected, match_id) == find_match(resolved, match_id)

    def test_correction_in_semifinal(self, bracket_8):
        resolved = resolve_by_seed(bracket_8)
        corrected = advance_winner(resolved, MatchResult("R2-M1", "a3", 11, 15))

        final = find_match(corrected, "R3-M0")
        assert final.athlete2_id == "a3"
        assert final.winner_id is None
        assert find_match(corrected, "R2-M0").winner_id == "a1"

    def test_correction_logs_warning(self, bracket_8, caplog):
        bracket = advance_winner(bracket_8, MatchResult("R1-M0", "a1", 15, 3))
        with caplog.at_level("WARNING", logger="pentascore.bracket.engine"):
            advance_winner(bracket, MatchResult("R1-M0", "a8", 3, 15))
        assert "Correcting R1-M0" in caplog.text

    def test_correction_then_complete_again(self, bracket_8):
        resolved = resolve_by_seed(bracket_8)
        corrected = advance_winner(resolved, MatchResult("R1-M0", "a8", 14, 15))
        finished = resolve_by_seed(corrected)
        assert finished.placements["a2"] == 1
        assert finished.placements["a8"] == 4
        assert finished.placements["a1"] == 5


class TestPlacements:
    """Tests for final placement derivation."""

    def test_favourites_win(self, bracket_8):
        """Better seed wins every bout: placements equal seeds."""
        resolved = resolve_by_seed(bracket_8)
        assert is_bracket_complete(resolved)
        assert resolved.placements == {f"a{n}": n for n in range(1, 9)}

    def test_losers_ranked_by_original_seed(self, bracket_8):
        bracket = bracket_8
        for match_id, winner in (
            ("R1-M0", "a8"),
            ("R1-M1", "a5"),
            ("R1-M2", "a7"),
            ("R1-M3", "a3"),
            ("R2-M0", "a5"),
            ("R2-M1", "a7"),
            ("R3-M0", "a7"),
        ):
            bracket = advance_winner(bracket, MatchResult(match_id, winner, 15, 14))

        assert bracket.placements == {
            "a7": 1,
            "a5": 2,
            "a3": 3,
            "a8": 4,
            "a1": 5,
            "a2": 6,
            "a4": 7,
            "a6": 8,
        }

    def test_byes_award_no_placement(self, bracket_5):
        resolved = resolve_by_seed(bracket_5)
        assert resolved.placements == {"a1": 1, "a2": 2, "a3": 3, "a4": 4, "a5": 5}

    def test_placements_are_unique(self, make_seeds):
        for n in (3, 6, 11, 17):
            resolved = resolve_by_seed(generate_bracket("evt", make_seeds(n)))
            places = sorted(resolved.placements.values())
            assert places == list(range(1, n + 1))

    def test_partial_result_on_incomplete_bracket(self, bracket_8):
        bracket = advance_winner(bracket_8, MatchResult("R1-M0", "a1", 15, 3))
        # Only the first-round loser is placed so far
        assert calculate_final_placements(bracket) == {"a8": 5}


class TestQueries:
    """Tests for stats and lookups."""

    def test_stats_fresh_bracket(self, bracket_5):
        stats = get_bracket_stats(bracket_5)
        assert stats.bye_count == 3
        assert stats.total_matches == 5
        assert stats.completed_matches == 3
        assert stats.current_round == 1
        assert not stats.is_complete

    def test_stats_advance_round(self, bracket_5):
        bracket = advance_winner(bracket_5, MatchResult("R1-M1", "a4", 15, 10))
        bracket = advance_winner(bracket, MatchResult("R2-M1", "a2", 15, 10))
        stats = get_bracket_stats(bracket)
        assert stats.current_round == 2
        assert stats.completed_matches == 5

    def test_stats_complete(self, bracket_8):
        stats = get_bracket_stats(resolve_by_seed(bracket_8))
        assert stats.is_complete
        assert stats.completed_matches == stats.total_matches == 7
        assert stats.current_round == 3

    def test_pending_matches(self, bracket_5):
        assert [m.match_id for m in get_pending_matches(bracket_5)] == ["R1-M1", "R2-M1"]

    def test_all_athletes(self, bracket_5):
        assert get_all_bracket_athletes(bracket_5) == ["a1", "a4", "a5", "a2", "a3"]

    def test_find_match(self, bracket_8):
        assert find_match(bracket_8, "R2-M1").round_number == 2
        with pytest.raises(BracketError):
            find_match(bracket_8, "R4-M0")
