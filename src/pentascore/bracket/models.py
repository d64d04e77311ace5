"""
Value types for the fencing direct-elimination bracket.

The bracket is an arena of matches addressed by (round index, position)
rather than a tree of live references: every match names its two feeder
matches by id, and a match at position p always feeds position p // 2 of
the next round. Clearing and propagation are plain index walks.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, Optional


@dataclass(frozen=True)
class Seed:
    """An athlete entering the tableau with their ranking-round seed (1 = best)."""
    athlete_id: str
    seed: int
    display_name: str = ""


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome submitted for one bout.

    score1/score2 are touches for athlete 1 and athlete 2 of the match,
    in slot order, not winner/loser order.
    """
    match_id: str
    winner_id: str
    score1: float = 0
    score2: float = 0


@dataclass
class DEMatch:
    """
    One bout in the tableau.

    Slot 1 (athlete1_*) is filled by the winner of feeder_match1_id, slot 2
    by the winner of feeder_match2_id. Round 1 matches have no feeders.
    """
    match_id: str
    round_number: int
    match_position: int
    bracket_position: int

    athlete1_id: Optional[str] = None
    athlete2_id: Optional[str] = None
    athlete1_seed: Optional[int] = None
    athlete2_seed: Optional[int] = None
    athlete1_name: Optional[str] = None
    athlete2_name: Optional[str] = None

    winner_id: Optional[str] = None
    winner_seed: Optional[int] = None
    score1: Optional[float] = None
    score2: Optional[float] = None

    is_bye: bool = False
    feeder_match1_id: Optional[str] = None
    feeder_match2_id: Optional[str] = None

    @property
    def occupant_count(self) -> int:
        return (self.athlete1_id is not None) + (self.athlete2_id is not None)

    @property
    def is_empty(self) -> bool:
        """No athlete can ever reach this match."""
        return self.occupant_count == 0

    @property
    def is_ready(self) -> bool:
        """Both athletes are known, so the bout can be fenced."""
        return self.occupant_count == 2

    @property
    def is_decided(self) -> bool:
        return self.winner_id is not None

    def slot_of(self, athlete_id: Optional[str]) -> Optional[int]:
        """Return 1 or 2 for the slot athlete_id occupies, or None."""
        if athlete_id is None:
            return None
        if athlete_id == self.athlete1_id:
            return 1
        if athlete_id == self.athlete2_id:
            return 2
        return None

    def seed_in_slot(self, slot: int) -> Optional[int]:
        return self.athlete1_seed if slot == 1 else self.athlete2_seed

    def name_in_slot(self, slot: int) -> Optional[str]:
        return self.athlete1_name if slot == 1 else self.athlete2_name

    @property
    def winner_name(self) -> Optional[str]:
        slot = self.slot_of(self.winner_id)
        return self.name_in_slot(slot) if slot else None

    @property
    def loser_id(self) -> Optional[str]:
        """The other occupant once a winner is recorded (None for byes)."""
        slot = self.slot_of(self.winner_id)
        if slot == 1:
            return self.athlete2_id
        if slot == 2:
            return self.athlete1_id
        return None

    @property
    def loser_seed(self) -> Optional[int]:
        slot = self.slot_of(self.loser_id)
        return self.seed_in_slot(slot) if slot else None

    def set_slot(
        self,
        slot: int,
        athlete_id: Optional[str],
        seed: Optional[int],
        name: Optional[str],
    ) -> None:
        if slot == 1:
            self.athlete1_id, self.athlete1_seed, self.athlete1_name = athlete_id, seed, name
        else:
            self.athlete2_id, self.athlete2_seed, self.athlete2_name = athlete_id, seed, name

    def clear_slot(self, slot: int) -> None:
        self.set_slot(slot, None, None, None)

    def record_result(self, winner_id: str, score1: float, score2: float) -> None:
        """Record an outcome; the winner keeps the seed of the slot they fenced from."""
        self.winner_id = winner_id
        self.winner_seed = self.seed_in_slot(self.slot_of(winner_id))
        self.score1 = score1
        self.score2 = score2

    def clear_result(self) -> None:
        self.winner_id = None
        self.winner_seed = None
        self.score1 = None
        self.score2 = None


@dataclass
class Bracket:
    """
    Complete direct-elimination tableau for one event.

    rounds[0] is the first round (tableau_size / 2 matches); the last
    round always holds the single final. placements maps athlete id to
    final rank and stays None until every bout is decided.
    """
    event_id: str
    tableau_size: int
    participant_count: int
    rounds: list[list[DEMatch]]
    placements: Optional[dict[str, int]] = None
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_rounds(self) -> int:
        return len(self.rounds)

    @property
    def final_match(self) -> DEMatch:
        return self.rounds[-1][0]

    def iter_matches(self) -> Iterator[DEMatch]:
        """All matches, first round first, in position order."""
        for round_matches in self.rounds:
            yield from round_matches

    def __repr__(self) -> str:
        decided = sum(1 for m in self.iter_matches() if m.is_decided)
        return (
            f"<Bracket(event={self.event_id}, tableau={self.tableau_size}, "
            f"athletes={self.participant_count}, decided={decided})>"
        )
