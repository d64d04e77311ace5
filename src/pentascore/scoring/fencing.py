"""
Fencing points: ranking round and direct elimination.

Ranking round (every athlete fences every other athlete once):

    MP_points = 250 + (victories - victories_for_250) * value_per_victory

victories_for_250 and value_per_victory come from the UIPM victory value
table, keyed by the number of bouts each athlete fenced (competitors - 1).
The table covers 19 to 60 bouts. The rules define no extrapolation outside
that range, so other bout counts are rejected as invalid input.

Direct elimination is a pure lookup on final placement: 1st = 250 down to
18th = 196. Athletes placed beyond 18th (eliminated in the initial bout)
score 0.
"""

from dataclasses import dataclass
from decimal import Decimal

from pentascore.scoring.constants import (
    FENCING_DE_PLACEMENT_POINTS,
    FENCING_RANKING_BASE_POINTS,
    FENCING_VICTORY_VALUE_TABLE,
    MAX_TABLE_BOUTS,
    MIN_TABLE_BOUTS,
)
from pentascore.scoring.inputs import FencingDEInput, FencingRankingInput, ScoringInputError
from pentascore.scoring.utils import floor_at_zero, round_half_up


@dataclass(frozen=True)
class FencingRankingParams:
    """Victory value table entry for a ranking round."""
    total_bouts: int
    victories_for_250: int
    value_per_victory: int


def _lookup_victory_value(total_bouts: int) -> tuple[int, int]:
    try:
        return FENCING_VICTORY_VALUE_TABLE[total_bouts]
    except KeyError:
        raise ScoringInputError(
            "total_bouts",
            f"{total_bouts} is outside the victory value table "
            f"({MIN_TABLE_BOUTS}-{MAX_TABLE_BOUTS})",
        ) from None


def calculate_fencing_ranking(data: FencingRankingInput) -> int:
    """
    Calculate ranking-round MP points.

    Args:
        data: Victories and total bouts fenced

    Returns:
        MP points, never below 0

    Raises:
        ScoringInputError: If total_bouts has no table entry

    Example:
        # 30 bouts: 21 victories = 250, each victory worth 6
        calculate_fencing_ranking(FencingRankingInput(victories=23, total_bouts=30))  # 262
    """
    victories_for_250, value_per_victory = _lookup_victory_value(data.total_bouts)
    delta = Decimal(data.victories - victories_for_250) * Decimal(value_per_victory)
    return floor_at_zero(round_half_up(delta) + FENCING_RANKING_BASE_POINTS)


def get_fencing_ranking_params(num_competitors: int) -> FencingRankingParams:
    """
    Get the victory value table entry for a ranking round of num_competitors.

    Each competitor fences everyone else once, so total_bouts = n - 1.

    Raises:
        ScoringInputError: If n - 1 has no table entry
    """
    total_bouts = num_competitors - 1
    victories_for_250, value_per_victory = _lookup_victory_value(total_bouts)
    return FencingRankingParams(
        total_bouts=total_bouts,
        victories_for_250=victories_for_250,
        value_per_victory=value_per_victory,
    )


def calculate_fencing_de(data: FencingDEInput) -> int:
    """
    Calculate direct-elimination MP points from final placement.

    Examples:
        calculate_fencing_de(FencingDEInput(placement=1))   # 250
        calculate_fencing_de(FencingDEInput(placement=18))  # 196
        calculate_fencing_de(FencingDEInput(placement=19))  # 0
    """
    return FENCING_DE_PLACEMENT_POINTS.get(data.placement, 0)


def get_all_de_placements() -> list[tuple[int, int]]:
    """All (placement, points) pairs that score, best placement first."""
    return sorted(FENCING_DE_PLACEMENT_POINTS.items())
