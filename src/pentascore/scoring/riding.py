"""
Riding points (Masters only).

Formula:
    MP_points = 300 - total_penalty_points

Penalties:
    Knockdown       7 pts each
    Disobedience   10 pts each
    Time over       1 pt per second
    Other          10 pts each
"""

from pentascore.scoring.constants import RIDING_CONFIG
from pentascore.scoring.inputs import RidingInput
from pentascore.scoring.utils import floor_at_zero, round_half_up, to_decimal


def calculate_riding(data: RidingInput) -> int:
    """
    Calculate riding MP points.

    Example:
        # 1 knockdown, 1 disobedience, 4s over time: 300 - (7 + 10 + 4)
        calculate_riding(RidingInput(knockdowns=1, disobediences=1, time_over_seconds=4))  # 279
    """
    total_penalty = (
        data.knockdowns * RIDING_CONFIG["knockdown_penalty"]
        + data.disobediences * RIDING_CONFIG["disobedience_penalty"]
        + round_half_up(
            to_decimal(data.time_over_seconds) * RIDING_CONFIG["time_over_penalty_per_second"]
        )
        + data.other_penalties * RIDING_CONFIG["other_penalty"]
    )

    return floor_at_zero(RIDING_CONFIG["base_points"] - total_penalty)
