"""
Obstacle points.

Formula:
    MP_points = 400 - round((time_seconds - base_time) / 0.33) - penalty_points

Base time is 15.00s for the individual course and 35.00s for the relay.
Faster than the base time earns points above 400.
"""

from pentascore.scoring.constants import OBSTACLE_CONFIG
from pentascore.scoring.inputs import ObstacleInput
from pentascore.scoring.utils import floor_at_zero, round_half_up, to_decimal


def calculate_obstacle(data: ObstacleInput) -> int:
    """
    Calculate obstacle MP points.

    Examples:
        calculate_obstacle(ObstacleInput(time_seconds=15.00))  # 400
        calculate_obstacle(ObstacleInput(time_seconds=18.30))  # 390
        calculate_obstacle(ObstacleInput(time_seconds=36.65, is_relay=True))  # 395
    """
    config = OBSTACLE_CONFIG["relay" if data.is_relay else "individual"]

    time_diff = to_decimal(data.time_seconds) - to_decimal(config["base_time_seconds"])
    points_from_time = round_half_up(time_diff / to_decimal(config["seconds_per_point"]))
    points = config["base_points"] - points_from_time - round_half_up(to_decimal(data.penalty_points))

    return floor_at_zero(points)
