"""
Swimming points.

Formula:
    MP_points = 250 - round((time_hundredths - base_time_hundredths) / increment) - penalty_points

Times are in hundredths of a second. Base time and increment depend on
the age category and, for Masters, on gender:

    standard (U13 and older)   1:10.00   0.20s per point
    youth (U9, U11)            0:45.00   0.50s per point
    Masters men / women        1:18.00 / 1:30.00   0.50s per point
    Masters 60+ men / women    0:38.00 / 0:43.00   0.50s per point
"""

from decimal import Decimal

from pentascore.scoring.constants import get_swimming_config
from pentascore.scoring.inputs import SwimmingInput
from pentascore.scoring.utils import floor_at_zero, round_half_up, to_decimal


def calculate_swimming(data: SwimmingInput) -> int:
    """
    Calculate swimming MP points.

    Examples:
        calculate_swimming(SwimmingInput(time_hundredths=7000))  # 250
        calculate_swimming(SwimmingInput(time_hundredths=7200))  # 240
        calculate_swimming(SwimmingInput(time_hundredths=9000, age_category="Masters", gender="F"))  # 250
    """
    config = get_swimming_config(data.age_category, data.gender, data.age)

    time_diff = Decimal(data.time_hundredths - config.base_time_hundredths)
    points_from_time = round_half_up(time_diff / Decimal(config.increment_hundredths))
    points = config.base_points - points_from_time - round_half_up(to_decimal(data.penalty_points))

    return floor_at_zero(points)
