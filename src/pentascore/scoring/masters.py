"""
Masters age handicap.

Masters totals are adjusted by an age bonus so athletes of different ages
can be ranked together. Age 40 is neutral; see get_masters_handicap_bonus()
for the curve.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from pentascore.scoring.constants import get_masters_handicap_bonus
from pentascore.scoring.inputs import ScoringInputError


@dataclass
class MastersAdjustment:
    adjusted_total: int
    bonus: int


def apply_masters_handicap(total_points: int, age: int) -> MastersAdjustment:
    """
    Apply the Masters age bonus to an athlete's total MP points.

    Example:
        apply_masters_handicap(1000, 55)  # adjusted_total=1100, bonus=100
    """
    bonus = get_masters_handicap_bonus(age)
    return MastersAdjustment(adjusted_total=total_points + bonus, bonus=bonus)


def calculate_age(date_of_birth: Union[date, str], today: Optional[date] = None) -> int:
    """
    Calculate age in whole years on a given day (today by default).

    Args:
        date_of_birth: date or ISO string ("1980-05-17")
        today: Reference date, for deterministic results

    Raises:
        ScoringInputError: If the date string is malformed or in the future
    """
    if isinstance(date_of_birth, str):
        try:
            date_of_birth = date.fromisoformat(date_of_birth)
        except ValueError:
            raise ScoringInputError(
                "date_of_birth", f"expected YYYY-MM-DD, got {date_of_birth!r}"
            ) from None

    today = today or date.today()
    if date_of_birth > today:
        raise ScoringInputError("date_of_birth", f"{date_of_birth} is in the future")

    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age
