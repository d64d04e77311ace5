"""
Typed raw-performance inputs for the points calculators.

Each discipline takes one small dataclass. Inputs validate themselves on
construction, so a calculator never sees a negative time or a zero
placement: the caller gets a ScoringInputError naming the offending field
instead. Optional penalty fields may be omitted or passed as None; both
mean "no penalty".
"""

import math
from dataclasses import dataclass
from numbers import Real
from typing import Optional

from pentascore.disciplines import AGE_CATEGORIES, GENDERS


class ScoringInputError(ValueError):
    """Raised when a raw performance input is malformed."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


def require_number(field: str, value, *, allow_float: bool = True) -> None:
    # bool is an int subclass; True victories is a caller bug
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ScoringInputError(field, f"expected a number, got {value!r}")
    if not allow_float and int(value) != value:
        raise ScoringInputError(field, f"expected a whole number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ScoringInputError(field, f"expected a finite number, got {value!r}")


def _require_non_negative(field: str, value, *, allow_float: bool = True) -> None:
    require_number(field, value, allow_float=allow_float)
    if value < 0:
        raise ScoringInputError(field, f"must be >= 0, got {value!r}")


def _optional_non_negative(field: str, value, *, allow_float: bool = True):
    """Validate an optional penalty, mapping None to 0."""
    if value is None:
        return 0
    _require_non_negative(field, value, allow_float=allow_float)
    return value


def _require_age_category(value: str) -> None:
    if value not in AGE_CATEGORIES:
        raise ScoringInputError("age_category", f"unknown age category {value!r}")


def _require_gender(value: Optional[str]) -> None:
    if value is not None and value not in GENDERS:
        raise ScoringInputError("gender", f"expected one of {GENDERS}, got {value!r}")


@dataclass
class FencingRankingInput:
    """Ranking-round result: victories out of total bouts fenced."""
    victories: int
    total_bouts: int

    def __post_init__(self):
        _require_non_negative("victories", self.victories, allow_float=False)
        _require_non_negative("total_bouts", self.total_bouts, allow_float=False)
        if self.victories > self.total_bouts:
            raise ScoringInputError(
                "victories",
                f"cannot exceed total_bouts ({self.victories} > {self.total_bouts})",
            )


@dataclass
class FencingDEInput:
    """Final placement in the direct-elimination tableau (1 = winner)."""
    placement: int

    def __post_init__(self):
        require_number("placement", self.placement, allow_float=False)
        if self.placement < 1:
            raise ScoringInputError("placement", f"must be >= 1, got {self.placement!r}")


@dataclass
class ObstacleInput:
    time_seconds: float
    penalty_points: Optional[int] = 0
    is_relay: bool = False

    def __post_init__(self):
        _require_non_negative("time_seconds", self.time_seconds)
        self.penalty_points = _optional_non_negative("penalty_points", self.penalty_points)


@dataclass
class SwimmingInput:
    """
    Swimming result.

    Attributes:
        time_hundredths: Swim time in hundredths of a second (7000 = 1:10.00)
        penalty_points: Points deducted by the referee
        age_category: Determines distance and base time
        gender: "M" or "F"; Masters base times differ by gender
        age: Optional age; Masters 60+ swim the 50m course
    """
    time_hundredths: int
    penalty_points: Optional[int] = 0
    age_category: str = "Senior"
    gender: Optional[str] = None
    age: Optional[int] = None

    def __post_init__(self):
        _require_non_negative("time_hundredths", self.time_hundredths, allow_float=False)
        self.penalty_points = _optional_non_negative("penalty_points", self.penalty_points)
        _require_age_category(self.age_category)
        _require_gender(self.gender)
        if self.age is not None:
            _require_non_negative("age", self.age, allow_float=False)


@dataclass
class LaserRunInput:
    """
    Laser-run result.

    overall_time_seconds, when present, is the timer's adjusted total and
    takes precedence over the finish-line time.
    """
    finish_time_seconds: float
    overall_time_seconds: Optional[float] = None
    penalty_seconds: Optional[float] = 0
    age_category: str = "Senior"
    is_relay: bool = False

    def __post_init__(self):
        _require_non_negative("finish_time_seconds", self.finish_time_seconds)
        if self.overall_time_seconds is not None:
            _require_non_negative("overall_time_seconds", self.overall_time_seconds)
        self.penalty_seconds = _optional_non_negative("penalty_seconds", self.penalty_seconds)
        _require_age_category(self.age_category)

    @property
    def effective_time_seconds(self) -> float:
        if self.overall_time_seconds is not None:
            return self.overall_time_seconds
        return self.finish_time_seconds


@dataclass
class RidingInput:
    """Riding penalties (Masters only). Missing counts mean no penalty."""
    knockdowns: Optional[int] = 0
    disobediences: Optional[int] = 0
    time_over_seconds: Optional[float] = 0
    other_penalties: Optional[int] = 0

    def __post_init__(self):
        self.knockdowns = _optional_non_negative("knockdowns", self.knockdowns, allow_float=False)
        self.disobediences = _optional_non_negative(
            "disobediences", self.disobediences, allow_float=False
        )
        self.time_over_seconds = _optional_non_negative("time_over_seconds", self.time_over_seconds)
        self.other_penalties = _optional_non_negative(
            "other_penalties", self.other_penalties, allow_float=False
        )
