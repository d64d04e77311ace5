"""
Laser run points and timer aggregation.

Formula:
    MP_points = 500 + (target_time_seconds - time_seconds) - penalty_seconds

1 second = 1 MP point, and penalty seconds are deducted directly. The
target time depends on age category and whether the race is a relay
(Senior individual: 13:20 = 800s).

The timer app records lap splits and the time spent at each shooting
visit. aggregate_laser_run() turns those raw splits into per-lap shoot
and run times, and for mass starts an adjusted time with the handicap
delay removed.
"""

from dataclasses import dataclass, field
from typing import Optional

from pentascore.scoring.constants import LASER_RUN_BASE_POINTS, get_laser_run_target_time
from pentascore.scoring.inputs import LaserRunInput, ScoringInputError
from pentascore.scoring.utils import floor_at_zero, round_half_up, to_decimal

LAP_TYPES = ("shoot", "run")
START_MODES = ("staggered", "mass")


def calculate_laser_run(data: LaserRunInput) -> int:
    """
    Calculate laser run MP points.

    Examples:
        calculate_laser_run(LaserRunInput(finish_time_seconds=800))  # 500
        calculate_laser_run(LaserRunInput(finish_time_seconds=790, penalty_seconds=10))  # 500
        calculate_laser_run(LaserRunInput(finish_time_seconds=700, age_category="U17"))  # 430
    """
    target_time = get_laser_run_target_time(data.age_category, data.is_relay)

    points = (
        LASER_RUN_BASE_POINTS
        + (to_decimal(target_time) - to_decimal(data.effective_time_seconds))
        - to_decimal(data.penalty_seconds)
    )
    return floor_at_zero(round_half_up(points))


@dataclass
class LaserRunLap:
    """A lap split from the timer: seconds since the athlete's start."""
    lap: int
    split_timestamp: float
    type: str  # 'shoot' or 'run'


@dataclass
class LaserRunShootTime:
    """Time spent on the range during one shooting visit."""
    visit: int
    shoot_time_seconds: float
    timed_out: bool = False


@dataclass
class LaserRunTimerData:
    """Raw timer capture for one athlete."""
    overall_time_seconds: float
    start_mode: str = "staggered"
    handicap_start_delay: float = 0
    is_pack_start: bool = False
    target_position: int = 0
    wave: int = 1
    gate_assignment: str = "A"
    total_laps: int = 0
    laps: list[LaserRunLap] = field(default_factory=list)
    shoot_times: list[LaserRunShootTime] = field(default_factory=list)


@dataclass
class LaserRunAggregatedLap:
    lap: int
    split_timestamp: float
    lap_time_seconds: float
    type: str
    shoot_time_seconds: Optional[float]
    run_time_seconds: float


@dataclass
class LaserRunAggregatedRecord:
    """Per-athlete laser run summary ready to be stored alongside the score."""
    overall_time_seconds: float
    adjusted_time_seconds: Optional[float]
    total_shoot_time_seconds: float
    total_run_time_seconds: float
    penalty_seconds: float
    start_mode: str
    total_laps: int
    laps: list[LaserRunAggregatedLap]
    handicap_start_delay: float
    is_pack_start: bool
    gate_assignment: str
    target_position: int
    wave: int


def aggregate_laser_run(data: LaserRunTimerData) -> LaserRunAggregatedRecord:
    """
    Split a laser-run timer capture into shooting and running time.

    Each lap's time is the difference between consecutive splits. The n-th
    'shoot' lap is matched with the n-th shooting visit; the rest of that
    lap counts as running. Mass-start athletes also get an adjusted time
    with their handicap delay removed.

    Args:
        data: Raw timer capture

    Returns:
        LaserRunAggregatedRecord (penalty_seconds starts at 0; referees
        add penalties separately)

    Raises:
        ScoringInputError: On unknown lap types or start modes, or splits
            that go backwards
    """
    if data.start_mode not in START_MODES:
        raise ScoringInputError("start_mode", f"expected one of {START_MODES}, got {data.start_mode!r}")

    total_shoot = sum(st.shoot_time_seconds for st in data.shoot_times)
    total_run = data.overall_time_seconds - total_shoot
    adjusted = (
        data.overall_time_seconds - data.handicap_start_delay
        if data.start_mode == "mass"
        else None
    )

    laps: list[LaserRunAggregatedLap] = []
    previous_split = 0.0
    shoot_visits = 0

    for lap in data.laps:
        if lap.type not in LAP_TYPES:
            raise ScoringInputError("laps", f"unknown lap type {lap.type!r} on lap {lap.lap}")
        if lap.split_timestamp < previous_split:
            raise ScoringInputError("laps", f"split for lap {lap.lap} is before the previous split")

        lap_time = lap.split_timestamp - previous_split
        previous_split = lap.split_timestamp

        shoot_time = None
        if lap.type == "shoot":
            if shoot_visits < len(data.shoot_times):
                shoot_time = data.shoot_times[shoot_visits].shoot_time_seconds
            shoot_visits += 1

        laps.append(
            LaserRunAggregatedLap(
                lap=lap.lap,
                split_timestamp=lap.split_timestamp,
                lap_time_seconds=lap_time,
                type=lap.type,
                shoot_time_seconds=shoot_time,
                run_time_seconds=lap_time - shoot_time if shoot_time is not None else lap_time,
            )
        )

    return LaserRunAggregatedRecord(
        overall_time_seconds=data.overall_time_seconds,
        adjusted_time_seconds=adjusted,
        total_shoot_time_seconds=total_shoot,
        total_run_time_seconds=total_run,
        penalty_seconds=0,
        start_mode=data.start_mode,
        total_laps=data.total_laps,
        laps=laps,
        handicap_start_delay=data.handicap_start_delay,
        is_pack_start=data.is_pack_start,
        gate_assignment=data.gate_assignment,
        target_position=data.target_position,
        wave=data.wave,
    )
