"""
Laser run handicap start order.

The laser run is a pursuit: the overall leader after the earlier
disciplines starts first and everyone else starts one second later per
point behind. The first athlete across the line wins the competition.

Steps:
    1. Find the leader (max cumulative points)
    2. raw_delay = leader_points - athlete_points
    3. Athletes more than 90s behind join the pack start: they all
       start together at 1:30 instead of being individually staggered
    4. Sort by delay, pack starters last (by raw delay among themselves)
    5. Shooting station = 1-based position in that order
    6. Gates alternate A/B for staggered starters; pack starters share
       the pack gate
    7. Format the start delay as M:SS

The sort is stable, so athletes tied on points keep their input order.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from pentascore.config import Settings, get_settings
from pentascore.scoring.inputs import ScoringInputError, require_number
from pentascore.scoring.timing import format_minutes_seconds

logger = logging.getLogger(__name__)

GATES = ("A", "B")


@dataclass
class HandicapInput:
    athlete_id: str
    display_name: str
    cumulative_points: int


@dataclass
class HandicapAssignment:
    """
    Start slot for one athlete.

    Attributes:
        raw_delay_seconds: Points behind the leader
        capped_delay_seconds: Actual start delay (raw delay, or the pack
            start time for pack starters)
        station_number: Shooting station, 1-based start position
        gate_label: Start gate ("A"/"B", or the pack gate)
        formatted_start_time: capped delay as M:SS
    """
    athlete_id: str
    display_name: str
    cumulative_points: int
    raw_delay_seconds: int
    capped_delay_seconds: int
    is_pack_start: bool
    station_number: int
    gate_label: str
    formatted_start_time: str


def calculate_handicap_starts(
    athletes: Sequence[HandicapInput],
    settings: Optional[Settings] = None,
) -> list[HandicapAssignment]:
    """
    Calculate handicap start delays, stations and gates for the laser run.

    Args:
        athletes: Cumulative points per athlete before the laser run
        settings: Pack start threshold/time and gate (cached settings if omitted)

    Returns:
        Assignments in start order (empty list for no athletes)

    Raises:
        ScoringInputError: On duplicate athlete ids or invalid points

    Example:
        starts = calculate_handicap_starts([
            HandicapInput("a", "Alice", 1100),
            HandicapInput("b", "Bea", 1085),
            HandicapInput("c", "Cleo", 950),
        ])
        # a: 0:00 station 1 gate A, b: 0:15 station 2 gate B,
        # c: 1:30 station 3 pack start
    """
    if not athletes:
        return []

    settings = settings or get_settings()
    threshold = settings.handicap_pack_start_threshold_seconds
    pack_time = settings.handicap_pack_start_time_seconds

    seen: set[str] = set()
    for athlete in athletes:
        require_number("cumulative_points", athlete.cumulative_points)
        if athlete.athlete_id in seen:
            raise ScoringInputError("athlete_id", f"duplicate athlete {athlete.athlete_id!r}")
        seen.add(athlete.athlete_id)

    leader_points = max(a.cumulative_points for a in athletes)

    with_delays = []
    for athlete in athletes:
        raw_delay = leader_points - athlete.cumulative_points
        is_pack_start = raw_delay > threshold
        with_delays.append((athlete, raw_delay, pack_time if is_pack_start else raw_delay, is_pack_start))

    # Staggered starters by delay, then the pack by how far behind they are
    with_delays.sort(key=lambda row: (row[3], row[1] if row[3] else row[2]))

    assignments = []
    for index, (athlete, raw_delay, capped_delay, is_pack_start) in enumerate(with_delays):
        gate = settings.handicap_pack_gate if is_pack_start else GATES[index % 2]
        assignments.append(
            HandicapAssignment(
                athlete_id=athlete.athlete_id,
                display_name=athlete.display_name,
                cumulative_points=athlete.cumulative_points,
                raw_delay_seconds=raw_delay,
                capped_delay_seconds=capped_delay,
                is_pack_start=is_pack_start,
                station_number=index + 1,
                gate_label=gate,
                formatted_start_time=format_minutes_seconds(capped_delay),
            )
        )

    pack_count = sum(1 for a in assignments if a.is_pack_start)
    logger.debug(
        "Handicap starts: %d athletes, leader %s points, %d pack starters",
        len(assignments), leader_points, pack_count,
    )
    return assignments
