"""
Modern pentathlon points module.

Converts raw performances into MP points:
- Fencing ranking round (victory value table) and direct elimination
  (placement lookup)
- Obstacle, swimming and laser run (time against a base time)
- Riding (penalty deductions, Masters only)
- Laser run handicap start order (pursuit start delays, stations, gates)
- Masters age handicap and team classification
"""

from pentascore.scoring.fencing import (
    FencingRankingParams,
    calculate_fencing_de,
    calculate_fencing_ranking,
    get_all_de_placements,
    get_fencing_ranking_params,
)
from pentascore.scoring.handicap import HandicapAssignment, HandicapInput, calculate_handicap_starts
from pentascore.scoring.inputs import (
    FencingDEInput,
    FencingRankingInput,
    LaserRunInput,
    ObstacleInput,
    RidingInput,
    ScoringInputError,
    SwimmingInput,
)
from pentascore.scoring.laser_run import (
    LaserRunLap,
    LaserRunShootTime,
    LaserRunTimerData,
    aggregate_laser_run,
    calculate_laser_run,
)
from pentascore.scoring.masters import apply_masters_handicap, calculate_age
from pentascore.scoring.obstacle import calculate_obstacle
from pentascore.scoring.riding import calculate_riding
from pentascore.scoring.swimming import calculate_swimming
from pentascore.scoring.team import TeamInput, TeamResult, calculate_team_standings
from pentascore.scoring.timing import (
    format_laser_run_time,
    format_swimming_time,
    parse_laser_run_time,
    parse_swimming_time,
)

__all__ = [
    "FencingDEInput",
    "FencingRankingInput",
    "FencingRankingParams",
    "HandicapAssignment",
    "HandicapInput",
    "LaserRunInput",
    "LaserRunLap",
    "LaserRunShootTime",
    "LaserRunTimerData",
    "ObstacleInput",
    "RidingInput",
    "ScoringInputError",
    "SwimmingInput",
    "TeamInput",
    "TeamResult",
    "aggregate_laser_run",
    "apply_masters_handicap",
    "calculate_age",
    "calculate_fencing_de",
    "calculate_fencing_ranking",
    "calculate_handicap_starts",
    "calculate_laser_run",
    "calculate_obstacle",
    "calculate_riding",
    "calculate_swimming",
    "calculate_team_standings",
    "format_laser_run_time",
    "format_swimming_time",
    "get_all_de_placements",
    "get_fencing_ranking_params",
    "parse_laser_run_time",
    "parse_swimming_time",
]
