"""
Modern pentathlon scoring constants.

These tables come from the UIPM Competition Rules and the laser-run
handicap rules. Every discipline converts a raw performance into Modern
Pentathlon (MP) points:

- Fencing ranking round: victory value table keyed by total bouts
- Fencing direct elimination: fixed points per final placement
- Obstacle: 400 points at the base time, 1 point per 0.33s
- Swimming: 250 points at the base time, 1 point per time band
- Laser run: 500 points at the target time, 1 point per second
- Riding (Masters only): 300 points minus penalties

Base times differ by age category (and for Masters swimming, by gender),
so lookups go through the get_* helpers below rather than the raw dicts.
"""

from dataclasses import dataclass
from typing import Optional

# =============================================================================
# Fencing Ranking Round
# =============================================================================

# Points awarded for hitting exactly the 250-point victory count
FENCING_RANKING_BASE_POINTS = 250

# total_bouts -> (victories_for_250, value_per_victory)
# A competitor in a round of n fences n - 1 bouts.
FENCING_VICTORY_VALUE_TABLE: dict[int, tuple[int, int]] = {
    60: (42, 3),
    59: (41, 3),
    58: (41, 3),
    57: (40, 3),
    56: (39, 3),
    55: (39, 3),
    54: (38, 3),
    53: (37, 3),
    52: (36, 3),
    51: (36, 3),
    50: (35, 3),
    49: (34, 3),
    48: (34, 3),
    47: (33, 4),
    46: (32, 4),
    45: (32, 4),
    44: (31, 4),
    43: (30, 4),
    42: (29, 4),
    41: (29, 4),
    40: (28, 4),
    39: (27, 5),
    38: (27, 5),
    37: (26, 5),
    36: (25, 5),
    35: (25, 5),
    34: (24, 5),
    33: (23, 6),
    32: (22, 6),
    31: (22, 6),
    30: (21, 6),
    29: (20, 7),
    28: (20, 7),
    27: (19, 7),
    26: (18, 7),
    25: (18, 7),
    24: (17, 7),
    23: (16, 7),
    22: (15, 8),
    21: (15, 8),
    20: (14, 8),
    19: (13, 8),
}

MIN_TABLE_BOUTS = min(FENCING_VICTORY_VALUE_TABLE)
MAX_TABLE_BOUTS = max(FENCING_VICTORY_VALUE_TABLE)

# =============================================================================
# Fencing Direct Elimination
# =============================================================================

# Final placement -> points. Anything beyond 18th (eliminated in the
# initial bout) scores 0.
FENCING_DE_PLACEMENT_POINTS: dict[int, int] = {
    1: 250,
    2: 244,
    3: 238,
    4: 236,
    5: 230,
    6: 228,
    7: 226,
    8: 224,
    9: 218,
    10: 216,
    11: 214,
    12: 212,
    13: 210,
    14: 208,
    15: 206,
    16: 204,
    17: 198,
    18: 196,
}

# =============================================================================
# Obstacle
# =============================================================================

OBSTACLE_CONFIG = {
    "individual": {"base_time_seconds": "15.00", "base_points": 400, "seconds_per_point": "0.33"},
    "relay": {"base_time_seconds": "35.00", "base_points": 400, "seconds_per_point": "0.33"},
}

# =============================================================================
# Swimming
# =============================================================================
# - Standard (Senior -> U13): 100m, 1:10.00 = 250pts, 1pt per 0.20s
# - Youth (U11, U9): 50m, 0:45.00 = 250pts, 1pt per 0.50s
# - Masters 30+/40+/50+ Men: 100m, 1:18.00 = 250pts, 1pt per 0.50s
# - Masters 30+/40+/50+ Women: 100m, 1:30.00 = 250pts, 1pt per 0.50s
# - Masters 60+/70+ Men: 50m, 0:38.00 = 250pts, 1pt per 0.50s
# - Masters 60+/70+ Women: 50m, 0:43.00 = 250pts, 1pt per 0.50s


@dataclass(frozen=True)
class SwimmingConfig:
    """Base time and band width for one swimming scoring category."""
    distance_meters: int
    base_time_hundredths: int
    base_points: int
    increment_hundredths: int


SWIMMING_CONFIG: dict[str, SwimmingConfig] = {
    "standard": SwimmingConfig(100, 7000, 250, 20),
    "youth": SwimmingConfig(50, 4500, 250, 50),
    "masters_M": SwimmingConfig(100, 7800, 250, 50),
    "masters_F": SwimmingConfig(100, 9000, 250, 50),
    "masters_60_M": SwimmingConfig(50, 3800, 250, 50),
    "masters_60_F": SwimmingConfig(50, 4300, 250, 50),
}

# Masters athletes from this age swim the 50m distance
MASTERS_SHORT_COURSE_AGE = 60

# =============================================================================
# Laser Run
# =============================================================================

LASER_RUN_BASE_POINTS = 500


@dataclass(frozen=True)
class LaserRunTarget:
    """Course layout and target time for one laser-run age group."""
    age_group: str
    total_distance_meters: int
    running_sequences: str
    shooting_sequences: str
    target_time_seconds: int


SENIOR_LASER_RUN_GROUP = "Senior, Junior, U19"

LASER_RUN_INDIVIDUAL_TARGETS: tuple[LaserRunTarget, ...] = (
    LaserRunTarget(SENIOR_LASER_RUN_GROUP, 3000, "4 x 600m", "4 x 5 hits", 800),  # 13:20
    LaserRunTarget("U17", 2400, "3 x 600m", "3 x 5 hits", 630),  # 10:30
    LaserRunTarget("U15", 1800, "3 x 600m", "3 x 5 hits", 460),  # 7:40
    LaserRunTarget("U13", 900, "2 x 300m", "2 x 5 hits", 320),  # 5:20
    LaserRunTarget("U11", 600, "2 x 300m", "2 x 5 hits", 240),  # 4:00
    LaserRunTarget("U9", 600, "2 x 300m", "2 x 5 hits", 240),  # 4:00
)

LASER_RUN_RELAY_TARGETS: tuple[LaserRunTarget, ...] = (
    LaserRunTarget(SENIOR_LASER_RUN_GROUP, 3600, "2 x 3 x 600m", "2 x 3 x 5 hits", 800),
    LaserRunTarget("U17", 2400, "2 x 2 x 600m", "2 x 2 x 5 hits", 460),
    LaserRunTarget("U15", 2400, "2 x 2 x 600m", "2 x 2 x 5 hits", 460),
    LaserRunTarget("U13", 1200, "2 x 2 x 300m", "2 x 2 x 5 hits", 320),
    LaserRunTarget("U11", 1200, "2 x 2 x 300m", "2 x 2 x 5 hits", 320),
    LaserRunTarget("U9", 1200, "2 x 2 x 300m", "2 x 2 x 5 hits", 320),
)

# Age category -> laser-run target group. Masters use the Senior baselines.
LASER_RUN_AGE_GROUPS: dict[str, str] = {
    "Senior": SENIOR_LASER_RUN_GROUP,
    "Junior": SENIOR_LASER_RUN_GROUP,
    "U19": SENIOR_LASER_RUN_GROUP,
    "U17": "U17",
    "U15": "U15",
    "U13": "U13",
    "U11": "U11",
    "U9": "U9",
    "Masters": SENIOR_LASER_RUN_GROUP,
}

# =============================================================================
# Riding (Masters only)
# =============================================================================

RIDING_CONFIG = {
    "base_points": 300,
    "knockdown_penalty": 7,
    "disobedience_penalty": 10,
    "time_over_penalty_per_second": 1,
    "other_penalty": 10,
}

# =============================================================================
# Masters Age Handicap
# =============================================================================

# Age with no bonus; younger athletes lose points, older athletes gain them
MASTERS_HANDICAP_BASE_AGE = 40

# =============================================================================
# Team Classification
# =============================================================================

# Best N athletes of a nation count towards its team score
TEAM_COUNTING_ATHLETES = 3


def get_swimming_config(
    age_category: str = "Senior",
    gender: Optional[str] = None,
    age: Optional[int] = None,
) -> SwimmingConfig:
    """
    Get the swimming base time and band width for an athlete.

    Args:
        age_category: Age category (e.g. "Senior", "U11", "Masters")
        gender: "M" or "F". Only used for Masters; defaults to "M".
        age: Optional age. Masters aged 60+ swim the 50m short course.

    Returns:
        SwimmingConfig for the category

    Example:
        get_swimming_config("Masters", "F")  # 1:30.00 base, 0.50s bands
    """
    if age_category in ("U9", "U11"):
        return SWIMMING_CONFIG["youth"]

    if age_category == "Masters":
        g = gender or "M"
        if age is not None and age >= MASTERS_SHORT_COURSE_AGE:
            return SWIMMING_CONFIG[f"masters_60_{g}"]
        return SWIMMING_CONFIG[f"masters_{g}"]

    return SWIMMING_CONFIG["standard"]


def get_laser_run_config(age_category: str = "Senior", is_relay: bool = False) -> LaserRunTarget:
    """
    Get the laser-run course configuration for an age category.

    Unknown categories fall back to the Senior course.
    """
    targets = LASER_RUN_RELAY_TARGETS if is_relay else LASER_RUN_INDIVIDUAL_TARGETS
    group_name = LASER_RUN_AGE_GROUPS.get(age_category, SENIOR_LASER_RUN_GROUP)
    for target in targets:
        if target.age_group == group_name:
            return target
    return targets[0]


def get_laser_run_target_time(age_category: str = "Senior", is_relay: bool = False) -> int:
    """
    Get the laser-run target time (worth exactly 500 points) in seconds.

    Example:
        get_laser_run_target_time("U17")          # 630 (10:30)
        get_laser_run_target_time("U17", True)    # 460 (7:40)
    """
    return get_laser_run_config(age_category, is_relay).target_time_seconds


def get_masters_handicap_bonus(age: int) -> int:
    """
    Get the Masters age handicap bonus added to an athlete's total.

    Linear interpolation between the published examples:
    age 30 = -50, age 40 = 0, age 50 = +50, age 60 = +150, age 70 = +300.

    Examples:
        get_masters_handicap_bonus(40)  # 0
        get_masters_handicap_bonus(65)  # 225
    """
    if age <= 30:
        return -50 + (age - 30) * 5
    if age <= 50:
        return (age - MASTERS_HANDICAP_BASE_AGE) * 5
    if age <= 60:
        return 50 + (age - 50) * 10
    return 150 + (age - 60) * 15
