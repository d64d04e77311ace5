"""Shared discipline and age-category vocabulary.

Input validation in pentascore.scoring.inputs checks age categories and
genders against these tuples.
"""

# Disciplines in competition order.
DISCIPLINE_ORDER: tuple[str, ...] = (
    "fencing_ranking",
    "fencing_de",
    "obstacle",
    "swimming",
    "laser_run",
    "riding",
)

DISCIPLINE_NAMES: dict[str, str] = {
    "fencing_ranking": "Fencing - Ranking",
    "fencing_de": "Fencing - DE",
    "obstacle": "Obstacle",
    "swimming": "Swimming",
    "laser_run": "Laser Run",
    "riding": "Riding",
}

# Age categories, youngest first.
AGE_CATEGORIES: tuple[str, ...] = (
    "U9",
    "U11",
    "U13",
    "U15",
    "U17",
    "U19",
    "Junior",
    "Senior",
    "Masters",
)

GENDERS: tuple[str, ...] = ("M", "F")
