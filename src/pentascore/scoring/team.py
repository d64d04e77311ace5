"""
Team classification.

team_score = sum of the best three athletes' totals from the same nation.
Nations with fewer than three athletes are not classified; with four or
more, only the best three count.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Sequence

from pentascore.scoring.constants import TEAM_COUNTING_ATHLETES


@dataclass
class TeamInput:
    athlete_id: str
    display_name: str
    country: str
    total_points: int


@dataclass
class TeamResult:
    country: str
    athletes: list[TeamInput] = field(default_factory=list)
    team_total: int = 0
    rank: int = 0


def calculate_team_standings(athletes: Sequence[TeamInput]) -> list[TeamResult]:
    """
    Rank nations by the combined total of their best three athletes.

    Ties on team total keep first-appearance order of the nations.
    """
    by_country: dict[str, list[TeamInput]] = defaultdict(list)
    for athlete in athletes:
        by_country[athlete.country].append(athlete)

    teams = []
    for country, members in by_country.items():
        if len(members) < TEAM_COUNTING_ATHLETES:
            continue

        counting = sorted(members, key=lambda a: a.total_points, reverse=True)[:TEAM_COUNTING_ATHLETES]
        teams.append(
            TeamResult(
                country=country,
                athletes=counting,
                team_total=sum(a.total_points for a in counting),
            )
        )

    teams.sort(key=lambda t: t.team_total, reverse=True)
    for rank, team in enumerate(teams, start=1):
        team.rank = rank

    return teams
