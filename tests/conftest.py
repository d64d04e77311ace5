"""
Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides
shared fixtures for all tests.
"""

from datetime import datetime, timezone

import pytest

from pentascore.bracket import Seed, generate_bracket
from pentascore.config import Settings

FIXED_TIMESTAMP = datetime(2026, 5, 17, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_seeds():
    """Factory for seeds 1..count with athlete ids a1..a<count>."""

    def _make(count):
        return [
            Seed(athlete_id=f"a{n}", seed=n, display_name=f"Athlete {n}")
            for n in range(1, count + 1)
        ]

    return _make


@pytest.fixture
def settings():
    """
    Settings with the rule-book defaults.

    Built directly rather than through get_settings() so that a local
    .env file is not read.
    """
    return Settings(_env_file=None)


@pytest.fixture
def bracket_5(make_seeds):
    """Five athletes in a tableau of 8: seeds 1-3 have first-round byes."""
    return generate_bracket("evt-5", make_seeds(5), generated_at=FIXED_TIMESTAMP)


@pytest.fixture
def bracket_8(make_seeds):
    """Full tableau of 8, no byes."""
    return generate_bracket("evt-8", make_seeds(8), generated_at=FIXED_TIMESTAMP)
