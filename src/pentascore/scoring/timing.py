"""
Time string parsing and formatting.

Score entry sheets carry times as strings:
- Swimming: "MM:SS.hh" (e.g. "01:10.00"), stored as hundredths of a second
- Laser run: "M:SS" or "MM:SS" with optional fraction, or plain seconds
- Handicap start delays: "M:SS"

Malformed strings are rejected rather than silently scored as zero.
"""

import re
from decimal import Decimal
from numbers import Real

from pentascore.scoring.inputs import ScoringInputError
from pentascore.scoring.utils import round_half_up, to_decimal

# M:SS, MM:SS, optionally followed by .h or .hh
CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{1,2})(?:\.(\d{1,2}))?$")
PLAIN_SECONDS_PATTERN = re.compile(r"^\d+(?:\.\d+)?$")


def parse_swimming_time(time_str: str) -> int:
    """
    Convert a swim time string to hundredths of a second.

    A single fractional digit means tenths: "1:10.5" is 1:10.50.

    Raises:
        ScoringInputError: If the string is not M:SS[.hh] or seconds >= 60

    Examples:
        >>> parse_swimming_time("01:10.00")
        7000
        >>> parse_swimming_time("0:50.23")
        5023
        >>> parse_swimming_time("1:05.5")
        6550
    """
    match = CLOCK_PATTERN.match((time_str or "").strip())
    if not match:
        raise ScoringInputError("time", f"expected MM:SS.hh, got {time_str!r}")

    minutes = int(match.group(1))
    seconds = int(match.group(2))
    if seconds >= 60:
        raise ScoringInputError("time", f"seconds must be < 60, got {time_str!r}")

    fraction = match.group(3) or "0"
    hundredths = int(fraction.ljust(2, "0"))

    return minutes * 6000 + seconds * 100 + hundredths


def format_swimming_time(hundredths: int) -> str:
    """
    Convert hundredths of a second to "MM:SS.hh".

    Examples:
        >>> format_swimming_time(7000)
        '01:10.00'
        >>> format_swimming_time(5023)
        '00:50.23'
    """
    total_seconds, remaining = divmod(int(hundredths), 100)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}.{remaining:02d}"


def parse_laser_run_time(time_str: str) -> float:
    """
    Convert a laser-run time string to seconds.

    Accepts "M:SS", "MM:SS" with an optional fraction, or plain seconds.

    Raises:
        ScoringInputError: If the string matches neither form

    Examples:
        >>> parse_laser_run_time("13:20")
        800.0
        >>> parse_laser_run_time("12:59.5")
        779.5
        >>> parse_laser_run_time("812")
        812.0
    """
    text = (time_str or "").strip()
    match = CLOCK_PATTERN.match(text)
    if match:
        minutes = int(match.group(1))
        seconds = int(match.group(2))
        if seconds >= 60:
            raise ScoringInputError("time", f"seconds must be < 60, got {time_str!r}")
        fraction = Decimal(f"0.{match.group(3)}") if match.group(3) else Decimal(0)
        return float(minutes * 60 + seconds + fraction)

    if PLAIN_SECONDS_PATTERN.match(text):
        return float(text)

    raise ScoringInputError("time", f"expected M:SS or seconds, got {time_str!r}")


def format_minutes_seconds(total_seconds: Real) -> str:
    """
    Format seconds as "M:SS", rounding to the nearest whole second.

    Examples:
        >>> format_minutes_seconds(800)
        '13:20'
        >>> format_minutes_seconds(90)
        '1:30'
        >>> format_minutes_seconds(5)
        '0:05'
    """
    whole = round_half_up(to_decimal(total_seconds))
    minutes, seconds = divmod(whole, 60)
    return f"{minutes}:{seconds:02d}"


# Laser-run results and handicap start delays share the same display format
format_laser_run_time = format_minutes_seconds
