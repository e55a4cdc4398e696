"""Prompt builders for the three travel content kinds.

Every builder is a pure function of its arguments: no clock, no randomness.
"""
from __future__ import annotations
import math
from datetime import date, datetime, time, timezone
from typing import Iterable, Union

from travel_genai.common.templates import load_template, render_prompt

DateLike = Union[datetime, date, str]

SECONDS_PER_DAY = 24 * 60 * 60

def parse_datetime(value: DateLike) -> datetime:
    """
    Coerce an ISO-8601 string, date or datetime into an aware UTC datetime.

    Naive values are taken to be UTC. A trailing "Z" is accepted.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def format_date(value: DateLike) -> str:
    """US numeric date, e.g. 8/15/2024."""
    d = parse_datetime(value)
    return f"{d.month}/{d.day}/{d.year}"

def trip_duration_days(start: DateLike, end: DateLike) -> int:
    """Whole days between the two boundaries, rounded up, never below 1."""
    delta = parse_datetime(end) - parse_datetime(start)
    return max(1, math.ceil(delta.total_seconds() / SECONDS_PER_DAY))

def _trip_values(start: DateLike, end: DateLike) -> dict[str, object]:
    return {
        "start": format_date(start),
        "end": format_date(end),
        "duration": trip_duration_days(start, end),
    }

def build_weather_prompt(city: str, start: DateLike, end: DateLike, trip: str) -> str:
    values = _trip_values(start, end)
    values.update(city=city, trip=trip)
    return render_prompt(load_template("weather"), values)

def build_trip_plan_prompt(city: str, start: DateLike, end: DateLike, trip: str) -> str:
    values = _trip_values(start, end)
    values.update(city=city, trip=trip)
    return render_prompt(load_template("trip_plan"), values)

def build_money_saving_tips_prompt(
    cities: Iterable[str], start: DateLike, end: DateLike, trip_name: str
) -> str:
    values = _trip_values(start, end)
    values.update(cities=", ".join(cities), trip_name=trip_name)
    return render_prompt(load_template("money_saving_tips"), values)
