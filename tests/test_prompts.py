from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from travel_genai.common.prompts import (
    build_money_saving_tips_prompt,
    build_trip_plan_prompt,
    build_weather_prompt,
    format_date,
    parse_datetime,
    trip_duration_days,
)
from travel_genai.common.templates import load_template, render_prompt

WEATHER_LABELS = ("TEMPERATURE:", "CONDITION:", "ENGLISH_CONDITION:", "FORECAST_ENGLISH:", "SUMMARY_ENGLISH:")


def test_render_prompt_substitution() -> None:
    tpl = "Hello {{city}} for {{duration}} days, {{city}}!"
    out = render_prompt(tpl, {"city": "Kyoto", "duration": 4})
    assert out == "Hello Kyoto for 4 days, Kyoto!"


def test_packaged_templates_carry_label_contract() -> None:
    assert "SUMMARY_ENGLISH:" in load_template("weather")
    assert "ACTIVITIES:" in load_template("trip_plan")
    assert "TIP:" in load_template("money_saving_tips")


@pytest.mark.parametrize(
    "start, end, expected",
    [
        ("2024-08-15", "2024-08-17", 2),
        ("2024-08-15T10:00:00.000Z", "2024-08-17T11:00:00.000Z", 3),
        ("2024-08-15T10:00:00Z", "2024-08-15T10:00:00Z", 1),
        (date(2024, 8, 1), date(2024, 8, 8), 7),
    ],
)
def test_trip_duration_days(start, end, expected: int) -> None:  # noqa: ANN001
    assert trip_duration_days(start, end) == expected


def test_parse_datetime_treats_naive_as_utc() -> None:
    assert parse_datetime("2024-08-15") == datetime(2024, 8, 15, tzinfo=timezone.utc)
    assert parse_datetime("2024-08-15T12:30:00+02:00") == datetime(2024, 8, 15, 10, 30, tzinfo=timezone.utc)


def test_format_date_us_numeric() -> None:
    assert format_date("2024-08-05T10:00:00.000Z") == "8/5/2024"


def test_weather_prompt_paris_honeymoon() -> None:
    prompt = build_weather_prompt("Paris", "2024-08-15", "2024-08-18", "honeymoon")
    assert "Paris" in prompt
    assert "3-day" in prompt
    assert "honeymoon" in prompt
    for label in WEATHER_LABELS:
        assert label in prompt
    assert "8/15/2024 - 8/18/2024" in prompt
    assert "{{" not in prompt


def test_prompts_are_deterministic() -> None:
    args = ("Paris", "2024-08-15", "2024-08-18", "honeymoon")
    assert build_weather_prompt(*args) == build_weather_prompt(*args)
    assert build_trip_plan_prompt(*args) == build_trip_plan_prompt(*args)


def test_trip_plan_prompt() -> None:
    prompt = build_trip_plan_prompt("Lisbon", "2024-05-01", "2024-05-05", "family holiday")
    for label in ("TITLE:", "DESCRIPTION:", "ACTIVITIES:", "SUMMARY:"):
        assert label in prompt
    assert "Amazing 4-Day Adventure in Lisbon" in prompt
    assert "family holiday" in prompt
    assert "{{" not in prompt


def test_money_saving_tips_prompt() -> None:
    prompt = build_money_saving_tips_prompt(["Paris", "Lyon"], "2024-08-15", "2024-08-20", "French summer")
    assert "Cities to visit: Paris, Lyon" in prompt
    assert "Trip Name: French summer" in prompt
    assert "(5 days)" in prompt
    assert "under 10 words" in prompt
    assert "TIP:" in prompt
    assert "{{" not in prompt
