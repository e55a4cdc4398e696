"""Turn label-prefixed model replies into typed travel records.

The model is asked to answer with lines such as::

    TEMPERATURE: 19
    CONDITION: rainy
    SUMMARY_ENGLISH: 🌧️ Expect showers most afternoons...

Parsing runs in two passes. The line pass reads every trimmed line that
starts with a known label and keeps the value after the colon; lines without
a label are skipped, so a field that spans several lines keeps only its first
line. The overflow pass then re-reads long-form fields (summaries, tips) that
came out shorter than their threshold, taking everything from the label's
first occurrence to the end of the reply.

The public `extract_*` functions never raise. If parsing blows up they return
a degraded record built from the head of the raw reply.
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Sequence

from travel_genai.common.schema import (
    ExtractionContext,
    MoneySavingTipRecord,
    TripPlanRecord,
    WeatherRecord,
)

LOGGER = logging.getLogger("travel_genai.extraction")

OVERFLOW_MIN_CHARS = 50
DEFAULT_TEMPERATURE = 25
DEFAULT_CONDITION_KEY = "partly-cloudy"
DEFAULT_ICON = "🌤️"
DEFAULT_CONDITION_LABEL = "Pleasant weather"
TRIP_PLAN_ICON = "🗺️"
GENERIC_TIP = (
    "Consider using public transportation, buying attraction tickets in advance, "
    "and looking for local deals to save money on your trip."
)

# condition keyword -> (icon, English label)
CONDITIONS: dict[str, tuple[str, str]] = {
    "sunny": ("☀️", "Bright sunshine"),
    "clear": ("☀️", "Clear skies"),
    "partly-cloudy": ("🌤️", "Partly cloudy"),
    "cloudy": ("☁️", "Cloudy"),
    "overcast": ("☁️", "Overcast"),
    "rainy": ("🌧️", "Rainy"),
    "rain": ("🌧️", "Rain"),
    "stormy": ("⛈️", "Stormy"),
    "snow": ("❄️", "Snowy"),
    "fog": ("🌫️", "Foggy"),
    "windy": ("💨", "Windy"),
}

@dataclass(frozen=True)
class FieldSpec:
    """
    How to read one labeled field.

    Attributes:
        label: Label token before the colon, e.g. "SUMMARY".
        joined: Keep everything after the first colon. When False only the
            segment between the first and second colon is kept.
        overflow_min: Re-capture to end of text when shorter than this.
        first_only: Keep the first matching line instead of the last.
    """
    label: str
    joined: bool = True
    overflow_min: int | None = None
    first_only: bool = False

WEATHER_FIELDS = (
    FieldSpec("TEMPERATURE", joined=False),
    FieldSpec("CONDITION", joined=False),
    FieldSpec("ENGLISH_CONDITION", joined=False),
    FieldSpec("FORECAST_ENGLISH"),
    FieldSpec("SUMMARY_ENGLISH", overflow_min=OVERFLOW_MIN_CHARS),
)

TRIP_PLAN_FIELDS = (
    FieldSpec("TITLE"),
    FieldSpec("DESCRIPTION"),
    FieldSpec("ACTIVITIES"),
    FieldSpec("SUMMARY", overflow_min=OVERFLOW_MIN_CHARS),
)

MONEY_SAVING_TIP_FIELDS = (
    FieldSpec("TIP", overflow_min=OVERFLOW_MIN_CHARS, first_only=True),
)

@lru_cache(maxsize=None)
def _label_pattern(label: str, anchored: bool) -> re.Pattern[str]:
    prefix = "^" if anchored else ""
    return re.compile(rf"{prefix}{re.escape(label)}\s*:")

def _scan_lines(ctx: ExtractionContext, specs: Sequence[FieldSpec]) -> None:
    for line in ctx.lines:
        stripped = line.strip()
        for spec in specs:
            if spec.first_only and ctx.has(spec.label):
                continue
            if not _label_pattern(spec.label, True).match(stripped):
                continue
            parts = stripped.split(":")
            value = ":".join(parts[1:]) if spec.joined else parts[1]
            ctx.fields[spec.label] = value.strip()
            break

def _recover_overflow(ctx: ExtractionContext, specs: Sequence[FieldSpec]) -> None:
    for spec in specs:
        if spec.overflow_min is None or len(ctx.get(spec.label)) >= spec.overflow_min:
            continue
        match = _label_pattern(spec.label, False).search(ctx.raw)
        if match:
            ctx.fields[spec.label] = ctx.raw[match.end():].strip()

def extract_fields(raw: str, specs: Iterable[FieldSpec]) -> dict[str, str]:
    """
    Run both parsing passes and return the captured values by label.

    Labels that were never seen are absent from the result. May raise on
    input that is not text; the `extract_*` wrappers absorb that.
    """
    specs = tuple(specs)
    ctx = ExtractionContext.from_reply(raw)
    _scan_lines(ctx, specs)
    _recover_overflow(ctx, specs)
    return dict(ctx.fields)

def parse_temperature(value: str, default: int = DEFAULT_TEMPERATURE) -> int:
    """Leading integer of `value` ("19°C" -> 19), or `default`."""
    match = re.match(r"[+-]?\d+", value.strip())
    return int(match.group()) if match else default

def condition_icon(condition: str) -> str:
    return CONDITIONS.get(condition.strip().lower(), (DEFAULT_ICON, DEFAULT_CONDITION_LABEL))[0]

def condition_label(condition: str) -> str:
    return CONDITIONS.get(condition.strip().lower(), (DEFAULT_ICON, DEFAULT_CONDITION_LABEL))[1]

def _head(raw: object, limit: int) -> str:
    return raw[:limit] if isinstance(raw, str) else ""

def extract_weather(raw: str, city: str) -> WeatherRecord:
    try:
        fields = extract_fields(raw, WEATHER_FIELDS)
        temperature = parse_temperature(fields.get("TEMPERATURE", ""))
        key = fields.get("CONDITION", "").lower() or DEFAULT_CONDITION_KEY
        icon = condition_icon(key)
        if fields.get("ENGLISH_CONDITION"):
            condition = fields["ENGLISH_CONDITION"]
        elif fields.get("CONDITION"):
            condition = condition_label(key)
        else:
            condition = DEFAULT_CONDITION_LABEL

        return WeatherRecord(
            icon=icon,
            temperature=temperature,
            condition=condition,
            forecast=fields.get("FORECAST_ENGLISH")
            or f"{icon} Forecast for {city}: {condition}, temperature {temperature}°C",
            summary=fields.get("SUMMARY_ENGLISH")
            or f"The weather in {city} is expected to be {condition} with a temperature of {temperature}°C.",
        )
    except Exception as e:
        LOGGER.warning("Could not parse weather reply for %s, using raw text: %s", city, e)
        return WeatherRecord(
            icon=DEFAULT_ICON,
            temperature=DEFAULT_TEMPERATURE,
            condition=DEFAULT_CONDITION_LABEL,
            forecast=f"{DEFAULT_ICON} Forecast for {city}: {DEFAULT_CONDITION_LABEL}",
            summary=_head(raw, 300) or f"The weather in {city} looks pleasant.",
        )

def extract_trip_plan(raw: str, city: str) -> TripPlanRecord:
    try:
        fields = extract_fields(raw, TRIP_PLAN_FIELDS)
        return TripPlanRecord(
            icon=TRIP_PLAN_ICON,
            title=fields.get("TITLE") or f"Trip to {city}",
            description=fields.get("DESCRIPTION")
            or f"Discover the best of {city} with our curated itinerary.",
            activities=fields.get("ACTIVITIES")
            or f"Explore {city}, visit local attractions, and try local cuisine.",
            summary=fields.get("SUMMARY")
            or f"Discover the best of {city} with our curated recommendations "
            "for activities, attractions, and dining experiences.",
        )
    except Exception as e:
        LOGGER.warning("Could not parse trip plan reply for %s, using raw text: %s", city, e)
        return TripPlanRecord(
            icon=TRIP_PLAN_ICON,
            title=f"Trip to {city}",
            description=f"Discover the best of {city} with our curated itinerary.",
            activities=_head(raw, 200)
            or f"Explore {city}, visit local attractions, and try local cuisine.",
            summary=_head(raw, 300)
            or f"Discover the best of {city} with our curated recommendations.",
        )

def extract_money_saving_tip(raw: str) -> MoneySavingTipRecord:
    try:
        fields = extract_fields(raw, MONEY_SAVING_TIP_FIELDS)
        return MoneySavingTipRecord(tip=fields.get("TIP") or GENERIC_TIP)
    except Exception as e:
        LOGGER.warning("Could not parse money-saving tip reply, using raw text: %s", e)
        return MoneySavingTipRecord(tip=_head(raw, 300) or GENERIC_TIP)
