"""Trip plans and money-saving tips generated by the local model."""
from __future__ import annotations
import logging
from typing import Sequence

from travel_genai.common.prompts import (
    DateLike,
    build_money_saving_tips_prompt,
    build_trip_plan_prompt,
)
from travel_genai.common.schema import MoneySavingTipRecord, TripPlanRecord
from travel_genai.extraction.extractor import (
    GENERIC_TIP,
    TRIP_PLAN_ICON,
    extract_money_saving_tip,
    extract_trip_plan,
)
from travel_genai.inference.ollama_client import OllamaClient

LOGGER = logging.getLogger("travel_genai.services.recommendations")

UNAVAILABLE_PLAN = "Unable to load trip planning suggestions at this time"

def fallback_trip_plan(city: str) -> TripPlanRecord:
    return TripPlanRecord(
        icon=TRIP_PLAN_ICON,
        title="Trip Planning",
        description=f"Unable to load trip planning suggestions for {city} at this time",
        activities=UNAVAILABLE_PLAN,
        summary=UNAVAILABLE_PLAN,
    )

def fallback_money_saving_tip() -> MoneySavingTipRecord:
    return MoneySavingTipRecord(tip=GENERIC_TIP)

class TripPlanService:
    def __init__(self, client: OllamaClient) -> None:
        self.client = client

    def get_trip_plan(self, city: str, start_date: DateLike, end_date: DateLike, trip: str) -> TripPlanRecord:
        LOGGER.info("Generating trip plan for %s, %s to %s", city, start_date, end_date)
        try:
            prompt = build_trip_plan_prompt(city, start_date, end_date, trip)
            reply = self.client.generate_text(prompt)
            return extract_trip_plan(reply, city)
        except Exception as e:
            LOGGER.error("Trip plan generation failed for %s: %s", city, e)
            return fallback_trip_plan(city)

class MoneySavingTipsService:
    def __init__(self, client: OllamaClient) -> None:
        self.client = client

    def get_money_saving_tips(
        self, cities: Sequence[str], start_date: DateLike, end_date: DateLike, trip_name: str
    ) -> MoneySavingTipRecord:
        LOGGER.info(
            "Generating money-saving tips for %s (%s), %s to %s",
            trip_name, ", ".join(cities), start_date, end_date,
        )
        try:
            prompt = build_money_saving_tips_prompt(cities, start_date, end_date, trip_name)
            reply = self.client.generate_text(prompt)
            return extract_money_saving_tip(reply)
        except Exception as e:
            LOGGER.error("Money-saving tip generation failed for %s: %s", trip_name, e)
            return fallback_money_saving_tip()
