"""Weather summaries generated by the local model."""
from __future__ import annotations
import logging

from travel_genai.common.prompts import DateLike, build_weather_prompt
from travel_genai.common.schema import WeatherRecord
from travel_genai.extraction.extractor import extract_weather
from travel_genai.inference.ollama_client import OllamaClient

LOGGER = logging.getLogger("travel_genai.services.weather")

UNAVAILABLE_FORECAST = "Unable to load weather forecast at this time"

def fallback_weather() -> WeatherRecord:
    """Static record returned when generation fails outright."""
    return WeatherRecord(
        icon="❔",
        temperature=-1,
        condition="Unknown",
        forecast=UNAVAILABLE_FORECAST,
        summary=UNAVAILABLE_FORECAST,
    )

class WeatherService:
    def __init__(self, client: OllamaClient) -> None:
        self.client = client

    def get_weather(self, city: str, start_date: DateLike, end_date: DateLike, trip: str) -> WeatherRecord:
        LOGGER.info("Generating weather for %s, %s to %s", city, start_date, end_date)
        try:
            prompt = build_weather_prompt(city, start_date, end_date, trip)
            reply = self.client.generate_text(prompt)
            return extract_weather(reply, city)
        except Exception as e:
            LOGGER.error("Weather generation failed for %s: %s", city, e)
            return fallback_weather()
