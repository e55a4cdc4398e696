"""FastAPI app exposing the travel content services.

Endpoints:
- GET /health
- GET /api/v1/weather?city&startDate&endDate&trip
- GET /api/v1/plan/trip-plan?city&startDate&endDate&trip
- GET /api/v1/plan/money-saving-tips?cities&startDate&endDate&tripName
- GET /api/v1/models
- PUT /api/v1/models/current  { "model": "..." }
"""
from __future__ import annotations
import logging
import threading
from datetime import datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, ValidationError, field_validator, model_validator

from travel_genai.common.config import load_config
from travel_genai.common.logging_setup import setup_logging
from travel_genai.common.prompts import parse_datetime
from travel_genai.common.schema import MoneySavingTipRecord, TripPlanRecord, WeatherRecord
from travel_genai.inference.ollama_client import OllamaClient
from travel_genai.services.recommendations import MoneySavingTipsService, TripPlanService
from travel_genai.services.weather import WeatherService

LOGGER = logging.getLogger("travel_genai.api")

class DateRange(BaseModel):
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return parse_datetime(value)
            except ValueError:
                raise ValueError(
                    "Invalid date format. Please use ISO format (e.g., 2024-08-15T10:00:00.000Z)"
                )
        return value

    @model_validator(mode="after")
    def _ordered(self) -> "DateRange":
        if self.start_date > self.end_date:
            raise ValueError("startDate cannot be after endDate")
        return self

class TripQuery(DateRange):
    city: str
    trip: str

class TipsQuery(DateRange):
    cities: list[str]
    trip_name: str

    @field_validator("cities", mode="before")
    @classmethod
    def _split(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [c.strip() for c in value.split(",")]
            value = [c for c in value if c]
        if not value:
            raise ValueError("At least one city must be provided")
        return value

class HealthOut(BaseModel):
    status: str
    model: str
    ollama_url: str

class SwitchModelIn(BaseModel):
    model: str

class SwitchModelOut(BaseModel):
    switched: bool
    current: str

class ModelsOut(BaseModel):
    current: str
    models: list[dict[str, Any]]

def _require(**params: str | None) -> None:
    missing = [name for name, value in params.items() if not value]
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required parameter(s): {', '.join(missing)}")

def _validated(model: type[BaseModel], **data: Any) -> Any:
    try:
        return model(**data)
    except ValidationError as e:
        msg = e.errors()[0].get("msg", "Invalid request")
        raise HTTPException(status_code=400, detail=msg.removeprefix("Value error, "))

def create_app(client: OllamaClient | None = None) -> FastAPI:
    """
    Wire the services around a single Ollama client.

    Args:
        client: Client to use. Defaults to one built from `load_config()`.
    """
    client = client or OllamaClient(load_config())
    weather = WeatherService(client)
    plans = TripPlanService(client)
    tips = MoneySavingTipsService(client)

    app = FastAPI(title="Travel GenAI")

    def _check_ollama() -> None:
        if not client.verify_connection():
            LOGGER.warning("Serving without a reachable Ollama server at %s", client.server_address)

    @app.on_event("startup")
    def _check_ollama_on_startup() -> None:
        """Check the server and pull the model in the background; a first pull can take minutes."""
        threading.Thread(target=_check_ollama, name="ollama-startup-check", daemon=True).start()

    @app.get("/health", response_model=HealthOut)
    def health() -> HealthOut:
        return HealthOut(status="ok", model=client.current_model, ollama_url=client.server_address)

    @app.get("/api/v1/weather", response_model=WeatherRecord)
    def get_weather(
        city: str | None = None,
        start_date: str | None = Query(None, alias="startDate"),
        end_date: str | None = Query(None, alias="endDate"),
        trip: str | None = None,
    ) -> WeatherRecord:
        _require(city=city, startDate=start_date, endDate=end_date, trip=trip)
        q = _validated(TripQuery, city=city, start_date=start_date, end_date=end_date, trip=trip)
        LOGGER.info("Fetching weather for %s, %s to %s", q.city, start_date, end_date)
        return weather.get_weather(q.city, q.start_date, q.end_date, q.trip)

    @app.get("/api/v1/plan/trip-plan", response_model=TripPlanRecord)
    def get_trip_plan(
        city: str | None = None,
        start_date: str | None = Query(None, alias="startDate"),
        end_date: str | None = Query(None, alias="endDate"),
        trip: str | None = None,
    ) -> TripPlanRecord:
        _require(city=city, startDate=start_date, endDate=end_date, trip=trip)
        q = _validated(TripQuery, city=city, start_date=start_date, end_date=end_date, trip=trip)
        LOGGER.info("Fetching trip plan for %s, %s to %s", q.city, start_date, end_date)
        return plans.get_trip_plan(q.city, q.start_date, q.end_date, q.trip)

    @app.get("/api/v1/plan/money-saving-tips", response_model=MoneySavingTipRecord)
    def get_money_saving_tips(
        cities: str | None = None,
        start_date: str | None = Query(None, alias="startDate"),
        end_date: str | None = Query(None, alias="endDate"),
        trip_name: str | None = Query(None, alias="tripName"),
    ) -> MoneySavingTipRecord:
        _require(cities=cities, startDate=start_date, endDate=end_date, tripName=trip_name)
        q = _validated(TipsQuery, cities=cities, start_date=start_date, end_date=end_date, trip_name=trip_name)
        LOGGER.info("Fetching money-saving tips for %s: %s", q.trip_name, ", ".join(q.cities))
        return tips.get_money_saving_tips(q.cities, q.start_date, q.end_date, q.trip_name)

    @app.get("/api/v1/models", response_model=ModelsOut)
    def list_models() -> ModelsOut:
        return ModelsOut(current=client.current_model, models=client.list_models())

    @app.put("/api/v1/models/current", response_model=SwitchModelOut)
    def switch_model(body: SwitchModelIn) -> SwitchModelOut:
        switched = client.switch_model(body.model)
        if not switched:
            raise HTTPException(status_code=404, detail=f"Model {body.model!r} not found locally")
        return SwitchModelOut(switched=True, current=client.current_model)

    return app

def _default_app() -> FastAPI:
    setup_logging()
    return create_app()

app = _default_app()
