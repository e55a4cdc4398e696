"""Command-line entry point: check the server, generate content, or serve the API."""
from __future__ import annotations
import argparse
import json
import logging
from dataclasses import asdict

from travel_genai.common.config import load_config
from travel_genai.common.logging_setup import setup_logging
from travel_genai.inference.ollama_client import OllamaClient
from travel_genai.services.recommendations import MoneySavingTipsService, TripPlanService
from travel_genai.services.weather import WeatherService

LOGGER = logging.getLogger("travel_genai.cli")

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="travel-genai", description="Travel content from a local Ollama model")
    ap.add_argument("--config", default=None, help="YAML config path")
    ap.add_argument("--log-level", default=None, help="Logging level (default: $LOG_LEVEL or INFO)")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="Verify the server and pull the model if missing")
    sub.add_parser("models", help="List installed models")

    for name in ("weather", "trip-plan"):
        p = sub.add_parser(name)
        p.add_argument("--city", required=True)
        p.add_argument("--start", required=True, help="ISO date, e.g. 2024-08-15")
        p.add_argument("--end", required=True, help="ISO date, e.g. 2024-08-17")
        p.add_argument("--trip", required=True, help="Trip type, e.g. honeymoon")

    p = sub.add_parser("tips")
    p.add_argument("--cities", required=True, help="Comma-separated list")
    p.add_argument("--start", required=True)
    p.add_argument("--end", required=True)
    p.add_argument("--trip-name", required=True)

    p = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    return ap

def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("travel_genai.api.fastapi_app:app", host=args.host, port=args.port)
        return 0

    client = OllamaClient(load_config(args.config))

    if args.command == "check":
        ok = client.verify_connection()
        LOGGER.info("Server %s, model %s", client.server_address, client.current_model)
        return 0 if ok else 1
    if args.command == "models":
        for m in client.list_models():
            print(m.get("name"))
        return 0

    if args.command == "weather":
        record = WeatherService(client).get_weather(args.city, args.start, args.end, args.trip)
    elif args.command == "trip-plan":
        record = TripPlanService(client).get_trip_plan(args.city, args.start, args.end, args.trip)
    else:
        cities = [c.strip() for c in args.cities.split(",") if c.strip()]
        record = MoneySavingTipsService(client).get_money_saving_tips(cities, args.start, args.end, args.trip_name)

    print(json.dumps(asdict(record), ensure_ascii=False, indent=2))
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
