from __future__ import annotations

import json
import logging

import pytest

import travel_genai.cli as cli
from travel_genai.common.config import InferenceConfig
from travel_genai.inference.ollama_client import OllamaClient


@pytest.fixture(autouse=True)
def _restore_root_logging() -> None:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


TIP_TEXT = "Take night trains between the cities to save a hotel night"


class _StubClient(OllamaClient):
    reply = f"TIP: {TIP_TEXT}"

    def __init__(self, config: InferenceConfig | None = None) -> None:
        super().__init__(config)

    def generate_text(self, prompt: str) -> str:
        return self.reply

    def verify_connection(self) -> bool:
        return False


def test_tips_command_prints_json(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr(cli, "OllamaClient", _StubClient)

    code = cli.main(
        ["--log-level", "WARNING", "tips", "--cities", "Vienna,Prague", "--start", "2024-10-01", "--end", "2024-10-06", "--trip-name", "Rail trip"]
    )

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"tip": TIP_TEXT}


def test_weather_command_falls_back_on_garbage(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr(_StubClient, "reply", "")
    monkeypatch.setattr(cli, "OllamaClient", _StubClient)

    code = cli.main(["--log-level", "WARNING", "weather", "--city", "Oslo", "--start", "2024-01-01", "--end", "2024-01-03", "--trip", "ski"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["temperature"] == 25
    assert out["condition"] == "Pleasant weather"


def test_check_command_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "OllamaClient", _StubClient)
    assert cli.main(["--log-level", "WARNING", "check"]) == 1
