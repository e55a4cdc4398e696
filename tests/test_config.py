from __future__ import annotations

import logging
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from travel_genai.common.config import InferenceConfig, load_config
from travel_genai.common.logging_setup import resolve_level

ENV_KEYS = ("OLLAMA_MODEL", "OLLAMA_URL", "OLLAMA_GENERATE_TIMEOUT", "OLLAMA_PULL_TIMEOUT", "TRAVEL_GENAI_CONFIG")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    cfg = load_config(str(tmp_path / "nope.yaml"))
    assert cfg == InferenceConfig()
    assert cfg.generate_timeout == 60.0
    assert cfg.pull_timeout == 600.0


def test_yaml_then_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "inference.yaml"
    path.write_text(
        "ollama:\n  model: mistral:7b\n  base_url: http://gpu-box:11434/\n  generate_timeout: 90\n",
        encoding="utf-8",
    )
    cfg = load_config(str(path))
    assert cfg.model == "mistral:7b"
    assert cfg.base_url == "http://gpu-box:11434"
    assert cfg.generate_timeout == 90.0

    monkeypatch.setenv("OLLAMA_MODEL", "llama3.1:8b")
    monkeypatch.setenv("OLLAMA_URL", "http://127.0.0.1:11434")
    cfg = load_config(str(path))
    assert cfg.model == "llama3.1:8b"
    assert cfg.base_url == "http://127.0.0.1:11434"
    assert cfg.generate_timeout == 90.0


def test_repo_config_matches_defaults() -> None:
    repo_cfg = Path(__file__).resolve().parent.parent / "configs" / "inference.yaml"
    assert load_config(str(repo_cfg)) == InferenceConfig()


def test_config_is_immutable() -> None:
    cfg = InferenceConfig()
    with pytest.raises(FrozenInstanceError):
        cfg.model = "other"  # type: ignore[misc]


@pytest.mark.parametrize(
    "value, expected",
    [(None, logging.INFO), ("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("10", 10), ("bogus", logging.INFO)],
)
def test_resolve_level(value, expected: int) -> None:  # noqa: ANN001
    assert resolve_level(value) == expected
