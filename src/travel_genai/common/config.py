"""Inference server configuration: defaults, optional YAML file, env overrides."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

LOGGER = logging.getLogger("travel_genai.config")

DEFAULT_CONFIG_PATH = "configs/inference.yaml"

@dataclass(frozen=True)
class InferenceConfig:
    """Target model and server address, fixed at process start."""
    model: str = "llama3.2:3b"
    base_url: str = "http://localhost:11434"
    generate_timeout: float = 60.0
    pull_timeout: float = 600.0
    probe_timeout: float = 10.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

def load_cfg(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def load_config(path: str | None = None) -> InferenceConfig:
    """
    Build the configuration.

    Precedence: environment > YAML file > built-in defaults. A missing YAML
    file is not an error.

    Args:
        path: YAML config path. Defaults to $TRAVEL_GENAI_CONFIG, then
            configs/inference.yaml.
    """
    cfg_path = path or os.getenv("TRAVEL_GENAI_CONFIG") or DEFAULT_CONFIG_PATH
    cfg = InferenceConfig()

    if Path(cfg_path).exists():
        data = load_cfg(cfg_path)
        section = data.get("ollama", data)
        cfg = replace(
            cfg,
            model=str(section.get("model", cfg.model)),
            base_url=str(section.get("base_url", cfg.base_url)),
            generate_timeout=float(section.get("generate_timeout", cfg.generate_timeout)),
            pull_timeout=float(section.get("pull_timeout", cfg.pull_timeout)),
            probe_timeout=float(section.get("probe_timeout", cfg.probe_timeout)),
        )
    else:
        LOGGER.debug("No config file at %s; using defaults", cfg_path)

    return replace(
        cfg,
        model=os.getenv("OLLAMA_MODEL") or cfg.model,
        base_url=os.getenv("OLLAMA_URL") or cfg.base_url,
        generate_timeout=float(os.getenv("OLLAMA_GENERATE_TIMEOUT") or cfg.generate_timeout),
        pull_timeout=float(os.getenv("OLLAMA_PULL_TIMEOUT") or cfg.pull_timeout),
    )
