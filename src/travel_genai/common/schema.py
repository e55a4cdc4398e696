"""Dataclasses for generation requests and the typed travel records."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

@dataclass(frozen=True)
class GenerationRequest:
    """One call to the inference server's generate endpoint."""
    prompt: str
    temperature: float = 0.7
    top_p: float = 0.9
    max_output_tokens: int = 800

    def to_payload(self, model: str) -> dict[str, Any]:
        return {
            "model": model,
            "prompt": self.prompt,
            "stream": False,
            "options": {
                "temperature": self.temperature,
                "top_p": self.top_p,
                "num_predict": self.max_output_tokens,
            },
        }

@dataclass(frozen=True)
class WeatherRecord:
    icon: str
    temperature: int
    condition: str
    forecast: str
    summary: str

@dataclass(frozen=True)
class TripPlanRecord:
    icon: str
    title: str
    description: str
    activities: str
    summary: str | None = None

@dataclass(frozen=True)
class MoneySavingTipRecord:
    tip: str

@dataclass
class ExtractionContext:
    """
    Working state for a single extraction call.

    Holds the raw reply, its lines and the values captured so far, keyed by
    label. Thrown away once the record is built.
    """
    raw: str
    lines: list[str] = field(default_factory=list)
    fields: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_reply(cls, raw: str) -> "ExtractionContext":
        return cls(raw=raw, lines=raw.split("\n"))

    def get(self, label: str) -> str:
        return self.fields.get(label, "")

    def has(self, label: str) -> bool:
        return label in self.fields
