"""Client for a local Ollama inference server.

Endpoints used:
- GET  /api/version
- GET  /api/tags
- POST /api/pull      { "name": ..., "stream": false }
- POST /api/generate  { "model": ..., "prompt": ..., "stream": false, "options": {...} }

Connection and model bootstrapping is best effort: failures are logged with
the shell commands that fix them and never raised. Only `generate_text`
raises, so the calling service can decide what to return instead.
"""
from __future__ import annotations
import logging
from typing import Any

import httpx

from travel_genai.common.config import InferenceConfig
from travel_genai.common.schema import GenerationRequest

LOGGER = logging.getLogger("travel_genai.inference.ollama")

class InferenceServerUnavailable(RuntimeError):
    """The inference server refused or could not accept the connection."""

    def __init__(self, message: str = "Ollama not running. Please start with: `ollama serve`") -> None:
        super().__init__(message)

def _base_name(model: str) -> str:
    return model.split(":")[0]

class OllamaClient:
    def __init__(self, config: InferenceConfig | None = None) -> None:
        self.config = config or InferenceConfig()
        self._model = self.config.model

    @property
    def current_model(self) -> str:
        return self._model

    @property
    def server_address(self) -> str:
        return self.config.base_url

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    def _get_json(self, path: str) -> dict[str, Any]:
        with httpx.Client(timeout=self.config.probe_timeout) as client:
            r = client.get(self._url(path))
            r.raise_for_status()
            return r.json()

    def verify_connection(self) -> bool:
        """Probe the server version, then make sure the model is installed."""
        try:
            data = self._get_json("/api/version")
            version = data["version"]
        except Exception as e:
            LOGGER.error("Ollama not reachable at %s: %s", self.server_address, e)
            LOGGER.error("Start the server in your terminal: `ollama serve`")
            LOGGER.error("Then download the model: `ollama pull %s`", self._model)
            return False

        LOGGER.info("Ollama connected, version %s", version)
        self.ensure_model_available()
        return True

    def ensure_model_available(self) -> None:
        """
        Pull the configured model unless a matching one is installed.

        An installed model matches when its name equals the target or starts
        with the target's base name (the part before the first ":"), so
        "llama3.2:1b" satisfies a target of "llama3.2:3b".
        """
        target = self._model
        try:
            models = self._get_json("/api/tags").get("models") or []
            base = _base_name(target)
            has_model = any(
                m["name"] == target or m["name"].startswith(base) for m in models
            )
        except Exception as e:
            LOGGER.error("Error checking installed models: %s", e)
            return

        if has_model:
            LOGGER.info("Model %s ready", target)
            return
        LOGGER.info("Model %s not found locally, downloading (this may take a few minutes)", target)
        self.download_model()

    def download_model(self) -> None:
        target = self._model
        try:
            with httpx.Client(timeout=self.config.pull_timeout) as client:
                r = client.post(self._url("/api/pull"), json={"name": target, "stream": False})
                r.raise_for_status()
        except Exception as e:
            LOGGER.error("Failed to download model %s: %s", target, e)
            LOGGER.error("Try running manually: `ollama pull %s`", target)
            return
        LOGGER.info("Model %s downloaded", target)

    def generate_text(self, prompt: str) -> str:
        """
        Run one non-streaming generation and return the trimmed reply.

        Raises:
            InferenceServerUnavailable: the server could not be reached.
            httpx.HTTPError, KeyError, ValueError: any other failure, unchanged.
        """
        request = GenerationRequest(prompt=prompt)
        # read once so a concurrent switch_model does not affect this call
        model = self._model
        try:
            with httpx.Client(timeout=self.config.generate_timeout) as client:
                r = client.post(self._url("/api/generate"), json=request.to_payload(model))
                r.raise_for_status()
                data = r.json()
        except httpx.ConnectError as e:
            raise InferenceServerUnavailable() from e

        return data["response"].strip()

    def list_models(self) -> list[dict[str, Any]]:
        try:
            return list(self._get_json("/api/tags").get("models") or [])
        except Exception as e:
            LOGGER.error("Error listing models: %s", e)
            return []

    def switch_model(self, name: str) -> bool:
        """Use `name` for later generations if it is installed (exact match)."""
        models = self.list_models()
        if not any(m.get("name") == name for m in models):
            LOGGER.error("Model %r not found locally", name)
            return False
        self._model = name
        LOGGER.info("Switched to model %s", name)
        return True
