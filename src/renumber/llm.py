"""Pluggable LLM client interface with retry/backoff.

Default implementation targets Ollama's `/api/generate` endpoint. It backs the
optional cleanup step of the presentable pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Any, Optional
import time
import requests


class LLMClient:
    def generate(self, prompt: str, *, model: str, system: Optional[str] = None, timeout: int = 120) -> str:  # noqa: D401
        """Generate a completion. Implement in subclasses."""
        raise NotImplementedError


@dataclass
class OllamaClient(LLMClient):
    url: str = "http://localhost:11434/api/generate"
    retries: int = 2
    backoff: float = 1.5

    def generate(self, prompt: str, *, model: str, system: Optional[str] = None, timeout: int = 120) -> str:
        payload: Dict[str, Any] = {"model": model, "prompt": prompt, "stream": False}
        if system:
            payload["system"] = system
        for attempt in range(self.retries + 1):
            try:
                r = requests.post(self.url, json=payload, timeout=timeout)
                r.raise_for_status()
                return r.json().get("response", "")
            except requests.RequestException:  # pragma: no cover - network variability
                if attempt >= self.retries:
                    raise
                time.sleep(self.backoff * (attempt + 1))
        return ""


@lru_cache(maxsize=4)
def get_ollama_client(url: str) -> OllamaClient:
    return OllamaClient(url=url)


__all__ = ["LLMClient", "OllamaClient", "get_ollama_client"]
