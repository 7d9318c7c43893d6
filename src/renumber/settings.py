"""Service configuration helpers for deployment environments.

Runtime settings for the API and CLI are read from ``RENUMBER_*`` environment
variables in one place. The module has no import side effects so it can be
used from both CLI tools and FastAPI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional
import os

from .fonts import DEFAULT_FONT_URL


def _parse_bool(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    v = value.strip().lower()
    if v in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _split_csv(value: str | None) -> List[str]:
    if not value:
        return []
    parts = [p.strip() for p in value.split(",") if p.strip()]
    return parts


@dataclass
class ServiceSettings:
    """Runtime settings tailored for container deployments."""

    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_token: Optional[str] = None
    cors_origins: List[str] = field(default_factory=list)
    font_url: Optional[str] = DEFAULT_FONT_URL
    font_path: Optional[str] = None
    fetch_timeout: float = 60.0
    max_upload_mb: int = 50
    readiness_check_font: bool = True
    readiness_check_llm: bool = False
    readiness_llm_health_url: Optional[str] = None
    llm_generate_url: str = "http://localhost:11434/api/generate"
    allowance_warn_only_checks: bool = True

    @staticmethod
    def from_env() -> "ServiceSettings":
        cors_raw = os.environ.get("RENUMBER_API_CORS_ORIGINS")
        settings = ServiceSettings(
            api_host=os.environ.get("RENUMBER_API_HOST", "127.0.0.1"),
            api_port=int(os.environ.get("RENUMBER_API_PORT", "8000")),
            api_token=os.environ.get("RENUMBER_API_TOKEN"),
            cors_origins=_split_csv(cors_raw),
            # an empty value selects the built-in font
            font_url=os.environ.get("RENUMBER_FONT_URL", DEFAULT_FONT_URL) or None,
            font_path=os.environ.get("RENUMBER_FONT_PATH") or None,
            fetch_timeout=float(os.environ.get("RENUMBER_FETCH_TIMEOUT", "60")),
            max_upload_mb=int(os.environ.get("RENUMBER_MAX_UPLOAD_MB", "50")),
            readiness_check_font=_parse_bool(
                os.environ.get("RENUMBER_READY_CHECK_FONT"), default=True
            ),
            readiness_check_llm=_parse_bool(
                os.environ.get("RENUMBER_READY_CHECK_LLM"), default=False
            ),
            readiness_llm_health_url=os.environ.get("RENUMBER_LLM_HEALTH_URL"),
            llm_generate_url=os.environ.get(
                "RENUMBER_LLM_URL", "http://localhost:11434/api/generate"
            ),
            allowance_warn_only_checks=_parse_bool(
                os.environ.get("RENUMBER_READY_WARN_ONLY"), default=True
            ),
        )
        return settings


@lru_cache(maxsize=1)
def get_settings() -> ServiceSettings:
    """Return cached service settings."""
    return ServiceSettings.from_env()


def reset_settings_cache() -> None:
    """Reset cached settings (useful in tests)."""
    get_settings.cache_clear()  # type: ignore[attr-defined]
