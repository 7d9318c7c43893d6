"""Infrastructure readiness checks for API / container probes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import requests

from .settings import ServiceSettings


@dataclass
class HealthCheckResult:
    name: str
    status: str  # "pass" | "fail" | "warn"
    detail: Optional[str] = None
    required: bool = True


def _check_font_source(font_path: Optional[str], font_url: Optional[str]) -> HealthCheckResult:
    if font_path:
        if Path(font_path).is_file():
            return HealthCheckResult(name="font", status="pass", detail=font_path)
        return HealthCheckResult(name="font", status="fail", detail=f"Missing file: {font_path}")
    if not font_url:
        return HealthCheckResult(
            name="font", status="pass", detail="built-in font", required=False
        )
    try:
        resp = requests.head(font_url, timeout=3, allow_redirects=True)
    except requests.RequestException as exc:
        return HealthCheckResult(name="font", status="fail", detail=str(exc))
    if resp.status_code >= 400:
        return HealthCheckResult(name="font", status="fail", detail=f"HTTP {resp.status_code}")
    return HealthCheckResult(name="font", status="pass")


def _check_llm_endpoint(url: str, health_url: Optional[str]) -> HealthCheckResult:
    target = health_url or url
    try:
        resp = requests.request("HEAD", target, timeout=2)
    except requests.RequestException as exc:
        return HealthCheckResult(name="llm", status="fail", detail=str(exc))
    if resp.status_code >= 500:
        return HealthCheckResult(name="llm", status="fail", detail=f"HTTP {resp.status_code}")
    if resp.status_code == 405:
        return HealthCheckResult(
            name="llm",
            status="warn",
            detail="HEAD not supported, endpoint reachable",
        )
    return HealthCheckResult(name="llm", status="pass")


def run_readiness_checks(settings: ServiceSettings) -> List[HealthCheckResult]:
    checks: List[HealthCheckResult] = []
    if settings.readiness_check_font:
        checks.append(_check_font_source(settings.font_path, settings.font_url))
    if settings.readiness_check_llm:
        checks.append(
            _check_llm_endpoint(
                settings.llm_generate_url, settings.readiness_llm_health_url
            )
        )
    return checks
