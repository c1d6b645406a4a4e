# src/tripdistance/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/tripdistance/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `TRIPDISTANCE_GEOCODER_API_KEY`, `TRIPDISTANCE_DEFAULT_UNIT`)
- an external YAML file via `TRIPDISTANCE_CONFIG_PATH`

Design rule:
- Endpoints, credentials and timeouts live in YAML/env, not hard-coded in the engine.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal
from tripdistance.core.env import load_dotenv_if_present

import yaml
from pydantic import BaseModel, Field


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `tripdistance.config`."""
    text = resources.files("tripdistance.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "tripdistance"
    http_timeout_seconds: float = Field(10, gt=0)
    log_level: str = "INFO"
    user_agent: str = "tripdistance/0.1.0 (+https://local)"


class GeocodingSettings(BaseModel):
    base_url: str = "https://nominatim.openstreetmap.org/search"
    # Some Nominatim-compatible providers (LocationIQ, self-hosted gateways) require a key.
    api_key: str | None = None
    # Nominatim's usage policy asks heavy users to identify themselves.
    email: str | None = None
    accept_language: str | None = None


class DistanceSettings(BaseModel):
    default_unit: Literal["km", "mi"] = "mi"
    decimals: int = Field(1, ge=0, le=6)


class ApiSettings(BaseModel):
    cors_origins: list[str] = Field(default_factory=list)
    # Without explicit origins, localhost frontends (any port) are allowed.
    cors_allow_local: bool = True
    cors_origin_regex: str | None = None


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    geocoding: GeocodingSettings = Field(default_factory=GeocodingSettings)
    distance: DistanceSettings = Field(default_factory=DistanceSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small to avoid exposing unsafe overrides.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("TRIPDISTANCE_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    timeout = os.getenv("TRIPDISTANCE_HTTP_TIMEOUT_SECONDS")
    if timeout:
        data.setdefault("app", {})["http_timeout_seconds"] = timeout

    default_unit = os.getenv("TRIPDISTANCE_DEFAULT_UNIT")
    if default_unit:
        data.setdefault("distance", {})["default_unit"] = default_unit.strip().lower()

    geocoder_url = os.getenv("TRIPDISTANCE_GEOCODER_URL")
    if geocoder_url:
        data.setdefault("geocoding", {})["base_url"] = geocoder_url

    api_key = os.getenv("TRIPDISTANCE_GEOCODER_API_KEY")
    if api_key:
        data.setdefault("geocoding", {})["api_key"] = api_key

    email = os.getenv("TRIPDISTANCE_GEOCODER_EMAIL")
    if email:
        data.setdefault("geocoding", {})["email"] = email

    cors_origins = os.getenv("TRIPDISTANCE_CORS_ORIGINS")
    if cors_origins:
        data.setdefault("api", {})["cors_origins"] = [s.strip() for s in cors_origins.split(",") if s.strip()]

    cors_allow_local = os.getenv("TRIPDISTANCE_CORS_ALLOW_LOCAL")
    if cors_allow_local:
        data.setdefault("api", {})["cors_allow_local"] = cors_allow_local.strip().lower() in {"1", "true", "yes", "y"}

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("TRIPDISTANCE_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")


def public_settings(settings: Settings) -> dict[str, Any]:
    """Return settings safe to expose to clients (credentials redacted)."""
    payload = settings.model_dump(mode="json")
    geocoding = payload.get("geocoding", {})
    if geocoding.get("api_key"):
        geocoding["api_key"] = "REDACTED"
    if geocoding.get("email"):
        geocoding["email"] = "REDACTED"
    return payload
