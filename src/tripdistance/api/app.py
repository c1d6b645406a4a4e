# src/tripdistance/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and configures CORS for the planner frontend.
Distance logic lives in `tripdistance.distance` and `tripdistance.places`.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from tripdistance.config.settings import ApiSettings, get_settings
from tripdistance.core.logging import configure_logging

from .routes import router

LOCAL_ORIGIN_REGEX = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"


def cors_options(api: ApiSettings) -> dict[str, Any] | None:
    """Build `CORSMiddleware` options from settings, or None when CORS stays off."""
    origin_regex = api.cors_origin_regex or (
        LOCAL_ORIGIN_REGEX if api.cors_allow_local and not api.cors_origins else None
    )
    if not api.cors_origins and not origin_regex:
        return None
    return {
        "allow_origins": list(api.cors_origins),
        "allow_origin_regex": origin_regex,
        "allow_credentials": False,
        "allow_methods": ["GET", "POST"],
        "allow_headers": ["*"],
    }


settings = get_settings()
configure_logging(settings)

app = FastAPI(title=f"{settings.app.name} API", version="0.1.0")

cors = cors_options(settings.api)
if cors:
    app.add_middleware(CORSMiddleware, **cors)

app.include_router(router)
