"""CORS setup driven by ``ENVIRONMENT`` and ``CORS_ORIGINS``."""

from __future__ import annotations

import os
from typing import List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]


def get_cors_origins() -> List[str]:
    """Origens permitidas: ``["*"]`` em desenvolvimento, lista explícita em produção.

    Raises:
        ValueError: em produção sem ``CORS_ORIGINS`` válido.
    """
    environment = os.getenv("ENVIRONMENT", os.getenv("ENV", "development")).lower()
    if environment not in ("production", "prod"):
        return ["*"]

    origins = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()]
    if not origins:
        raise ValueError(
            "CORS_ORIGINS must be set in production, "
            "e.g. CORS_ORIGINS=https://app.example.com,https://admin.example.com"
        )
    return origins


def configure_cors(app: FastAPI) -> None:
    origins = get_cors_origins()
    allow_credentials = os.getenv("CORS_ALLOW_CREDENTIALS", "false").lower() == "true"
    max_age = int(os.getenv("CORS_MAX_AGE", "600"))

    # Access-Control-Allow-Origin "*" não aceita credentials
    if origins == ["*"]:
        allow_credentials = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=_ALLOWED_METHODS,
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
        max_age=max_age,
    )
