"""FastAPI app exposing the sample ordering engine."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from tastingorder.engine import (
    ConfigurationNotFoundError,
    EmptyInputError,
    OrderingError,
)
from tastingorder.engine.models import SessionType

from .service import OrderingService


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RankRequest(_Payload):
    """Request payload for the rank endpoint."""

    items: list[Any]
    configuration: dict[str, Any] | None = None
    configuration_id: str | None = None
    session_type: SessionType | None = None
    scope_id: str | None = None
    actor_id: str | None = None


class PreviewRequest(_Payload):
    """Request payload for the preview endpoint."""

    items: list[Any]
    criteria: list[Any] = Field(default_factory=list)


app = FastAPI(title="Tasting Order", version="0.1.0")


def get_cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env."""

    raw = os.getenv("CORS_ALLOW_ORIGINS", "*").strip()
    if raw == "*":
        return ["*"]
    return [item.strip() for item in raw.split(",") if item.strip()]


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_service() -> OrderingService:
    """Return singleton ordering service."""

    config_path = os.getenv("TASTINGORDER_CONFIG", "").strip() or None
    return OrderingService.from_config_file(config_path)


def error_detail(exc: Exception) -> dict[str, str]:
    """Describe an ordering error for the response body."""

    return {"error": type(exc).__name__, "message": str(exc)}


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe."""

    return {"status": "ok"}


@app.get("/api/presets")
def presets() -> dict[str, object]:
    """List the built-in ordering configurations."""

    return {"presets": get_service().list_presets()}


@app.post("/api/rank")
def rank(payload: RankRequest) -> dict[str, object]:
    """Rank samples; ordering errors are reported, never partially applied."""

    try:
        return get_service().rank(
            payload.items,
            configuration=payload.configuration,
            configuration_id=payload.configuration_id,
            session_type=payload.session_type,
            scope_id=payload.scope_id,
            actor_id=payload.actor_id,
        )
    except ConfigurationNotFoundError as exc:
        raise HTTPException(status_code=404, detail=error_detail(exc)) from exc
    except EmptyInputError as exc:
        raise HTTPException(status_code=400, detail=error_detail(exc)) from exc
    except OrderingError as exc:
        raise HTTPException(status_code=422, detail=error_detail(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail={"error": "InvalidConfigurationError", "message": str(exc)},
        ) from exc


@app.post("/api/preview")
def preview(payload: PreviewRequest) -> dict[str, object]:
    """Preview an in-progress configuration; falls back to input order on errors."""

    return get_service().preview(payload.items, payload.criteria)
