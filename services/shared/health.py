"""/health and /ready endpoints for container probes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import redis
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def check_database_health(engine: Optional[Engine]) -> bool:
    """Executa ``SELECT 1``; ``False`` quando o banco não responde."""
    if engine is None:
        return False

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return True
    except SQLAlchemyError:
        logger.warning("Banco de dados indisponível no readiness check")
        return False


def check_redis_health(redis_url: Optional[str]) -> Optional[bool]:
    """``None`` quando o Redis não está configurado, senão o resultado do PING."""
    if not redis_url or not redis_url.strip():
        return None

    client = redis.Redis.from_url(redis_url, socket_connect_timeout=1, socket_timeout=1)
    try:
        return bool(client.ping())
    except redis.RedisError:
        logger.warning("Redis indisponível no readiness check")
        return False
    finally:
        client.close()


def create_health_router(
    service_name: str,
    database_engine: Optional[Engine] = None,
    redis_url: Optional[str] = None,
) -> APIRouter:
    router = APIRouter(tags=["Health"])

    @router.get("/health", status_code=status.HTTP_200_OK)
    def health():
        """Liveness: responde enquanto o processo estiver de pé."""
        return {"status": "ok", "service": service_name, "timestamp": _now()}

    @router.get("/ready")
    def ready():
        """Readiness: banco obrigatório, Redis apenas se configurado."""
        db_healthy = check_database_health(database_engine)
        redis_healthy = check_redis_health(redis_url)
        all_healthy = db_healthy and redis_healthy is not False

        return JSONResponse(
            content={
                "status": "ready" if all_healthy else "not_ready",
                "service": service_name,
                "timestamp": _now(),
                "checks": {"database": db_healthy, "redis": redis_healthy},
            },
            status_code=status.HTTP_200_OK if all_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return router
