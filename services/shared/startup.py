"""Lifespan helper that creates tables once the database accepts connections."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import OperationalError
from sqlalchemy.sql.schema import MetaData

logger = logging.getLogger(__name__)


def database_lifespan_factory(
    *,
    service_name: str,
    metadata: MetaData,
    engine,
    retries: int = 10,
    wait_seconds: float = 2.0,
):
    """Return a FastAPI lifespan that runs ``metadata.create_all`` with retries."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        for attempt in range(1, retries + 1):
            try:
                metadata.create_all(bind=engine)
                break
            except OperationalError:
                if attempt == retries:
                    raise
                logger.warning(
                    "[%s] Banco indisponível, aguardando %ss (tentativa %d/%d)",
                    service_name,
                    wait_seconds,
                    attempt,
                    retries,
                )
                await asyncio.sleep(wait_seconds)
        yield

    return _lifespan
