"""Domain event publishing over Redis Streams."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import redis

from .config import ServiceConfig

logger = logging.getLogger(__name__)


class EventPublisher:
    """Append events to a Redis Stream.

    Falhas de publicação são registradas em log e nunca propagadas: um
    evento perdido não pode desfazer uma operação já confirmada no banco.
    """

    def __init__(
        self,
        redis_url: str,
        stream_name: str,
        *,
        maxlen: Optional[int] = 1000,
        client: Optional[redis.Redis] = None,
    ) -> None:
        self._stream_name = stream_name
        self._maxlen = maxlen
        self._client = client if client is not None else redis.Redis.from_url(redis_url)

    @property
    def stream_name(self) -> str:
        return self._stream_name

    def publish(
        self,
        event_type: str,
        payload: Dict[str, Any],
        *,
        tenant_id: Optional[Any] = None,
    ) -> bool:
        """Publica ``event_type`` com ``payload`` serializado em JSON.

        Retorna ``True`` quando o evento foi aceito pelo Redis.
        """

        event = {
            "event_type": event_type,
            "payload": json.dumps(payload, default=str),
            "occurred_at": datetime.now(timezone.utc).isoformat(),
        }
        if tenant_id is not None:
            event["tenant_id"] = str(tenant_id)

        try:
            self._client.xadd(
                self._stream_name,
                event,
                maxlen=self._maxlen,
                approximate=bool(self._maxlen),
            )
        except redis.RedisError:
            logger.exception("Falha ao publicar evento '%s' no stream '%s'", event_type, self._stream_name)
            return False
        return True


def create_event_publisher(config: ServiceConfig) -> Optional[EventPublisher]:
    """Build a publisher from the service config, or ``None`` when Redis is disabled."""

    if not config.redis.url or not config.redis.url.strip():
        return None
    return EventPublisher(config.redis.url, config.redis.stream)
