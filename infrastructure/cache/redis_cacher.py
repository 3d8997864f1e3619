import logging
from typing import Optional

import redis

from core.services.cacher import Cacher

logger = logging.getLogger(__name__)


class RedisCacher(Cacher):
    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_address(cls, host: str, port: int, db: int = 0) -> "RedisCacher":
        client = redis.Redis(
            host=host,
            port=int(port),
            db=int(db),
            socket_keepalive=True,
            socket_connect_timeout=5,
        )
        logger.info("redis_cacher_configured", extra={"host": host, "port": port, "db": db})
        return cls(client)

    def get(self, key: str) -> Optional[bytes]:
        return self.client.get(key)

    def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        self.client.setex(key, ttl_seconds, value)
