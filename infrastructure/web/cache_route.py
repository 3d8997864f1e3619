import json
import logging
from dataclasses import asdict
from typing import Callable, Coroutine, Any, Optional

from fastapi import Request, Response
from fastapi.routing import APIRoute
from starlette.concurrency import run_in_threadpool

from core import codes
from core.entities.response import CacheResponse
from core.services.cacher import Cacher
from infrastructure.web.dependencies import extract_session
from infrastructure.web.errors import envelope

logger = logging.getLogger(__name__)


def cache_key(request: Request, user_id: Optional[str] = None) -> str:
    key = request.url.path
    if request.url.query:
        key += "?" + request.url.query
    if user_id is not None:
        key += "/auth/" + user_id
    return key


def _read(cacher: Cacher, key: str) -> Optional[bytes]:
    try:
        return cacher.get(key)
    except Exception as e:
        logger.warning("cache_read_failed", extra={"key": key, "error": str(e)})
        return None


def _write(cacher: Cacher, key: str, value: bytes, ttl_seconds: int) -> None:
    try:
        cacher.set(key, value, ttl_seconds)
    except Exception as e:
        logger.error("cache_write_failed", extra={"key": key, "error": str(e)})


def replay(cached: CacheResponse) -> Response:
    headers = {"Content-Type": cached.content_type} if cached.content_type else None
    return Response(content=cached.response, status_code=cached.status, headers=headers)


def snapshot(response: Response) -> Optional[CacheResponse]:
    """Capture a handler response for the cache; None when it must not be stored."""
    if not 200 <= response.status_code < 300:
        return None
    body = getattr(response, "body", None)
    if body is None:
        # streaming responses are never cached
        return None
    try:
        text = bytes(body).decode("utf-8")
    except UnicodeDecodeError:
        return None
    return CacheResponse(
        status=response.status_code,
        response=text,
        content_type=response.headers.get("content-type", ""),
    )


class CachedRoute(APIRoute):
    """Cache-aside wrapper around a route: successful responses are stored per URL."""
    require_auth = False

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_handler = super().get_route_handler()
        require_auth = self.require_auth

        async def cached_route_handler(request: Request) -> Response:
            container = request.app.state.container
            user_id = None
            if require_auth:
                session = extract_session(request, container.jwt_service, container.settings.COOKIE_NAME)
                user_id = session.user_id
            key = cache_key(request, user_id)

            raw = await run_in_threadpool(_read, container.cacher, key)
            if raw is not None:
                try:
                    cached = CacheResponse(**json.loads(raw))
                except (ValueError, TypeError) as e:
                    logger.error("cache_entry_undecodable", extra={"key": key, "error": str(e)})
                    return envelope(400, codes.ERR_UNMARSHAL)
                logger.info("cache_hit", extra={"key": key})
                return replay(cached)

            response = await original_handler(request)
            cached = snapshot(response)
            if cached is not None:
                value = json.dumps(asdict(cached)).encode()
                await run_in_threadpool(_write, container.cacher, key, value, container.settings.cache_ttl_seconds)
            return response

        return cached_route_handler


class AuthCachedRoute(CachedRoute):
    """Per-user variant: the cache key is scoped by the caller's user id."""
    require_auth = True
