import logging
import sqlite3
from collections.abc import Mapping

from fastapi import Depends, Request
from jose import JWTError

from core import codes
from core.entities.session import Session
from infrastructure.auth.jwt_service import JWTService
from infrastructure.db.sqlite import SQLiteTransactionRepository
from infrastructure.web.container import ServiceContainer
from infrastructure.web.errors import ServiceError

logger = logging.getLogger(__name__)


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_db(container: ServiceContainer = Depends(get_container)):
    conn = sqlite3.connect(container.settings.DB_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def get_transaction_repo(
    conn: sqlite3.Connection = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> SQLiteTransactionRepository:
    return SQLiteTransactionRepository(conn, container.settings.TABLE_NAME)


def extract_session(request: Request, jwt_service: JWTService, cookie_name: str) -> Session:
    """Validate the token cookie and build the caller's session.

    Raises ServiceError on every rejection, so the wrapped handler never runs.
    """
    raw = request.cookies.get(cookie_name)
    if not raw:
        raise ServiceError(401, codes.ERR_UNAUTHORIZED)

    try:
        token = jwt_service.validate_token(raw)
    except JWTError as e:
        logger.error("token_validation_failed", extra={"error": str(e)})
        if "expired" in str(e).lower():
            raise ServiceError(401, codes.ERR_TOKEN_EXPIRED)
        raise ServiceError(401, codes.ERR_MATCHING_TOKEN)
    if not token.valid:
        raise ServiceError(401, codes.ERR_UNAUTHORIZED)

    if not isinstance(token.claims, Mapping):
        raise ServiceError(500, codes.ERR_ASSERT_CLAIMS)
    user_id = token.claims.get("user_id")
    if not isinstance(user_id, str):
        raise ServiceError(400, codes.ERR_ASSERT_USERID)

    return Session(user_id=user_id, cookie=raw)


def get_session(request: Request, container: ServiceContainer = Depends(get_container)) -> Session:
    return extract_session(request, container.jwt_service, container.settings.COOKIE_NAME)
