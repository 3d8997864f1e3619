import logging
from decimal import Decimal
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from pydantic import BaseModel

from core.entities.session import Session
from core.entities.transaction import NewTransaction
from core.use_cases.transaction_use_cases import (
    download_transaction as download_transaction_uc,
    get_transactions as get_transactions_uc,
    new_transaction as new_transaction_uc,
)
from infrastructure.db.sqlite import SQLiteTransactionRepository
from infrastructure.web.cache_route import AuthCachedRoute
from infrastructure.web.container import ServiceContainer
from infrastructure.web.dependencies import get_container, get_session, get_transaction_repo
from infrastructure.web.errors import to_json_response

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
DEFAULT_PAGE = 1
# sqlite binds LIMIT and OFFSET as signed 64-bit integers
MAX_QUERY_INT = 2 ** 63 - 1

router = APIRouter(prefix="/transactions", tags=["transactions"])
cached_router = APIRouter(prefix="/transactions", tags=["transactions"], route_class=AuthCachedRoute)


class NewTransactionRequest(BaseModel):
    account_number: int
    amount: Decimal
    transfer_to: int
    status: Literal["approved", "rejected"]
    type: Literal["credit", "debit"]
    comment: Optional[str] = ""


def _positive_int_param(request: Request, name: str, default: int) -> int:
    raw = request.query_params.get(name)
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        logger.info("query_param_defaulted", extra={"param": name, "default": default, "query": raw, "error": str(e)})
        return default
    if value <= 0 or value > MAX_QUERY_INT:
        logger.info("query_param_defaulted", extra={"param": name, "default": default, "query": raw})
        return default
    return value


@cached_router.get("")
def get_transactions(
    request: Request,
    session: Session = Depends(get_session),
    repo: SQLiteTransactionRepository = Depends(get_transaction_repo),
):
    limit = _positive_int_param(request, "limit", DEFAULT_LIMIT)
    page = _positive_int_param(request, "page", DEFAULT_PAGE)
    if (page - 1) * limit > MAX_QUERY_INT:
        logger.info("query_param_defaulted", extra={"param": "page", "default": DEFAULT_PAGE, "limit": limit})
        page = DEFAULT_PAGE
    resp = get_transactions_uc(repo, session.user_id, limit, page)
    return to_json_response(resp)


@router.post("/new", status_code=201)
def new_transaction(
    payload: NewTransactionRequest,
    session: Session = Depends(get_session),
    repo: SQLiteTransactionRepository = Depends(get_transaction_repo),
    container: ServiceContainer = Depends(get_container),
):
    resp = new_transaction_uc(
        repo,
        container.notifier,
        session.user_id,
        NewTransaction(
            account_number=payload.account_number,
            amount=payload.amount,
            transfer_to=payload.transfer_to,
            status=payload.status,
            type=payload.type,
            comment=payload.comment or "",
        ),
    )
    return to_json_response(resp)


@router.get("/download/{transaction_id}")
def download_transaction(
    transaction_id: str,
    session: Session = Depends(get_session),
    repo: SQLiteTransactionRepository = Depends(get_transaction_repo),
    container: ServiceContainer = Depends(get_container),
):
    resp = download_transaction_uc(
        repo,
        container.users,
        container.pdf,
        container.pdf_template_id,
        transaction_id,
        session.cookie,
    )
    if resp.status != 200:
        return to_json_response(resp)
    return Response(
        content=resp.data,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={transaction_id}.pdf"},
    )
