import json
import logging
import math
from uuid import uuid4

from core import codes
from core.entities.response import Response, SUCCESS
from core.entities.transaction import (
    APPROVED, BalanceUpdate, NewTransaction, Paginate, Transaction,
)
from core.repositories.transaction_repository import TransactionRepository
from core.services.balance_notifier import BalanceNotifier
from core.services.pdf_provider import PdfProvider, PdfServiceError
from core.services.user_profile_provider import UserProfileProvider, UserServiceError

logger = logging.getLogger(__name__)


def health_check(repo: TransactionRepository) -> bool:
    return repo.health_check()


def paginate(count: int, limit: int, page: int) -> Paginate:
    offset = (page - 1) * limit
    next_page = page + 1 if count - offset > limit else -1
    return Paginate(
        current_page=page,
        next_page=next_page,
        total_page=math.ceil(count / limit),
    )


def get_transactions(repo: TransactionRepository, user_id: str, limit: int, page: int) -> Response:
    offset = (page - 1) * limit
    try:
        transactions, count = repo.get({"user_id": user_id}, limit, offset)
    except Exception as e:
        logger.error("get_transactions_failed", extra={"user_id": user_id, "error": str(e)})
        return Response(status=500, message=codes.ERR_GET_TRANSACTION)

    return Response(
        status=200,
        message=SUCCESS,
        data={
            "transactions": [tx.to_public_dict() for tx in transactions],
            "pagination": paginate(count, limit, page),
        },
    )


def new_transaction(
    repo: TransactionRepository,
    notifier: BalanceNotifier,
    user_id: str,
    payload: NewTransaction,
) -> Response:
    transaction = Transaction(
        transaction_id=str(uuid4()),
        user_id=user_id,
        account_number=payload.account_number,
        amount=payload.amount,
        transfer_to=payload.transfer_to,
        status=payload.status,
        type=payload.type,
        comment=payload.comment or "",
    )
    try:
        repo.insert(transaction)
    except Exception as e:
        logger.error("insert_transaction_failed", extra={"user_id": user_id, "error": str(e)})
        return Response(status=500, message=codes.ERR_NEW_TRANSACTION)

    if payload.status != APPROVED:
        return Response(status=201, message=SUCCESS)

    # fire-and-forget; delivery failures are only logged by the notifier
    notifier.notify(BalanceUpdate(
        account_number=payload.account_number,
        amount=payload.amount,
        transaction_type=payload.type,
    ))
    return Response(status=201, message=SUCCESS)


def download_transaction(
    repo: TransactionRepository,
    users: UserProfileProvider,
    pdf: PdfProvider,
    template_id: str,
    transaction_id: str,
    cookie: str,
) -> Response:
    """Render the receipt of one transaction as a PDF.

    The transaction is looked up first so an unknown id is rejected before
    the user or PDF services are contacted.
    """
    try:
        transaction = repo.find_by_id(transaction_id)
    except Exception as e:
        logger.error("get_transaction_failed", extra={"transaction_id": transaction_id, "error": str(e)})
        return Response(status=500, message=codes.ERR_GET_TRANSACTION)
    if transaction is None:
        logger.error("transaction_not_found", extra={"transaction_id": transaction_id})
        return Response(status=400, message=codes.ERR_GET_TRANSACTION)

    try:
        body = users.fetch_user(cookie)
    except UserServiceError as e:
        logger.error("user_service_failed", extra={"error": str(e)})
        return Response(status=500, message=codes.ERR_FETCHING_DATA_USER_SVC)

    try:
        envelope = json.loads(body)
    except ValueError as e:
        logger.error("user_service_bad_json", extra={"error": str(e)})
        return Response(status=500, message=codes.ERR_UNMARSHAL)

    user = envelope.get("data") if isinstance(envelope, dict) else None
    if not isinstance(user, dict):
        return Response(status=500, message=codes.ERR_ASSERT_RESP)

    try:
        document = pdf.generate_pdf({
            "Name": user.get("name"),
            "TransferFromAccountNumber": transaction.account_number,
            "TransferToAccountNumber": transaction.transfer_to,
            "TransactionId": transaction.transaction_id,
            "Amount": float(transaction.amount),
            "Date": transaction.created_at,
            "Status": transaction.status,
            "Type": transaction.type,
            "Comment": transaction.comment,
        }, template_id)
    except PdfServiceError as e:
        logger.error("pdf_generation_failed", extra={"transaction_id": transaction_id, "error": str(e)})
        return Response(status=500, message=codes.ERR_PDF)

    return Response(status=200, message=SUCCESS, data=document)
