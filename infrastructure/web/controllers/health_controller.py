from fastapi import APIRouter, Depends

from core.use_cases.transaction_use_cases import health_check
from infrastructure.db.sqlite import SQLiteTransactionRepository
from infrastructure.web.dependencies import get_transaction_repo
from infrastructure.web.errors import envelope

SERVICE_NAME = "transactionManagementService"

router = APIRouter(tags=["health"])


@router.get("/health")
def health(repo: SQLiteTransactionRepository = Depends(get_transaction_repo)):
    """Readiness of the transaction store."""
    healthy = health_check(repo)
    return envelope(200 if healthy else 503, "SUCCESS" if healthy else "UNHEALTHY", {SERVICE_NAME: healthy})
