import logging
from concurrent.futures import Future, ThreadPoolExecutor
from threading import BoundedSemaphore
from typing import Optional

import httpx

from core.entities.transaction import BalanceUpdate
from core.services.balance_notifier import BalanceNotifier

logger = logging.getLogger(__name__)

UPDATE_TRANSACTION_PATH = "/microbank/v1/account/update/transaction"


class HttpBalanceNotifier(BalanceNotifier):
    """Pushes balance updates to the account service from a bounded worker pool.

    At most max_pending updates are queued or in flight; past that new
    updates are dropped and logged. Delivery is at most once.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 3.0,
        max_workers: int = 4,
        max_pending: int = 100,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="balance-notifier")
        self._slots = BoundedSemaphore(max_pending)

    def notify(self, update: BalanceUpdate) -> bool:
        if not self._slots.acquire(blocking=False):
            logger.warning(
                "balance_update_dropped",
                extra={"account_number": update.account_number, "reason": "queue_full"},
            )
            return False
        try:
            future = self._executor.submit(self._send, update)
        except RuntimeError as e:
            # executor already shut down
            self._slots.release()
            logger.warning("balance_update_dropped", extra={"account_number": update.account_number, "reason": str(e)})
            return False
        future.add_done_callback(self._release)
        return True

    def _release(self, future: Future) -> None:
        self._slots.release()

    def _send(self, update: BalanceUpdate) -> None:
        try:
            response = self.client.put(UPDATE_TRANSACTION_PATH, json=update.to_json_dict())
        except Exception as e:
            # nothing collects the future, so every failure ends here
            logger.error("balance_update_failed", extra={"account_number": update.account_number, "error": str(e)})
            return
        if response.status_code >= 300:
            logger.error(
                "balance_update_rejected",
                extra={"account_number": update.account_number, "status_code": response.status_code},
            )
            return
        logger.info("balance_update_sent", extra={"account_number": update.account_number})

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
        self.client.close()
