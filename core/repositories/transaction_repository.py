from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any, Tuple
from core.entities.transaction import Transaction


class TransactionRepository(ABC):
    @abstractmethod
    def health_check(self) -> bool:...

    @abstractmethod
    def get(self, filters: Dict[str, Any], limit: int, offset: int) -> Tuple[List[Transaction], int]:
        """Rows matching every filter (oldest first) and the total match count.

        limit <= 0 disables pagination and returns every matching row.
        """

    @abstractmethod
    def insert(self, transaction: Transaction) -> None:...

    def find_by_id(self, transaction_id: str) -> Optional[Transaction]:
        rows, _ = self.get({"transaction_id": transaction_id}, 0, 0)
        return rows[0] if rows else None
