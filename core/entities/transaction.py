from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

APPROVED = "approved"


@dataclass
class Transaction:
    transaction_id: str
    user_id: str
    account_number: int
    amount: Decimal
    transfer_to: int
    status: str             # "approved" | "rejected"
    type: str               # "credit" | "debit"
    comment: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_public_dict(self) -> dict:
        # user_id never leaves the service
        return {
            "transaction_id": self.transaction_id,
            "account_number": self.account_number,
            "amount": self.amount,
            "transfer_to": self.transfer_to,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "status": self.status,
            "type": self.type,
            "comment": self.comment,
        }


@dataclass
class NewTransaction:
    account_number: int
    amount: Decimal
    transfer_to: int
    status: str
    type: str
    comment: str = ""


@dataclass
class BalanceUpdate:
    account_number: int
    amount: Decimal
    transaction_type: str

    def to_json_dict(self) -> dict:
        return {
            "account_number": self.account_number,
            "amount": float(self.amount),
            "transaction_type": self.transaction_type,
        }


@dataclass
class Paginate:
    current_page: int
    next_page: int      # -1 when there is no next page
    total_page: int
