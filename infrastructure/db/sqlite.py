import re
import sqlite3
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Dict, Any, Tuple
from pathlib import Path

from core.entities.transaction import Transaction
from core.repositories.transaction_repository import TransactionRepository

COLUMNS = (
    "transaction_id", "account_number", "user_id", "amount", "transfer_to",
    "created_at", "updated_at", "status", "type", "comment",
)

_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_table_name(table_name: str) -> str:
    if not _TABLE_NAME_RE.match(table_name):
        raise ValueError(f"invalid table name: {table_name!r}")
    return table_name


def init_db(db_path: str, table_name: str = "transactions") -> None:
    if db_path != ":memory:" and not db_path.startswith("file:"):
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, check_same_thread=False)
    try:
        create_table(conn, table_name)
    finally:
        conn.close()


def create_table(conn: sqlite3.Connection, table_name: str = "transactions") -> None:
    table = _check_table_name(table_name)
    conn.execute(f"""
    CREATE TABLE IF NOT EXISTS {table} (
        transaction_id TEXT NOT NULL PRIMARY KEY,
        account_number INTEGER NOT NULL,
        user_id TEXT NOT NULL,
        amount TEXT NOT NULL DEFAULT '0.00',
        transfer_to INTEGER NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        status TEXT NOT NULL,
        type TEXT NOT NULL,
        comment TEXT
    );
    """)
    conn.execute(f"CREATE INDEX IF NOT EXISTS idx_{table}_user_id ON {table} (user_id, created_at);")
    conn.commit()


class SQLiteTransactionRepository(TransactionRepository):
    def __init__(self, conn: sqlite3.Connection, table_name: str = "transactions"):
        self.conn = conn
        self.conn.row_factory = sqlite3.Row
        self.table = _check_table_name(table_name)

    def _row_to_tx(self, row: sqlite3.Row) -> Transaction:
        return Transaction(
            transaction_id=row["transaction_id"],
            user_id=row["user_id"],
            account_number=int(row["account_number"]),
            amount=Decimal(row["amount"]),
            transfer_to=int(row["transfer_to"]),
            status=row["status"],
            type=row["type"],
            comment=row["comment"] or "",
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _where(filters: Dict[str, Any]) -> Tuple[str, List[Any]]:
        clauses = []
        params = []
        for column, value in filters.items():
            if column not in COLUMNS:
                raise ValueError(f"unknown column: {column}")
            clauses.append(f"{column} = ?")
            params.append(value)
        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    def health_check(self) -> bool:
        try:
            self.conn.execute("SELECT 1").fetchone()
        except sqlite3.Error:
            return False
        return True

    def get(self, filters: Dict[str, Any], limit: int, offset: int) -> Tuple[List[Transaction], int]:
        where, params = self._where(filters)
        cur = self.conn.cursor()
        cur.execute(f"SELECT COUNT(*) FROM {self.table}{where}", params)
        count = int(cur.fetchone()[0])

        query = f"SELECT * FROM {self.table}{where} ORDER BY created_at ASC, rowid ASC"
        if limit > 0:
            query += " LIMIT ? OFFSET ?"
            params = params + [int(limit), max(0, int(offset))]
        cur.execute(query, params)
        rows = cur.fetchall()
        return [self._row_to_tx(r) for r in rows], count

    def insert(self, transaction: Transaction) -> None:
        now = datetime.now(timezone.utc).isoformat()
        transaction.created_at = transaction.created_at or now
        transaction.updated_at = transaction.updated_at or now
        cur = self.conn.cursor()
        cur.execute(
            f"INSERT INTO {self.table} (transaction_id, account_number, user_id, amount, transfer_to, "
            "created_at, updated_at, status, type, comment) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                transaction.transaction_id,
                int(transaction.account_number),
                transaction.user_id,
                str(transaction.amount),
                int(transaction.transfer_to),
                transaction.created_at,
                transaction.updated_at,
                transaction.status,
                transaction.type,
                transaction.comment,
            ),
        )
        self.conn.commit()
