"""SQLite-backed account store."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime

from bank_api.domain.accounts import Account
from bank_api.repositories.base import (
    AccountNotFoundError,
    AccountStore,
    DuplicateAccountError,
    StorageError,
)

logger = logging.getLogger(__name__)

_ACCOUNT_COLUMNS = "id, first_name, last_name, number, encrypted_password, balance, created_at"


class SqliteAccountStore(AccountStore):
    """
    SQLite implementation of `AccountStore`.

    Owns the `account` table. Driver errors are logged and re-raised as
    `StorageError` with a generic message so SQL text never reaches callers.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._ensure_table()

    def _get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_table(self) -> None:
        self._execute(
            """
            CREATE TABLE IF NOT EXISTS account (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                first_name VARCHAR(50) NOT NULL,
                last_name VARCHAR(50) NOT NULL,
                number INTEGER NOT NULL UNIQUE,
                encrypted_password VARCHAR(100) NOT NULL,
                balance INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL
            )
            """
        )

    def _execute(self, query: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            with self._get_connection() as conn:
                cur = conn.cursor()
                cur.execute(query, params)
                conn.commit()
                return cur
        except sqlite3.IntegrityError as exc:
            raise DuplicateAccountError("account number already exists") from exc
        except sqlite3.Error as exc:
            logger.error("storage.failed backend=sqlite error=%s", type(exc).__name__)
            raise StorageError("account storage unavailable") from exc

    @staticmethod
    def _to_domain(row: tuple) -> Account:
        return Account(
            id=int(row[0]),
            first_name=row[1],
            last_name=row[2],
            number=int(row[3]),
            encrypted_password=row[4],
            balance=int(row[5]),
            created_at=datetime.fromisoformat(row[6]),
        )

    def create_account(self, account: Account) -> Account:
        cur = self._execute(
            """
            INSERT INTO account (first_name, last_name, number, encrypted_password, balance, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                account.first_name,
                account.last_name,
                account.number,
                account.encrypted_password,
                account.balance,
                account.created_at.isoformat(),
            ),
        )
        return Account(
            id=int(cur.lastrowid),
            first_name=account.first_name,
            last_name=account.last_name,
            number=account.number,
            encrypted_password=account.encrypted_password,
            balance=account.balance,
            created_at=account.created_at,
        )

    def get_account_by_id(self, account_id: int) -> Account:
        row = self._execute(f"SELECT {_ACCOUNT_COLUMNS} FROM account WHERE id = ?", (account_id,)).fetchone()
        if not row:
            raise AccountNotFoundError(f"account {account_id} not found")
        return self._to_domain(row)

    def get_account_by_number(self, number: int) -> Account:
        row = self._execute(f"SELECT {_ACCOUNT_COLUMNS} FROM account WHERE number = ?", (number,)).fetchone()
        if not row:
            raise AccountNotFoundError(f"account with number {number} not found")
        return self._to_domain(row)

    def list_accounts(self) -> list[Account]:
        rows = self._execute(f"SELECT {_ACCOUNT_COLUMNS} FROM account ORDER BY id").fetchall()
        return [self._to_domain(row) for row in rows]

    def delete_account(self, account_id: int) -> None:
        cur = self._execute("DELETE FROM account WHERE id = ?", (account_id,))
        if cur.rowcount == 0:
            raise AccountNotFoundError(f"account {account_id} not found")


__all__ = ["SqliteAccountStore"]
