"""In-memory account store used by local development and tests."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace

from bank_api.domain.accounts import Account
from bank_api.repositories.base import (
    AccountNotFoundError,
    AccountStore,
    DuplicateAccountError,
    StorageError,
)


@dataclass(slots=True)
class InMemoryAccountStore(AccountStore):
    """Simple, deterministic persistence layer for scaffolding and tests.

    Route handlers run in FastAPI's threadpool, so every access goes through
    ``lock``.
    """

    accounts: dict[int, Account] = field(default_factory=dict)
    next_id: int = 1
    account_write_count: int = 0
    account_read_count: int = 0
    read_failure_message: str | None = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def create_account(self, account: Account) -> Account:
        with self.lock:
            if any(existing.number == account.number for existing in self.accounts.values()):
                raise DuplicateAccountError(f"account with number {account.number} already exists")

            stored = replace(account, id=self.next_id)
            self.accounts[stored.id] = stored
            self.next_id += 1
            self.account_write_count += 1
            return stored

    def get_account_by_id(self, account_id: int) -> Account:
        with self.lock:
            self._record_read()
            account = self.accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(f"account {account_id} not found")
        return account

    def get_account_by_number(self, number: int) -> Account:
        with self.lock:
            self._record_read()
            for account in self.accounts.values():
                if account.number == number:
                    return account
        raise AccountNotFoundError(f"account with number {number} not found")

    def list_accounts(self) -> list[Account]:
        with self.lock:
            self._record_read()
            return [self.accounts[account_id] for account_id in sorted(self.accounts)]

    def delete_account(self, account_id: int) -> None:
        with self.lock:
            if self.accounts.pop(account_id, None) is None:
                raise AccountNotFoundError(f"account {account_id} not found")
            self.account_write_count += 1

    def _record_read(self) -> None:
        # Caller holds the lock.
        self.account_read_count += 1
        if self.read_failure_message is not None:
            message = self.read_failure_message
            self.read_failure_message = None
            raise StorageError(message)


__all__ = ["InMemoryAccountStore"]
