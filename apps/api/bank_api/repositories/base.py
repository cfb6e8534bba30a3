"""Account storage interface."""

from abc import ABC, abstractmethod

from bank_api.domain.accounts import Account


class StorageError(Exception):
    """Raised when the account store cannot complete an operation."""


class AccountNotFoundError(StorageError):
    """Raised when no account matches the requested id or number."""


class DuplicateAccountError(StorageError):
    """Raised when an account number is already persisted."""


class AccountStore(ABC):
    """Backend-neutral account persistence boundary."""

    @abstractmethod
    def create_account(self, account: Account) -> Account:
        """Persist a new account and return it with its internal id assigned."""

    @abstractmethod
    def get_account_by_id(self, account_id: int) -> Account:
        """Return the account with the given internal id."""

    @abstractmethod
    def get_account_by_number(self, number: int) -> Account:
        """Return the account with the given public account number."""

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """Return every stored account ordered by internal id."""

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Remove the account with the given internal id."""


__all__ = ["AccountNotFoundError", "AccountStore", "DuplicateAccountError", "StorageError"]
