"""Account service layer."""

import logging

from bank_api.core.logging_safety import safe_log_identifier
from bank_api.domain.accounts import Account, AccountDirectory
from bank_api.domain.errors import CryptoError, ValidationError
from bank_api.errors import ApiError
from bank_api.repositories.base import AccountNotFoundError, AccountStore, DuplicateAccountError
from bank_api.schemas.account import AccountResponse

logger = logging.getLogger(__name__)


def _not_found() -> ApiError:
    return ApiError(status_code=404, code="ACCOUNT_NOT_FOUND", message="Account not found")


class AccountService:
    def __init__(self, store: AccountStore, directory: AccountDirectory) -> None:
        self._store = store
        self._directory = directory

    def create_account(
        self,
        *,
        first_name: str,
        last_name: str,
        password: str,
        number: int | None = None,
    ) -> AccountResponse:
        try:
            account = self._directory.create_account(first_name, last_name, password, number=number)
        except ValidationError as exc:
            raise ApiError(status_code=400, code="VALIDATION_ERROR", message=str(exc)) from exc
        except CryptoError as exc:
            raise ApiError(status_code=400, code="PASSWORD_REJECTED", message=str(exc)) from exc

        try:
            stored = self._store.create_account(account)
        except DuplicateAccountError as exc:
            raise ApiError(status_code=409, code="ACCOUNT_NUMBER_CONFLICT", message="Account number already exists") from exc

        logger.info(
            "account.created account_id=%s account=%s",
            stored.id,
            safe_log_identifier(stored.number, prefix="acct"),
        )
        return AccountResponse.from_account(stored)

    def list_accounts(self) -> list[AccountResponse]:
        return [AccountResponse.from_account(account) for account in self._store.list_accounts()]

    def get_account(self, *, account_id: int) -> AccountResponse:
        return AccountResponse.from_account(self._load(account_id))

    def find_by_number(self, number: int) -> AccountResponse | None:
        try:
            return AccountResponse.from_account(self._store.get_account_by_number(number))
        except AccountNotFoundError:
            return None

    def delete_account(self, *, account_id: int) -> None:
        try:
            self._store.delete_account(account_id)
        except AccountNotFoundError as exc:
            raise _not_found() from exc
        logger.info("account.deleted account_id=%s", account_id)

    def _load(self, account_id: int) -> Account:
        try:
            return self._store.get_account_by_id(account_id)
        except AccountNotFoundError as exc:
            raise _not_found() from exc
