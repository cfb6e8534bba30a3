"""Login service layer."""

import logging

from bank_api.adapters.auth import TokenIssuer
from bank_api.core.logging_safety import safe_log_identifier
from bank_api.domain.accounts import validate_password
from bank_api.domain.errors import CryptoError
from bank_api.errors import ApiError
from bank_api.repositories.base import AccountNotFoundError, AccountStore
from bank_api.schemas.auth import LoginResponse

logger = logging.getLogger(__name__)


def _invalid_credentials() -> ApiError:
    return ApiError(status_code=403, code="INVALID_CREDENTIALS", message="Cannot authenticate")


class LoginService:
    def __init__(self, store: AccountStore, issuer: TokenIssuer) -> None:
        self._store = store
        self._issuer = issuer

    def login(self, *, number: int, password: str) -> LoginResponse:
        safe_number = safe_log_identifier(number, prefix="acct")
        try:
            account = self._store.get_account_by_number(number)
        except AccountNotFoundError:
            logger.warning("login.rejected account=%s reason=unknown_account", safe_number)
            raise _invalid_credentials() from None

        if not validate_password(account, password):
            logger.warning("login.rejected account=%s reason=password_mismatch", safe_number)
            raise _invalid_credentials()

        try:
            token = self._issuer.issue_token(account)
        except CryptoError as exc:
            logger.error("login.failed account=%s reason=token_signing_failed", safe_number)
            raise ApiError(status_code=500, code="TOKEN_SIGNING_FAILED", message="Token could not be issued") from exc

        logger.info("login.succeeded account=%s", safe_number)
        return LoginResponse(token=token, number=account.number)
