"""Authorization gate binding verified token claims to account resources."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TypeVar

from bank_api.adapters.auth import AuthVerificationError, TokenVerifier
from bank_api.errors import bad_request, forbidden, unauthenticated
from bank_api.repositories.base import AccountStore, StorageError

TOKEN_HEADER = "x-jwt-token"
ACCOUNT_ID_PARAM = "id"

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class AccessRequest:
    """Transport-neutral view of an inbound request: headers and path params."""

    headers: Mapping[str, str] = field(default_factory=dict)
    path_params: Mapping[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


class AuthorizationGate:
    """Decides whether a presented token may act on the account named in the path.

    The token is verified before any store read so unauthenticated callers
    learn nothing about which account ids exist. Store misses and store
    failures are reported the same way as a bad token.
    """

    def __init__(self, verifier: TokenVerifier, store: AccountStore) -> None:
        self._verifier = verifier
        self._store = store

    def check(self, request: AccessRequest) -> None:
        token = request.header(TOKEN_HEADER)
        if not token:
            raise unauthenticated("missing_token")

        try:
            claims = self._verifier.verify_token(token)
        except AuthVerificationError as exc:
            raise unauthenticated(f"token_{type(exc).__name__}") from exc

        raw_id = request.path_params.get(ACCOUNT_ID_PARAM)
        if raw_id is None or not (raw_id.isascii() and raw_id.isdigit()):
            raise bad_request("invalid_account_id", f"Invalid ID {raw_id}" if raw_id is not None else "Missing ID")
        account_id = int(raw_id)

        try:
            account = self._store.get_account_by_id(account_id)
        except StorageError as exc:
            raise unauthenticated("account_unavailable") from exc

        if account.number != claims.account_number:
            raise forbidden("account_number_mismatch")

    def authorize(self, request: AccessRequest, downstream: Callable[[AccessRequest], T]) -> T:
        self.check(request)
        return downstream(request)


__all__ = ["ACCOUNT_ID_PARAM", "AccessRequest", "AuthorizationGate", "TOKEN_HEADER"]
