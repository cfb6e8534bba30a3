"""HMAC-signed JWT issuer and verifier."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import SecretStr
from pydantic import ValidationError as ClaimsValidationError

from bank_api.adapters.auth.base import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    TokenIssuer,
    TokenVerifier,
    UnexpectedAlgorithmError,
)
from bank_api.domain.accounts import Account
from bank_api.domain.errors import ConfigError, CryptoError
from bank_api.schemas.auth import TokenClaims

SIGNING_ALGORITHM = "HS256"
ACCEPTED_ALGORITHMS = ("HS256", "HS384", "HS512")
ACCOUNT_NUMBER_CLAIM = "accountNumber"
EXPIRY_CLAIM = "exp"


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class SigningKey:
    """Process-wide symmetric signing secret, loaded once at startup."""

    secret: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.secret or not self.secret.strip():
            raise ConfigError("JWT signing secret is not configured")

    @classmethod
    def from_setting(cls, value: SecretStr | str | None) -> SigningKey:
        if isinstance(value, SecretStr):
            value = value.get_secret_value()
        if value is None:
            raise ConfigError("JWT signing secret is not configured")
        return cls(secret=value)


class JwtTokenIssuer(TokenIssuer):
    """Signs ``{accountNumber, exp}`` claims with HS256."""

    def __init__(
        self,
        signing_key: SigningKey | None,
        *,
        ttl: timedelta,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if signing_key is None:
            raise ConfigError("JWT signing secret is not configured")
        if ttl <= timedelta(0):
            raise ConfigError("Token TTL must be positive")
        self._signing_key = signing_key
        self._ttl = ttl
        self._clock = clock

    def issue_token(self, account: Account) -> str:
        claims = {
            ACCOUNT_NUMBER_CLAIM: account.number,
            EXPIRY_CLAIM: self._clock() + self._ttl,
        }
        try:
            return jwt.encode(claims, self._signing_key.secret, algorithm=SIGNING_ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise CryptoError("Token could not be signed") from exc


class JwtTokenVerifier(TokenVerifier):
    """Validates HMAC JWTs and returns typed claims.

    The header algorithm is checked before any signature work so tokens
    asserting ``none`` or an asymmetric algorithm are refused outright.
    """

    def __init__(self, signing_key: SigningKey | None) -> None:
        if signing_key is None:
            raise ConfigError("JWT signing secret is not configured")
        self._signing_key = signing_key

    def verify_token(self, token: str) -> TokenClaims:
        if not token:
            raise MalformedTokenError("Token is empty")

        try:
            header = jwt.get_unverified_header(token)
        except jwt.PyJWTError as exc:
            raise MalformedTokenError("Token structure is invalid") from exc

        algorithm = header.get("alg")
        if algorithm not in ACCEPTED_ALGORITHMS:
            raise UnexpectedAlgorithmError(f"Unexpected signing method: {algorithm!r}")

        try:
            payload = jwt.decode(
                token,
                self._signing_key.secret,
                algorithms=list(ACCEPTED_ALGORITHMS),
                options={"require": [EXPIRY_CLAIM]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError("Token has expired") from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignatureError("Token signature is invalid") from exc
        except jwt.InvalidAlgorithmError as exc:
            raise UnexpectedAlgorithmError("Unexpected signing method") from exc
        except jwt.PyJWTError as exc:
            raise MalformedTokenError("Token could not be decoded") from exc

        try:
            return TokenClaims.model_validate(payload)
        except ClaimsValidationError as exc:
            raise MalformedTokenError("Token claims are invalid") from exc


__all__ = [
    "ACCEPTED_ALGORITHMS",
    "ACCOUNT_NUMBER_CLAIM",
    "JwtTokenIssuer",
    "JwtTokenVerifier",
    "SIGNING_ALGORITHM",
    "SigningKey",
]
