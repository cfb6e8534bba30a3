"""Token issuing and verification interfaces."""

from abc import ABC, abstractmethod

from bank_api.domain.accounts import Account
from bank_api.schemas.auth import TokenClaims


class AuthVerificationError(Exception):
    """Raised when a token cannot be verified or normalized."""


class MalformedTokenError(AuthVerificationError):
    """Token structure or claims could not be parsed."""


class UnexpectedAlgorithmError(AuthVerificationError):
    """Token header asserts a signing algorithm outside the HMAC family."""


class InvalidSignatureError(AuthVerificationError):
    """Token signature does not match the server secret."""


class ExpiredTokenError(AuthVerificationError):
    """Token expiry instant has passed."""


class TokenIssuer(ABC):
    """Produces signed, time-bounded credentials for authenticated accounts."""

    @abstractmethod
    def issue_token(self, account: Account) -> str:
        """Return a signed token asserting the account's number."""


class TokenVerifier(ABC):
    """Provider-neutral token verification interface."""

    @abstractmethod
    def verify_token(self, token: str) -> TokenClaims:
        """Verify token and return its typed claims."""


__all__ = [
    "AuthVerificationError",
    "ExpiredTokenError",
    "InvalidSignatureError",
    "MalformedTokenError",
    "TokenIssuer",
    "TokenVerifier",
    "UnexpectedAlgorithmError",
]
