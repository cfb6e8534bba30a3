"""Token issuer and verifier adapters."""

from .base import (
    AuthVerificationError,
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    TokenIssuer,
    TokenVerifier,
    UnexpectedAlgorithmError,
)
from .jwt_tokens import JwtTokenIssuer, JwtTokenVerifier, SigningKey

__all__ = [
    "AuthVerificationError",
    "ExpiredTokenError",
    "InvalidSignatureError",
    "JwtTokenIssuer",
    "JwtTokenVerifier",
    "MalformedTokenError",
    "SigningKey",
    "TokenIssuer",
    "TokenVerifier",
    "UnexpectedAlgorithmError",
]
