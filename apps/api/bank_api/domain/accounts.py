"""Account records, password hashing and account-number allocation."""

from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from datetime import UTC, datetime

import bcrypt

from bank_api.domain.errors import CryptoError, ValidationError

ACCOUNT_NUMBER_MIN = 1_000_000_000
ACCOUNT_NUMBER_MAX = 9_999_999_999
DEFAULT_BCRYPT_ROUNDS = 12


@dataclass(slots=True)
class Account:
    first_name: str
    last_name: str
    number: int
    encrypted_password: str
    created_at: datetime
    balance: int = 0
    id: int | None = None

    def validate_password(self, candidate: str) -> bool:
        return validate_password(self, candidate)


def hash_password(password: str, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    try:
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    except (ValueError, TypeError) as exc:
        raise CryptoError("Password could not be hashed") from exc
    return hashed.decode("utf-8")


def validate_password(account: Account, candidate: str) -> bool:
    """Check a plaintext candidate against the account's stored bcrypt hash."""
    try:
        return bcrypt.checkpw(candidate.encode("utf-8"), account.encrypted_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long candidate never matches.
        return False


class AccountNumberAllocator:
    """Hands out public account numbers that are never reused in this process."""

    def __init__(self, *, low: int = ACCOUNT_NUMBER_MIN, high: int = ACCOUNT_NUMBER_MAX) -> None:
        if low > high:
            raise ValueError("low must not exceed high")
        self._low = low
        self._span = high - low + 1
        self._issued: set[int] = set()
        self._lock = threading.Lock()

    def allocate(self) -> int:
        with self._lock:
            if len(self._issued) >= self._span:
                raise ValidationError("Account number space exhausted")
            while True:
                candidate = self._low + secrets.randbelow(self._span)
                if candidate not in self._issued:
                    self._issued.add(candidate)
                    return candidate

    def reserve(self, number: int) -> None:
        if number <= 0:
            raise ValidationError("Account number must be positive")
        with self._lock:
            if number in self._issued:
                raise ValidationError("Account number already issued")
            self._issued.add(number)

    def __contains__(self, number: object) -> bool:
        return number in self._issued


class AccountDirectory:
    """Builds fully populated, not yet persisted, account records."""

    def __init__(
        self,
        *,
        allocator: AccountNumberAllocator | None = None,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
    ) -> None:
        self._allocator = allocator or AccountNumberAllocator()
        self._bcrypt_rounds = bcrypt_rounds

    def create_account(
        self,
        first_name: str,
        last_name: str,
        password: str,
        *,
        number: int | None = None,
    ) -> Account:
        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        if not first_name:
            raise ValidationError("first_name must not be empty")
        if not last_name:
            raise ValidationError("last_name must not be empty")
        if not password:
            raise ValidationError("password must not be empty")

        encrypted_password = hash_password(password, rounds=self._bcrypt_rounds)

        if number is None:
            number = self._allocator.allocate()
        else:
            self._allocator.reserve(number)

        return Account(
            first_name=first_name,
            last_name=last_name,
            number=number,
            encrypted_password=encrypted_password,
            created_at=datetime.now(UTC),
        )


__all__ = [
    "ACCOUNT_NUMBER_MAX",
    "ACCOUNT_NUMBER_MIN",
    "Account",
    "AccountDirectory",
    "AccountNumberAllocator",
    "hash_password",
    "validate_password",
]
