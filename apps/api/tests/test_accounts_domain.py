"""Account directory, password hashing and number allocation tests."""

from __future__ import annotations

import unittest
from concurrent.futures import ThreadPoolExecutor

from bank_api.domain.accounts import (
    ACCOUNT_NUMBER_MAX,
    ACCOUNT_NUMBER_MIN,
    Account,
    AccountDirectory,
    AccountNumberAllocator,
    validate_password,
)
from bank_api.domain.errors import CryptoError, ValidationError


class AccountDirectoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.directory = AccountDirectory(bcrypt_rounds=4)

    def test_created_account_is_fully_populated_and_unsaved(self) -> None:
        account = self.directory.create_account("John", "Smith", "johnsmith")

        self.assertIsNone(account.id)
        self.assertEqual(account.first_name, "John")
        self.assertEqual(account.last_name, "Smith")
        self.assertEqual(account.balance, 0)
        self.assertIsNotNone(account.created_at.tzinfo)
        self.assertGreaterEqual(account.number, ACCOUNT_NUMBER_MIN)
        self.assertLessEqual(account.number, ACCOUNT_NUMBER_MAX)

    def test_password_is_stored_as_bcrypt_hash(self) -> None:
        account = self.directory.create_account("John", "Smith", "johnsmith")

        self.assertNotEqual(account.encrypted_password, "johnsmith")
        self.assertNotIn("johnsmith", account.encrypted_password)
        self.assertTrue(account.encrypted_password.startswith("$2"))

    def test_validate_password_accepts_only_the_original_password(self) -> None:
        account = self.directory.create_account("John", "Smith", "johnsmith")

        self.assertTrue(validate_password(account, "johnsmith"))
        self.assertTrue(account.validate_password("johnsmith"))
        for candidate in ("", "JohnSmith", "johnsmith ", "johnsmit", "x" * 80):
            with self.subTest(candidate=candidate):
                self.assertFalse(validate_password(account, candidate))

    def test_same_password_hashes_differently_per_account(self) -> None:
        first = self.directory.create_account("Ann", "Lee", "shared-secret")
        second = self.directory.create_account("Bob", "Lee", "shared-secret")

        self.assertNotEqual(first.encrypted_password, second.encrypted_password)
        self.assertTrue(validate_password(second, "shared-secret"))

    def test_empty_names_and_password_are_rejected(self) -> None:
        cases = [
            ("", "Smith", "pw"),
            ("John", "", "pw"),
            ("   ", "Smith", "pw"),
            ("John", "Smith", ""),
        ]
        for first_name, last_name, password in cases:
            with self.subTest(first_name=first_name, last_name=last_name):
                with self.assertRaises(ValidationError):
                    self.directory.create_account(first_name, last_name, password)

    def test_hashing_failure_raises_crypto_error(self) -> None:
        directory = AccountDirectory(bcrypt_rounds=3)

        with self.assertRaises(CryptoError):
            directory.create_account("John", "Smith", "johnsmith")

    def test_explicit_number_is_reserved_once(self) -> None:
        account = self.directory.create_account("John", "Smith", "johnsmith", number=70778)
        self.assertEqual(account.number, 70778)

        with self.assertRaises(ValidationError):
            self.directory.create_account("Jane", "Smith", "janesmith", number=70778)

    def test_malformed_stored_hash_never_validates(self) -> None:
        account = self.directory.create_account("John", "Smith", "johnsmith")
        broken = Account(
            first_name=account.first_name,
            last_name=account.last_name,
            number=account.number,
            encrypted_password="not-a-bcrypt-hash",
            created_at=account.created_at,
        )

        self.assertFalse(validate_password(broken, "johnsmith"))


class AccountNumberAllocatorTests(unittest.TestCase):
    def test_numbers_are_never_reissued(self) -> None:
        allocator = AccountNumberAllocator(low=1, high=3)

        issued = {allocator.allocate() for _ in range(3)}

        self.assertEqual(issued, {1, 2, 3})
        with self.assertRaises(ValidationError):
            allocator.allocate()

    def test_reserved_number_is_skipped_by_allocation(self) -> None:
        allocator = AccountNumberAllocator(low=10, high=11)
        allocator.reserve(10)

        self.assertEqual(allocator.allocate(), 11)
        self.assertIn(10, allocator)
        self.assertIn(11, allocator)

    def test_reserve_rejects_non_positive_numbers(self) -> None:
        allocator = AccountNumberAllocator()

        with self.assertRaises(ValidationError):
            allocator.reserve(0)

    def test_default_range_produces_distinct_ten_digit_numbers(self) -> None:
        allocator = AccountNumberAllocator()

        numbers = [allocator.allocate() for _ in range(500)]

        self.assertEqual(len(set(numbers)), len(numbers))
        self.assertTrue(all(len(str(number)) == 10 for number in numbers))

    def test_concurrent_allocation_never_repeats(self) -> None:
        allocator = AccountNumberAllocator(low=1, high=500)

        with ThreadPoolExecutor(max_workers=8) as pool:
            numbers = list(pool.map(lambda _: allocator.allocate(), range(500)))

        self.assertEqual(sorted(numbers), list(range(1, 501)))


if __name__ == "__main__":
    unittest.main()
