"""Authorization gate decision tests using synthetic tokens and accounts."""

from __future__ import annotations

import unittest
from datetime import UTC, datetime, timedelta

from bank_api.adapters.auth import JwtTokenIssuer, JwtTokenVerifier, SigningKey
from bank_api.domain.accounts import Account
from bank_api.errors import AccessDeniedError
from bank_api.repositories.memory import InMemoryAccountStore
from bank_api.services.authorization import AccessRequest, AuthorizationGate

TEST_SECRET = "test-signing-secret-0123456789abcdef"


def _account(*, number: int, first_name: str) -> Account:
    return Account(
        first_name=first_name,
        last_name="Tester",
        number=number,
        encrypted_password="$2b$04$unused",
        created_at=datetime.now(UTC),
    )


class _RecordingDownstream:
    def __init__(self) -> None:
        self.calls: list[AccessRequest] = []

    def __call__(self, request: AccessRequest) -> str:
        self.calls.append(request)
        return "downstream-result"


class AuthorizationGateTests(unittest.TestCase):
    def setUp(self) -> None:
        key = SigningKey(TEST_SECRET)
        self.issuer = JwtTokenIssuer(key, ttl=timedelta(minutes=15))
        self.store = InMemoryAccountStore()
        # Internal ids and account numbers deliberately overlap across accounts.
        self.alice = self.store.create_account(_account(number=5000, first_name="Alice"))
        self.bob = self.store.create_account(_account(number=1, first_name="Bob"))
        self.store.account_read_count = 0
        self.gate = AuthorizationGate(JwtTokenVerifier(key), self.store)
        self.downstream = _RecordingDownstream()

    def _request(self, token: str | None, account_id: object) -> AccessRequest:
        headers = {"x-jwt-token": token} if token is not None else {}
        path_params = {"id": str(account_id)} if account_id is not None else {}
        return AccessRequest(headers=headers, path_params=path_params)

    def _assert_denied(self, request: AccessRequest, *, status_code: int, code: str) -> AccessDeniedError:
        with self.assertRaises(AccessDeniedError) as context:
            self.gate.authorize(request, self.downstream)
        self.assertEqual(context.exception.status_code, status_code)
        self.assertEqual(context.exception.payload.code, code)
        self.assertEqual(self.downstream.calls, [])
        return context.exception

    def test_matching_account_passes_through_with_original_request(self) -> None:
        request = self._request(self.issuer.issue_token(self.alice), self.alice.id)

        result = self.gate.authorize(request, self.downstream)

        self.assertEqual(result, "downstream-result")
        self.assertEqual(len(self.downstream.calls), 1)
        self.assertIs(self.downstream.calls[0], request)

    def test_token_for_other_account_is_forbidden(self) -> None:
        request = self._request(self.issuer.issue_token(self.alice), self.bob.id)

        denial = self._assert_denied(request, status_code=403, code="FORBIDDEN")

        self.assertEqual(denial.reason, "account_number_mismatch")
        self.assertEqual(denial.payload.error, "Permission denied")

    def test_path_id_is_resolved_before_comparing_with_claim(self) -> None:
        # Bob's account number equals Alice's internal id.
        self.assertEqual(self.bob.number, self.alice.id)
        bob_token = self.issuer.issue_token(self.bob)

        self._assert_denied(self._request(bob_token, self.alice.id), status_code=403, code="FORBIDDEN")
        self.assertEqual(self.gate.authorize(self._request(bob_token, self.bob.id), self.downstream), "downstream-result")

    def test_missing_token_is_unauthenticated_without_store_access(self) -> None:
        for token in (None, ""):
            with self.subTest(token=token):
                self._assert_denied(self._request(token, self.alice.id), status_code=403, code="UNAUTHENTICATED")
        self.assertEqual(self.store.account_read_count, 0)

    def test_verifier_failures_are_unauthenticated_without_store_access(self) -> None:
        expired_issuer = JwtTokenIssuer(
            SigningKey(TEST_SECRET),
            ttl=timedelta(minutes=1),
            clock=lambda: datetime.now(UTC) - timedelta(hours=1),
        )
        foreign_issuer = JwtTokenIssuer(SigningKey("some-other-secret-0123456789abcdef"), ttl=timedelta(minutes=15))
        tokens = {
            "malformed": "garbage",
            "expired": expired_issuer.issue_token(self.alice),
            "bad_signature": foreign_issuer.issue_token(self.alice),
            "none_alg": "eyJhbGciOiJub25lIn0.eyJhY2NvdW50TnVtYmVyIjo1MDAwfQ.",
        }
        for label, token in tokens.items():
            with self.subTest(label=label):
                # A non-numeric id must not be reported before authentication.
                self._assert_denied(self._request(token, "not-a-number"), status_code=403, code="UNAUTHENTICATED")
        self.assertEqual(self.store.account_read_count, 0)

    def test_non_numeric_or_missing_id_is_bad_request(self) -> None:
        token = self.issuer.issue_token(self.alice)
        for account_id in ("abc", "-1", "1.5", "", None, "\u0661", "\u00b2", "\uff11"):
            with self.subTest(account_id=account_id):
                self._assert_denied(self._request(token, account_id), status_code=400, code="BAD_REQUEST")
        self.assertEqual(self.store.account_read_count, 0)

    def test_unknown_account_is_indistinguishable_from_bad_token(self) -> None:
        token = self.issuer.issue_token(self.alice)

        denial = self._assert_denied(self._request(token, 999), status_code=403, code="UNAUTHENTICATED")

        self.assertEqual(denial.payload.error, "Permission denied")

    def test_store_failure_is_unauthenticated(self) -> None:
        self.store.read_failure_message = "connection reset"
        token = self.issuer.issue_token(self.alice)

        denial = self._assert_denied(self._request(token, self.alice.id), status_code=403, code="UNAUTHENTICATED")

        self.assertNotIn("connection reset", denial.payload.error)

    def test_token_header_name_is_case_insensitive(self) -> None:
        request = AccessRequest(
            headers={"X-JWT-Token": self.issuer.issue_token(self.alice)},
            path_params={"id": str(self.alice.id)},
        )

        self.assertEqual(self.gate.authorize(request, self.downstream), "downstream-result")

    def test_deleted_account_no_longer_authorizes(self) -> None:
        token = self.issuer.issue_token(self.alice)
        self.store.delete_account(self.alice.id)

        self._assert_denied(self._request(token, self.alice.id), status_code=403, code="UNAUTHENTICATED")


if __name__ == "__main__":
    unittest.main()
