"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from secrets import compare_digest
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader

from bank_api.adapters.auth import TokenIssuer
from bank_api.core.config import Settings
from bank_api.core.logging_safety import safe_log_identifier
from bank_api.domain.accounts import AccountDirectory
from bank_api.errors import AccessDeniedError, ApiError
from bank_api.repositories.base import AccountStore
from bank_api.services.accounts import AccountService
from bank_api.services.auth import LoginService
from bank_api.services.authorization import TOKEN_HEADER, AccessRequest, AuthorizationGate

jwt_token_scheme = APIKeyHeader(
    name=TOKEN_HEADER,
    auto_error=False,
    scheme_name="jwtToken",
)
admin_key_scheme = APIKeyHeader(
    name="X-Admin-Key",
    auto_error=False,
    scheme_name="adminApiKey",
)
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> AccountStore:
    return request.app.state.store


def get_authorization_gate(request: Request) -> AuthorizationGate:
    return request.app.state.authorization_gate


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_account_directory(request: Request) -> AccountDirectory:
    return request.app.state.account_directory


def require_account_access(
    request: Request,
    token: Annotated[str | None, Security(jwt_token_scheme)],
    gate: Annotated[AuthorizationGate, Depends(get_authorization_gate)],
) -> None:
    """Run the authorization gate for the account addressed by the ``{id}`` path parameter."""
    correlation_id = _request_correlation_id(request)
    safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")
    access_request = AccessRequest(
        headers={TOKEN_HEADER: token} if token else {},
        path_params=dict(request.path_params),
    )

    try:
        gate.check(access_request)
    except AccessDeniedError as exc:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
            exc.reason,
        )
        raise

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
    )


async def require_admin_key(
    request: Request,
    admin_key: Annotated[str | None, Security(admin_key_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Validate the administrative API key for account listing and deletion."""
    correlation_id = _request_correlation_id(request)
    safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")
    expected = settings.admin_api_key.get_secret_value() if settings.admin_api_key is not None else ""
    if not expected or admin_key is None or not compare_digest(admin_key.encode("utf-8"), expected.encode("utf-8")):
        logger.warning(
            "admin.rejected correlation_id=%s method=%s path=%s reason=invalid_admin_key",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise ApiError(status_code=403, code="UNAUTHENTICATED", message="Permission denied")


def get_account_service(
    store: Annotated[AccountStore, Depends(get_store)],
    directory: Annotated[AccountDirectory, Depends(get_account_directory)],
) -> AccountService:
    return AccountService(store, directory)


def get_login_service(
    store: Annotated[AccountStore, Depends(get_store)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> LoginService:
    return LoginService(store, issuer)
