"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bank_api.adapters.auth import JwtTokenIssuer, JwtTokenVerifier, SigningKey
from bank_api.core.config import Settings, get_settings
from bank_api.domain.accounts import AccountDirectory
from bank_api.errors import ApiError
from bank_api.repositories.base import AccountStore, StorageError
from bank_api.repositories.memory import InMemoryAccountStore
from bank_api.repositories.sqlite import SqliteAccountStore
from bank_api.routes import accounts_router, auth_router
from bank_api.schemas.error import ErrorResponse
from bank_api.seed import seed_demo_account
from bank_api.services.accounts import AccountService
from bank_api.services.authorization import AuthorizationGate

logger = logging.getLogger(__name__)

_OPENAPI_RESPONSE_CODES: dict[str, dict[str, set[str]]] = {
    "/login": {"post": {"200", "400", "403"}},
    "/account": {"post": {"201", "400", "409"}, "get": {"200", "403"}},
    "/account/{id}": {"get": {"200", "400", "403"}, "delete": {"200", "400", "403"}},
    "/account/delete/{id}": {"delete": {"200", "400", "403", "404"}},
}


def _apply_contract_response_codes(schema: dict) -> None:
    """Limit documented response codes to the ones each route can return."""
    for path, methods in _OPENAPI_RESPONSE_CODES.items():
        path_item = schema.get("paths", {}).get(path)
        if not path_item:
            continue

        for method, allowed_codes in methods.items():
            operation = path_item.get(method)
            if not operation:
                continue

            responses = operation.setdefault("responses", {})
            for status_code in list(responses.keys()):
                if status_code not in allowed_codes:
                    responses.pop(status_code, None)

            for status_code in sorted(allowed_codes):
                responses.setdefault(status_code, {"description": "See API contract"})


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(error=message, code=code)
    return JSONResponse(status_code=status_code, content=payload.model_dump(exclude_none=True))


def build_store(settings: Settings) -> AccountStore:
    if settings.storage_backend == "sqlite":
        return SqliteAccountStore(settings.database_path)
    return InMemoryAccountStore()


def create_app(settings: Settings | None = None, store: AccountStore | None = None) -> FastAPI:
    """Build the API.

    Raises ``ConfigError`` when no signing secret is configured; the service
    refuses to start rather than issue or accept tokens signed with an empty key.
    """
    settings = settings or get_settings()
    signing_key = SigningKey.from_setting(settings.jwt_secret)

    app = FastAPI(title="Bank Accounts API", version="1.0.0")
    app.state.settings = settings
    app.state.store = store if store is not None else build_store(settings)
    app.state.account_directory = AccountDirectory(bcrypt_rounds=settings.bcrypt_rounds)
    app.state.token_issuer = JwtTokenIssuer(signing_key, ttl=timedelta(seconds=settings.token_ttl_seconds))
    app.state.token_verifier = JwtTokenVerifier(signing_key)
    app.state.authorization_gate = AuthorizationGate(app.state.token_verifier, app.state.store)

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(400, "VALIDATION_ERROR", "Invalid request payload")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.error(
            "storage.unhandled method=%s path=%s error=%s",
            request.method,
            request.url.path,
            type(exc).__name__,
        )
        return _error_response(500, "STORAGE_ERROR", "Account storage error")

    app.include_router(auth_router)
    app.include_router(accounts_router)

    def custom_openapi() -> dict:
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        _apply_contract_response_codes(schema)
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi

    if settings.seed_demo_account:
        seed_demo_account(AccountService(app.state.store, app.state.account_directory))

    return app
