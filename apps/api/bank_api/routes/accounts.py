"""Account routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from bank_api.routes.dependencies import get_account_service, require_account_access, require_admin_key
from bank_api.schemas.account import AccountResponse, CreateAccountRequest, DeleteAccountResponse
from bank_api.schemas.error import ErrorResponse, PermissionDeniedError
from bank_api.services.accounts import AccountService

router = APIRouter(prefix="/account", tags=["Accounts"])

_GATED_RESPONSES = {400: {"model": ErrorResponse}, 403: {"model": PermissionDeniedError}}


@router.post(
    "",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_account(
    payload: CreateAccountRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> AccountResponse:
    return service.create_account(
        first_name=payload.first_name,
        last_name=payload.last_name,
        password=payload.password,
    )


@router.get(
    "",
    response_model=list[AccountResponse],
    dependencies=[Depends(require_admin_key)],
    responses={403: {"model": ErrorResponse}},
)
def list_accounts(
    service: Annotated[AccountService, Depends(get_account_service)],
) -> list[AccountResponse]:
    return service.list_accounts()


@router.delete(
    "/delete/{id}",
    response_model=DeleteAccountResponse,
    dependencies=[Depends(require_admin_key)],
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def admin_delete_account(
    account_id: Annotated[int, Path(alias="id")],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> DeleteAccountResponse:
    service.delete_account(account_id=account_id)
    return DeleteAccountResponse(deleted=account_id)


@router.get(
    "/{id}",
    response_model=AccountResponse,
    dependencies=[Depends(require_account_access)],
    responses=_GATED_RESPONSES,
)
def get_account(
    account_id: Annotated[int, Path(alias="id")],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> AccountResponse:
    return service.get_account(account_id=account_id)


@router.delete(
    "/{id}",
    response_model=DeleteAccountResponse,
    dependencies=[Depends(require_account_access)],
    responses=_GATED_RESPONSES,
)
def delete_account(
    account_id: Annotated[int, Path(alias="id")],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> DeleteAccountResponse:
    service.delete_account(account_id=account_id)
    return DeleteAccountResponse(deleted=account_id)
