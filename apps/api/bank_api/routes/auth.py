"""Login routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from bank_api.routes.dependencies import get_login_service
from bank_api.schemas.auth import LoginRequest, LoginResponse
from bank_api.schemas.error import ErrorResponse
from bank_api.services.auth import LoginService

router = APIRouter(tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
def login(
    payload: LoginRequest,
    service: Annotated[LoginService, Depends(get_login_service)],
) -> LoginResponse:
    return service.login(number=payload.number, password=payload.password)
