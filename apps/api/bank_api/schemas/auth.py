"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TokenClaims(BaseModel):
    """Verified identity claims carried by an access token."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    account_number: int = Field(alias="accountNumber", gt=0)
    expires_at: datetime = Field(alias="exp")


class LoginRequest(BaseModel):
    number: int
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    token: str
    number: int
