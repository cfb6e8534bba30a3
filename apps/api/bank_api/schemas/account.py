"""Account API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from bank_api.domain.accounts import Account


class CreateAccountRequest(BaseModel):
    first_name: str
    last_name: str
    password: str = Field(min_length=1)


class AccountResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    number: int
    balance: int
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            first_name=account.first_name,
            last_name=account.last_name,
            number=account.number,
            balance=account.balance,
            created_at=account.created_at,
        )


class DeleteAccountResponse(BaseModel):
    deleted: int
