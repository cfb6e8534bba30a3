"""Demo account seeding."""

import logging

from bank_api.core.logging_safety import safe_log_identifier
from bank_api.schemas.account import AccountResponse
from bank_api.services.accounts import AccountService

logger = logging.getLogger(__name__)

DEMO_FIRST_NAME = "John"
DEMO_LAST_NAME = "Smith"
DEMO_PASSWORD = "johnsmith"
DEMO_ACCOUNT_NUMBER = 70778


def seed_demo_account(service: AccountService) -> AccountResponse:
    """Create the demo account unless an account already holds its number."""
    existing = service.find_by_number(DEMO_ACCOUNT_NUMBER)
    if existing is not None:
        logger.info("seed.skipped account=%s reason=exists", safe_log_identifier(DEMO_ACCOUNT_NUMBER, prefix="acct"))
        return existing

    account = service.create_account(
        first_name=DEMO_FIRST_NAME,
        last_name=DEMO_LAST_NAME,
        password=DEMO_PASSWORD,
        number=DEMO_ACCOUNT_NUMBER,
    )
    logger.info("seed.created account_id=%s", account.id)
    return account


__all__ = ["DEMO_ACCOUNT_NUMBER", "DEMO_PASSWORD", "seed_demo_account"]
