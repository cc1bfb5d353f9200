"""Error Hierarchy — verifies codes, HTTP status mapping and the response envelope.

Tests:
    - Each error exposes its code, category and HTTP status
    - to_response() includes details and the call context
    - user_message overrides the internal message in responses
"""

import pytest

from vault.core.errors import (
    AmuletNotEmptyError,
    BeltOverflowError,
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    InsufficientCustodyError,
    InvalidWorldStateError,
    NotOwnerError,
    ResourceNotFoundError,
    ShipAlreadySetError,
    SoulboundAmuletError,
    TooManyShipsError,
    UnlinkedAccountError,
    VaultError,
)


@pytest.mark.parametrize("error,code,status", [
    (UnlinkedAccountError("caller-9"), "UNLINKED_ACCOUNT", 403),
    (InvalidWorldStateError(1, "combat", "open_world"), "INVALID_WORLD_STATE", 409),
    (SoulboundAmuletError(7), "SOULBOUND_AMULET", 400),
    (NotOwnerError("amulet", 7, 1), "NOT_OWNER", 403),
    (BeltOverflowError(1, 4, 3), "BELT_OVERFLOW", 400),
    (TooManyShipsError(2, 0), "TOO_MANY_SHIPS", 400),
    (ShipAlreadySetError(1, 10), "SHIP_ALREADY_SET", 409),
    (AmuletNotEmptyError(7), "AMULET_NOT_EMPTY", 400),
    (InsufficientCustodyError("acc-1", "currency", "runix", 50, 0),
     "INSUFFICIENT_CUSTODY", 400),
    (ResourceNotFoundError("Amulet", "99"), "RESOURCE_NOT_FOUND", 404),
    (DatabaseError("boom", "commit"), "DATABASE_ERROR", 503),
])
def test_error_code_and_status(error, code, status):
    assert isinstance(error, VaultError)
    assert error.code == code
    assert error.http_status == status


def test_insufficient_custody_is_funds_category():
    error = InsufficientCustodyError("acc-1", "currency", "runix", 50, 10)
    assert error.category == ErrorCategory.INSUFFICIENT_FUNDS
    assert error.details["requested"] == 50
    assert error.details["available"] == 10


def test_database_error_is_critical():
    assert DatabaseError("boom", "commit").severity == ErrorSeverity.CRITICAL


def test_to_response_envelope():
    error = SoulboundAmuletError(7)
    error.context.operation = "exchange_amulets"
    body = error.to_response()["error"]
    assert body["code"] == "SOULBOUND_AMULET"
    assert body["category"] == "business_rule"
    assert body["details"] == {"amulet_id": 7}
    assert body["context"]["operation"] == "exchange_amulets"
    assert "timestamp" in body


def test_user_message_overrides_message():
    ctx = ErrorContext(user_message="Try again later")
    error = UnlinkedAccountError("caller-9", context=ctx)
    assert error.to_response()["error"]["message"] == "Try again later"
    assert "caller-9" in str(error)
