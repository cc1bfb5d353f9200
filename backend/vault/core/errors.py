"""Error Hierarchy — typed, categorized exceptions for every exchange failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries its parameters in `details` (offending character, asset id, ...)
    - All errors abort the whole exchange, none is recoverable inside the call
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with VaultError base: FastAPI global handler catches all (uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Store/ledger failures live here too: the coordinator never needs to translate errors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: str | None = None
    character_id: int | None = None
    operation: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class VaultError(Exception):
    """Base exception for all exchange errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details or {}

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": self.details,
                "context": {
                    "account_id": self.context.account_id,
                    "character_id": self.context.character_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Preamble Errors ─────────────────────────────────────────────

class UnlinkedAccountError(VaultError):
    """Caller has no active linked account, or the account has no character selected."""
    def __init__(self, caller: str, reason: str = "no active account link",
                 context: ErrorContext | None = None):
        super().__init__(
            f"Caller '{caller}' is not linked to a playable account: {reason}",
            "UNLINKED_ACCOUNT", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 403,
            {"caller": caller, "reason": reason},
        )
        self.caller = caller


class InvalidWorldStateError(VaultError):
    """Character is not in the state that permits exchanges."""
    def __init__(self, character_id: int, state: str, required: str,
                 context: ErrorContext | None = None):
        super().__init__(
            f"Character {character_id} is in state '{state}'; exchanges require '{required}'",
            "INVALID_WORLD_STATE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
            {"character_id": character_id, "state": state, "required": required},
        )
        self.character_id = character_id


# ─── Exchange Rule Errors ────────────────────────────────────────

class SoulboundAmuletError(VaultError):
    """Soulbound amulets never leave their character."""
    def __init__(self, amulet_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Amulet {amulet_id} is soulbound and cannot be withdrawn",
            "SOULBOUND_AMULET", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
            {"amulet_id": amulet_id},
        )
        self.amulet_id = amulet_id


class NotOwnerError(VaultError):
    """Caller's character does not own the asset being withdrawn."""
    def __init__(self, asset_type: str, asset_id: int, character_id: int,
                 context: ErrorContext | None = None):
        super().__init__(
            f"Character {character_id} does not own {asset_type} {asset_id}",
            "NOT_OWNER", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 403,
            {"asset_type": asset_type, "asset_id": asset_id, "character_id": character_id},
        )
        self.asset_id = asset_id
        self.character_id = character_id


class BeltOverflowError(VaultError):
    """Belt holds more filled amulets than its capacity after the exchange."""
    def __init__(self, character_id: int, size: int, capacity: int,
                 context: ErrorContext | None = None):
        super().__init__(
            f"Belt of character {character_id} overflows ({size}/{capacity})",
            "BELT_OVERFLOW", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
            {"character_id": character_id, "size": size, "capacity": capacity},
        )
        self.character_id = character_id


class BeltEmptyError(VaultError):
    """Belt would be left without any filled amulet."""
    def __init__(self, character_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Belt of character {character_id} cannot be left empty",
            "BELT_EMPTY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
            {"character_id": character_id},
        )
        self.character_id = character_id


class TooManyShipsError(VaultError):
    """More than one ship in a deposit or withdrawal sequence."""
    def __init__(self, deposit_count: int, withdrawal_count: int,
                 context: ErrorContext | None = None):
        super().__init__(
            f"At most one ship per direction (deposits={deposit_count}, "
            f"withdrawals={withdrawal_count})",
            "TOO_MANY_SHIPS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            {"deposit_count": deposit_count, "withdrawal_count": withdrawal_count},
        )
        self.deposit_count = deposit_count
        self.withdrawal_count = withdrawal_count


class ShipAlreadySetError(VaultError):
    """Ship slot is occupied: a character owns at most one ship."""
    def __init__(self, character_id: int, current_ship_id: int,
                 context: ErrorContext | None = None):
        super().__init__(
            f"Character {character_id} already has ship {current_ship_id}",
            "SHIP_ALREADY_SET", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
            {"character_id": character_id, "current_ship_id": current_ship_id},
        )


class MismatchedQuantitiesError(VaultError):
    """Item ids and quantities must pair up one-to-one."""
    def __init__(self, ids_count: int, quantities_count: int,
                 context: ErrorContext | None = None):
        super().__init__(
            f"{ids_count} item id(s) but {quantities_count} quantity value(s)",
            "MISMATCHED_QUANTITIES", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            {"ids_count": ids_count, "quantities_count": quantities_count},
        )


class InvalidQuantityError(VaultError):
    """Quantity or amount is negative."""
    def __init__(self, field_name: str, value: int, context: ErrorContext | None = None):
        super().__init__(
            f"{field_name} must be non-negative, got {value}",
            "INVALID_QUANTITY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            {"field": field_name, "value": value},
        )


# ─── Store / Ledger Errors ───────────────────────────────────────

class AmuletNotEmptyError(VaultError):
    """Filled amulet routed through the inventory channel."""
    def __init__(self, amulet_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Amulet {amulet_id} carries a payload; use the belt exchange",
            "AMULET_NOT_EMPTY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
            {"amulet_id": amulet_id},
        )


class AmuletNotFilledError(VaultError):
    """Empty amulet routed through the belt channel."""
    def __init__(self, amulet_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Amulet {amulet_id} carries no payload; use the amulet exchange",
            "AMULET_NOT_FILLED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
            {"amulet_id": amulet_id},
        )


class AssetNotHeldError(VaultError):
    """Amulet is not in the container it is being removed from."""
    def __init__(self, character_id: int, container: str, amulet_id: int,
                 context: ErrorContext | None = None):
        super().__init__(
            f"Amulet {amulet_id} is not in the {container} of character {character_id}",
            "ASSET_NOT_HELD", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
            {"character_id": character_id, "container": container, "amulet_id": amulet_id},
        )


class InsufficientCustodyError(VaultError):
    """Ledger withdraw: escrow holds less than requested."""
    def __init__(self, account_id: str, asset_class: str, asset_key: str,
                 requested: int, available: int, context: ErrorContext | None = None):
        super().__init__(
            f"Custody of {asset_class} '{asset_key}' for account {account_id} "
            f"is {available}, {requested} requested",
            "INSUFFICIENT_CUSTODY", ErrorCategory.INSUFFICIENT_FUNDS,
            ErrorSeverity.ERROR, context, 400,
            {"account_id": account_id, "asset_class": asset_class, "asset_key": asset_key,
             "requested": requested, "available": available},
        )


class InsufficientWalletError(VaultError):
    """Ledger deposit: account wallet holds less than requested."""
    def __init__(self, account_id: str, asset_class: str, asset_key: str,
                 requested: int, available: int, context: ErrorContext | None = None):
        super().__init__(
            f"Wallet of account {account_id} holds {available} of {asset_class} "
            f"'{asset_key}', {requested} requested",
            "INSUFFICIENT_WALLET", ErrorCategory.INSUFFICIENT_FUNDS,
            ErrorSeverity.ERROR, context, 400,
            {"account_id": account_id, "asset_class": asset_class, "asset_key": asset_key,
             "requested": requested, "available": available},
        )


class InsufficientBalanceError(VaultError):
    """Currency deduct below zero."""
    def __init__(self, character_id: int, currency: str, requested: int, available: int,
                 context: ErrorContext | None = None):
        super().__init__(
            f"Character {character_id} has {available} {currency}, {requested} requested",
            "INSUFFICIENT_BALANCE", ErrorCategory.INSUFFICIENT_FUNDS,
            ErrorSeverity.ERROR, context, 400,
            {"character_id": character_id, "currency": currency,
             "requested": requested, "available": available},
        )


class InsufficientItemsError(VaultError):
    """Item stack deduct below zero."""
    def __init__(self, character_id: int, item_id: int, requested: int, available: int,
                 context: ErrorContext | None = None):
        super().__init__(
            f"Character {character_id} has {available} of item {item_id}, {requested} requested",
            "INSUFFICIENT_ITEMS", ErrorCategory.INSUFFICIENT_FUNDS,
            ErrorSeverity.ERROR, context, 400,
            {"character_id": character_id, "item_id": item_id,
             "requested": requested, "available": available},
        )


class ResourceNotFoundError(VaultError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
            {"resource_type": resource_type, "resource_id": resource_id},
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(VaultError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
