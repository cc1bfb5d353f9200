"""Exchange Schemas — Pydantic models with field-level validation for exchange requests.

Invariants:
    - Id sequences hold at most MAX_EXCHANGE_IDS entries
    - Ids are positive and fit the 32-bit id columns (MAX_ID)
    - Item quantities are positive and pair one-to-one with item ids
    - Quantities and currency amounts fit the 64-bit count columns (MAX_AMOUNT);
      currency amounts may be zero (zero skips that leg)
    - Ship sequences are NOT capped at one here: TooManyShips is a domain error with
      its own code and parameters, raised by the coordinator

Design Decisions:
    - Column bounds enforced at the boundary: an out-of-range number is a 400, never
      a driver overflow inside the unit of work
    - Caller order inside each sequence is preserved (lists, never sets)
    - model_validator for cross-field pairing: rejected with a 400 before a
      transaction is opened
"""

from typing import Annotated

from pydantic import BaseModel, Field, model_validator

MAX_EXCHANGE_IDS = 64
MAX_ID = 2**31 - 1
MAX_AMOUNT = 2**63 - 1

AssetId = Annotated[int, Field(gt=0, le=MAX_ID)]
ItemQuantity = Annotated[int, Field(gt=0, le=MAX_AMOUNT)]
IdList = Annotated[list[AssetId], Field(max_length=MAX_EXCHANGE_IDS)]


class AmuletExchangeRequest(BaseModel):
    """Empty amulets (inventory) or filled amulets (belt)."""
    deposit_ids: IdList = Field(default_factory=list)
    withdrawal_ids: IdList = Field(default_factory=list)


class CurrencyExchangeRequest(BaseModel):
    """Runix / Onyx amounts; all default to zero."""
    deposit_runix: int = Field(0, ge=0, le=MAX_AMOUNT)
    withdraw_runix: int = Field(0, ge=0, le=MAX_AMOUNT)
    deposit_onyx: int = Field(0, ge=0, le=MAX_AMOUNT)
    withdraw_onyx: int = Field(0, ge=0, le=MAX_AMOUNT)


class ItemExchangeRequest(BaseModel):
    """Parallel id/quantity sequences: ids[i] pairs with quantities[i]."""
    deposit_ids: IdList = Field(default_factory=list)
    deposit_quantities: list[ItemQuantity] = Field(
        default_factory=list, max_length=MAX_EXCHANGE_IDS,
    )
    withdrawal_ids: IdList = Field(default_factory=list)
    withdrawal_quantities: list[ItemQuantity] = Field(
        default_factory=list, max_length=MAX_EXCHANGE_IDS,
    )

    @model_validator(mode="after")
    def quantities_pair_with_ids(self) -> "ItemExchangeRequest":
        if len(self.deposit_ids) != len(self.deposit_quantities):
            raise ValueError("deposit_ids and deposit_quantities differ in length")
        if len(self.withdrawal_ids) != len(self.withdrawal_quantities):
            raise ValueError(
                "withdrawal_ids and withdrawal_quantities differ in length",
            )
        return self


class ShipExchangeRequest(BaseModel):
    """At most one ship per direction, enforced by the coordinator, not here."""
    deposit_ids: IdList = Field(default_factory=list)
    withdrawal_ids: IdList = Field(default_factory=list)


class ExchangeResponse(BaseModel):
    """Committed exchange: the receipt id identifies it in the audit table."""
    status: str = "ok"
    receipt_id: str
    operation: str
    account_id: str
    character_id: int
