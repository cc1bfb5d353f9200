"""Boundary Protocols — contracts between the exchange coordinator and its collaborators.

Invariants:
    - Core NEVER imports from infrastructure, dependency arrows point inward only
    - Every read is a fresh query, every write an immediate call-through (no caching)
    - Failures are raised as VaultError subclasses (core/errors.py), never returned

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: implementations do IO; the coordinator awaits each call in
      a fixed order and never runs two legs concurrently
    - One ledger Protocol with per-class methods: mirrors the gateway's sub-interfaces
      while keeping a single injection point
"""

from typing import Protocol, Sequence

from vault.core.domain_types import (
    AccountId, AmuletId, CallerId, CharacterId, Currency, ItemId, ShipId, WorldState,
)


class SessionGate(Protocol):
    """Resolves who is calling and whether their character may trade."""
    async def resolve_active_account(self, caller: CallerId) -> AccountId: ...
    async def selected_character(self, account: AccountId) -> CharacterId: ...
    async def validate_state(
        self, character_id: CharacterId, required_state: WorldState,
    ) -> None: ...


class CustodialLedger(Protocol):
    """External system of record: escrows assets while they live in-game."""
    async def deposit_amulet(self, account: AccountId, amulet_id: AmuletId) -> None: ...
    async def withdraw_amulet(self, account: AccountId, amulet_id: AmuletId) -> None: ...
    async def deposit_ship(self, account: AccountId, ship_id: ShipId) -> None: ...
    async def withdraw_ship(self, account: AccountId, ship_id: ShipId) -> None: ...
    async def deposit_item(
        self, account: AccountId, item_id: ItemId, quantity: int,
    ) -> None: ...
    async def withdraw_item(
        self, account: AccountId, item_id: ItemId, quantity: int,
    ) -> None: ...
    async def deposit_currency(
        self, account: AccountId, currency: Currency, amount: int,
    ) -> None: ...
    async def withdraw_currency(
        self, account: AccountId, currency: Currency, amount: int,
    ) -> None: ...


class AmuletRegistry(Protocol):
    """Amulet records: ownership plus soulbound/filled flags."""
    async def owner(self, amulet_id: AmuletId) -> CharacterId | None: ...
    async def set_owner(
        self, amulet_id: AmuletId, character_id: CharacterId | None,
    ) -> None: ...
    async def is_soulbound(self, amulet_id: AmuletId) -> bool: ...
    async def is_filled(self, amulet_id: AmuletId) -> bool: ...
    async def validate_owner(
        self, amulet_id: AmuletId, character_id: CharacterId,
    ) -> None: ...
    async def validate_empty(self, amulet_id: AmuletId) -> None: ...
    async def validate_filled(self, amulet_id: AmuletId) -> None: ...


class ShipRegistry(Protocol):
    """Ship records: ownership only."""
    async def owner(self, ship_id: ShipId) -> CharacterId | None: ...
    async def validate_owner(
        self, ship_id: ShipId, character_id: CharacterId,
    ) -> None: ...


class ShipStore(Protocol):
    """A character's single ship slot."""
    async def ship_of(self, character_id: CharacterId) -> ShipId | None: ...
    async def set_slot(self, character_id: CharacterId, ship_id: ShipId) -> None: ...
    async def clear_slot(self, character_id: CharacterId) -> None: ...


class InventoryStore(Protocol):
    """Empty amulets held by a character."""
    async def add(self, character_id: CharacterId, amulet_id: AmuletId) -> None: ...
    async def remove(self, character_id: CharacterId, amulet_id: AmuletId) -> None: ...
    async def amulet_ids(self, character_id: CharacterId) -> Sequence[AmuletId]: ...


class BeltStore(Protocol):
    """Filled amulets carried by a character, bounded by capacity."""
    capacity: int

    async def add(self, character_id: CharacterId, amulet_id: AmuletId) -> None: ...
    async def remove(self, character_id: CharacterId, amulet_id: AmuletId) -> None: ...
    async def amulet_ids(self, character_id: CharacterId) -> Sequence[AmuletId]: ...
    async def is_overflowing(self, character_id: CharacterId) -> bool: ...


class ItemStore(Protocol):
    """Stackable items keyed by (character, item id)."""
    async def add(
        self, character_id: CharacterId, item_id: ItemId, quantity: int,
    ) -> None: ...
    async def deduct(
        self, character_id: CharacterId, item_id: ItemId, quantity: int,
    ) -> None: ...
    async def quantity(self, character_id: CharacterId, item_id: ItemId) -> int: ...


class CurrencyStore(Protocol):
    """Runix / Onyx balances keyed by (character, currency)."""
    async def add(
        self, character_id: CharacterId, currency: Currency, amount: int,
    ) -> None: ...
    async def deduct(
        self, character_id: CharacterId, currency: Currency, amount: int,
    ) -> None: ...
    async def balance(self, character_id: CharacterId, currency: Currency) -> int: ...
