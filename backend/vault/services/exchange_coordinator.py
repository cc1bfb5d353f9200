"""Exchange Coordinator — moves assets between the custodial ledger and character records.

Invariants:
    - The preamble (account -> character -> world state) runs exactly once per call,
      before any mutation
    - Withdrawals are processed before deposits, except currencies (deposits first)
    - Within a direction, caller order is preserved and each leg completes fully
      (ledger call, then registry/store) before the next starts
    - Every failure propagates unchanged; rollback is the unit of work's job
      (services/exchange_runner.py), never compensated here

Design Decisions:
    - Collaborators injected as Protocols (core/repository_protocols.py): the coordinator
      is testable with recording fakes and never touches SQLAlchemy
    - Inventory and belt share one amulet leg, parameterized by AmuletContainer: the
      two channels differ only in the payload guard and the target store
    - Pure checks delegated to core/enforce_exchange.py
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from vault.core.domain_types import (
    AccountId, AmuletContainer, AmuletId, CallerId, CharacterId, Currency,
    ItemId, ShipId, WorldState,
)
from vault.core.enforce_exchange import (
    check_belt_bounds,
    check_non_negative,
    check_not_soulbound,
    check_paired_quantities,
    check_ship_counts,
)
from vault.core.repository_protocols import (
    AmuletRegistry, BeltStore, CurrencyStore, CustodialLedger, InventoryStore,
    ItemStore, SessionGate, ShipRegistry, ShipStore,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExchangeContext:
    """Who the exchange ran for: resolved once by the preamble."""
    account_id: AccountId
    character_id: CharacterId


class ExchangeCoordinator:
    """One entry point per asset class. Stateless between calls."""

    def __init__(
        self,
        *,
        gate: SessionGate,
        ledger: CustodialLedger,
        amulets: AmuletRegistry,
        ships: ShipRegistry,
        ship_slots: ShipStore,
        inventory: InventoryStore,
        belt: BeltStore,
        items: ItemStore,
        currencies: CurrencyStore,
        open_state: WorldState = WorldState.OPEN_WORLD,
    ):
        self.gate = gate
        self.ledger = ledger
        self.amulets = amulets
        self.ships = ships
        self.ship_slots = ship_slots
        self.inventory = inventory
        self.belt = belt
        self.items = items
        self.currencies = currencies
        self.open_state = open_state

    async def _preamble(self, caller: CallerId) -> ExchangeContext:
        account_id = await self.gate.resolve_active_account(caller)
        character_id = await self.gate.selected_character(account_id)
        await self.gate.validate_state(character_id, self.open_state)
        return ExchangeContext(account_id, character_id)

    # ─── Amulets (inventory) ─────────────────────────────────────

    async def exchange_amulets(
        self,
        caller: CallerId,
        deposit_ids: Sequence[AmuletId],
        withdrawal_ids: Sequence[AmuletId],
    ) -> ExchangeContext:
        """Move empty amulets between custody and the character's inventory."""
        ctx = await self._preamble(caller)
        for amulet_id in withdrawal_ids:
            await self._withdraw_amulet(ctx, amulet_id, AmuletContainer.INVENTORY)
        for amulet_id in deposit_ids:
            await self._deposit_amulet(ctx, amulet_id, AmuletContainer.INVENTORY)
        return ctx

    # ─── Filled amulets (belt) ───────────────────────────────────

    async def exchange_filled_amulets(
        self,
        caller: CallerId,
        deposit_ids: Sequence[AmuletId],
        withdrawal_ids: Sequence[AmuletId],
    ) -> ExchangeContext:
        """Move filled amulets between custody and the belt.

        The belt bounds are a call-scoped postcondition: intermediate states may
        be empty or over capacity, the committed state may not.
        """
        ctx = await self._preamble(caller)
        for amulet_id in withdrawal_ids:
            await self._withdraw_amulet(ctx, amulet_id, AmuletContainer.BELT)
        for amulet_id in deposit_ids:
            await self._deposit_amulet(ctx, amulet_id, AmuletContainer.BELT)

        check_belt_bounds(
            ctx.character_id,
            await self.belt.amulet_ids(ctx.character_id),
            await self.belt.is_overflowing(ctx.character_id),
            self.belt.capacity,
        )
        return ctx

    async def _withdraw_amulet(
        self, ctx: ExchangeContext, amulet_id: AmuletId, container: AmuletContainer,
    ) -> None:
        check_not_soulbound(amulet_id, await self.amulets.is_soulbound(amulet_id))
        await self.amulets.validate_owner(amulet_id, ctx.character_id)
        await self.ledger.withdraw_amulet(ctx.account_id, amulet_id)
        if container is AmuletContainer.BELT:
            await self.amulets.validate_filled(amulet_id)
            await self.belt.remove(ctx.character_id, amulet_id)
        else:
            await self.amulets.validate_empty(amulet_id)
            await self.inventory.remove(ctx.character_id, amulet_id)
        await self.amulets.set_owner(amulet_id, None)
        logger.debug(
            f"Withdrew amulet {amulet_id} from {container.value}",
            extra={"character_id": ctx.character_id},
        )

    async def _deposit_amulet(
        self, ctx: ExchangeContext, amulet_id: AmuletId, container: AmuletContainer,
    ) -> None:
        await self.ledger.deposit_amulet(ctx.account_id, amulet_id)
        await self.amulets.set_owner(amulet_id, ctx.character_id)
        if container is AmuletContainer.BELT:
            await self.amulets.validate_filled(amulet_id)
            await self.belt.add(ctx.character_id, amulet_id)
        else:
            await self.amulets.validate_empty(amulet_id)
            await self.inventory.add(ctx.character_id, amulet_id)
        logger.debug(
            f"Deposited amulet {amulet_id} into {container.value}",
            extra={"character_id": ctx.character_id},
        )

    # ─── Currencies ──────────────────────────────────────────────

    async def exchange_currencies(
        self,
        caller: CallerId,
        deposit_runix: int = 0,
        withdraw_runix: int = 0,
        deposit_onyx: int = 0,
        withdraw_onyx: int = 0,
    ) -> ExchangeContext:
        """Deposits before withdrawals, in fixed Runix/Onyx order. Zero legs are skipped."""
        ctx = await self._preamble(caller)
        check_non_negative("deposit_runix", deposit_runix)
        check_non_negative("withdraw_runix", withdraw_runix)
        check_non_negative("deposit_onyx", deposit_onyx)
        check_non_negative("withdraw_onyx", withdraw_onyx)

        if deposit_runix:
            await self._deposit_currency(ctx, Currency.RUNIX, deposit_runix)
        if deposit_onyx:
            await self._deposit_currency(ctx, Currency.ONYX, deposit_onyx)
        if withdraw_runix:
            await self._withdraw_currency(ctx, Currency.RUNIX, withdraw_runix)
        if withdraw_onyx:
            await self._withdraw_currency(ctx, Currency.ONYX, withdraw_onyx)
        return ctx

    async def _deposit_currency(
        self, ctx: ExchangeContext, currency: Currency, amount: int,
    ) -> None:
        await self.ledger.deposit_currency(ctx.account_id, currency, amount)
        await self.currencies.add(ctx.character_id, currency, amount)

    async def _withdraw_currency(
        self, ctx: ExchangeContext, currency: Currency, amount: int,
    ) -> None:
        await self.ledger.withdraw_currency(ctx.account_id, currency, amount)
        await self.currencies.deduct(ctx.character_id, currency, amount)

    # ─── Items ───────────────────────────────────────────────────

    async def exchange_items(
        self,
        caller: CallerId,
        deposit_ids: Sequence[ItemId],
        deposit_quantities: Sequence[int],
        withdrawal_ids: Sequence[ItemId],
        withdrawal_quantities: Sequence[int],
    ) -> ExchangeContext:
        """Parallel id/quantity sequences; withdrawals before deposits."""
        ctx = await self._preamble(caller)
        check_paired_quantities(deposit_ids, deposit_quantities, "deposit_quantities")
        check_paired_quantities(
            withdrawal_ids, withdrawal_quantities, "withdrawal_quantities",
        )

        for item_id, quantity in zip(withdrawal_ids, withdrawal_quantities):
            await self.ledger.withdraw_item(ctx.account_id, item_id, quantity)
            await self.items.deduct(ctx.character_id, item_id, quantity)
        for item_id, quantity in zip(deposit_ids, deposit_quantities):
            await self.ledger.deposit_item(ctx.account_id, item_id, quantity)
            await self.items.add(ctx.character_id, item_id, quantity)
        return ctx

    # ─── Ships ───────────────────────────────────────────────────

    async def exchange_ships(
        self,
        caller: CallerId,
        deposit_ids: Sequence[ShipId],
        withdrawal_ids: Sequence[ShipId],
    ) -> ExchangeContext:
        """At most one ship per direction. Withdrawal first, so a swap never
        leaves two ships in the slot."""
        ctx = await self._preamble(caller)
        check_ship_counts(deposit_ids, withdrawal_ids)

        if withdrawal_ids:
            ship_id = withdrawal_ids[0]
            await self.ships.validate_owner(ship_id, ctx.character_id)
            await self.ship_slots.clear_slot(ctx.character_id)
            await self.ledger.withdraw_ship(ctx.account_id, ship_id)
        if deposit_ids:
            ship_id = deposit_ids[0]
            await self.ledger.deposit_ship(ctx.account_id, ship_id)
            await self.ship_slots.set_slot(ctx.character_id, ship_id)
        return ctx
