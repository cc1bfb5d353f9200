"""Holdings Snapshot — read-only view of what a character and its account hold.

Invariants:
    - Pure dataclasses, no IO: built by services/holdings_query.py from fresh reads
    - Belt ids keep belt order; inventory ids are sorted
    - Balances always list both currencies (missing rows read as 0)
"""

from dataclasses import dataclass, field

from vault.core.domain_types import Currency


@dataclass(frozen=True)
class CharacterHoldings:
    """Everything the exchange coordinator can move for one character."""
    account_id: str
    character_id: int
    world_state: str
    ship_id: int | None
    inventory_amulet_ids: list[int] = field(default_factory=list)
    belt_amulet_ids: list[int] = field(default_factory=list)
    belt_capacity: int = 0
    items: dict[int, int] = field(default_factory=dict)
    balances: dict[Currency, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "account_id": self.account_id,
            "character_id": self.character_id,
            "world_state": self.world_state,
            "ship_id": self.ship_id,
            "inventory_amulet_ids": list(self.inventory_amulet_ids),
            "belt": {
                "amulet_ids": list(self.belt_amulet_ids),
                "capacity": self.belt_capacity,
            },
            "items": [
                {"item_id": item_id, "quantity": quantity}
                for item_id, quantity in sorted(self.items.items())
            ],
            "balances": {
                currency.value: self.balances.get(currency, 0)
                for currency in Currency
            },
        }


@dataclass(frozen=True)
class CustodyLine:
    """One custody ledger row: what the account holds outside vs. escrowed."""
    asset_class: str
    asset_key: str
    wallet: int
    escrowed: int

    def to_dict(self) -> dict:
        return {
            "asset_class": self.asset_class,
            "asset_key": self.asset_key,
            "wallet": self.wallet,
            "escrowed": self.escrowed,
        }
