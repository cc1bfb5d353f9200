"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CharacterId, AmuletId, ShipId, ItemId wrap ints, never use bare int in exchange logic
    - AccountId and CallerId wrap str (opaque identities from the session layer)
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and DB columns without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CallerId = NewType("CallerId", str)
AccountId = NewType("AccountId", str)
CharacterId = NewType("CharacterId", int)
AmuletId = NewType("AmuletId", int)
ShipId = NewType("ShipId", int)
ItemId = NewType("ItemId", int)


# ─── Enums ───────────────────────────────────────────────────────

class Currency(str, Enum):
    """The two fungible currencies a character can hold."""
    RUNIX = "runix"
    ONYX = "onyx"


class WorldState(str, Enum):
    """Coarse operability tag on a character: only OPEN_WORLD permits exchanges."""
    OPEN_WORLD = "open_world"
    COMBAT = "combat"
    DUNGEON = "dungeon"
    TRAVELING = "traveling"


class AssetClass(str, Enum):
    """Custody ledger sub-interfaces: one per asset class."""
    AMULET = "amulet"
    SHIP = "ship"
    ITEM = "item"
    CURRENCY = "currency"


class ExchangeOperation(str, Enum):
    """Coordinator entry points: used for dispatch, receipts and logs."""
    AMULETS = "exchange_amulets"
    FILLED_AMULETS = "exchange_filled_amulets"
    CURRENCIES = "exchange_currencies"
    ITEMS = "exchange_items"
    SHIPS = "exchange_ships"


class AmuletContainer(str, Enum):
    """Where a character keeps an amulet: empty ones in inventory, filled on the belt."""
    INVENTORY = "inventory"
    BELT = "belt"
