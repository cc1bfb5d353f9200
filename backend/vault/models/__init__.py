"""ORM Models — SQLAlchemy declarative models for accounts, characters and their assets.

Invariants:
    - All models inherit from Base (db/base.py)
    - Account is the aggregate root; characters and custody holdings scoped by account_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references and Base.metadata is complete before create_all / autogenerate
"""

from vault.models.account import Account  # noqa: F401
from vault.models.account_link import AccountLink  # noqa: F401
from vault.models.character import Character  # noqa: F401
from vault.models.amulet import Amulet  # noqa: F401
from vault.models.ship import Ship  # noqa: F401
from vault.models.inventory_amulet import InventoryAmulet  # noqa: F401
from vault.models.belt_slot import BeltSlot  # noqa: F401
from vault.models.item_stack import ItemStack  # noqa: F401
from vault.models.currency_balance import CurrencyBalance  # noqa: F401
from vault.models.custody_holding import CustodyHolding  # noqa: F401
from vault.models.exchange_receipt import ExchangeReceipt  # noqa: F401
