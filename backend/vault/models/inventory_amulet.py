"""InventoryAmulet ORM — membership of an empty amulet in a character's inventory.

Invariants:
    - amulet_id is unique: an amulet sits in at most one inventory
"""

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from vault.db.base import Base


class InventoryAmulet(Base):
    """Inventory membership row."""
    __tablename__ = "inventory_amulets"

    character_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True,
    )
    amulet_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("amulets.id", ondelete="CASCADE"),
        primary_key=True, unique=True,
    )
