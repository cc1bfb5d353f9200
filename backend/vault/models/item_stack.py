"""ItemStack ORM — quantity of one item held by one character.

Invariants:
    - Keyed by (character_id, item_id)
    - quantity >= 0 (a deduct below zero fails before reaching the table)
"""

from sqlalchemy import Integer, BigInteger, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vault.db.base import Base


class ItemStack(Base):
    """Item stack row."""
    __tablename__ = "item_stacks"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_item_stacks_quantity"),
    )

    character_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True,
    )
    item_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
