"""BeltSlot ORM — a filled amulet carried on a character's belt.

Invariants:
    - amulet_id is unique: an amulet sits on at most one belt
    - position orders the belt; new amulets go to the end

Design Decisions:
    - No capacity constraint at the table level: overflow is a call-scoped
      postcondition checked once per exchange, so intermediate rows may exceed it
"""

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from vault.db.base import Base


class BeltSlot(Base):
    """Belt membership row."""
    __tablename__ = "belt_slots"

    character_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True,
    )
    amulet_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("amulets.id", ondelete="CASCADE"),
        primary_key=True, unique=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
