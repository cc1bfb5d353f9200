"""Ship ORM — a ship that occupies a character's single ship slot.

Invariants:
    - owner_id is unique: a character owns at most one ship, a ship has at most one owner
    - A character's ship slot IS the ship whose owner_id is that character
"""

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from vault.db.base import Base


class Ship(Base):
    """Ship entity."""
    __tablename__ = "ships"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    owner_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("characters.id", ondelete="SET NULL"),
        nullable=True, unique=True,
    )
