"""Character ORM — a playable character with a world-state tag.

Invariants:
    - Always belongs to an Account (account_id FK)
    - world_state is a WorldState value; only open_world permits exchanges
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vault.core.domain_types import WorldState
from vault.db.base import Base


class Character(Base):
    """Character entity: the holder of inventory, belt, ship slot and balances."""
    __tablename__ = "characters"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    account_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False,
    )
    name: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    world_state: Mapped[str] = mapped_column(
        String(20), nullable=False, default=WorldState.OPEN_WORLD.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    account: Mapped["Account"] = relationship(
        "Account", back_populates="characters",
    )
