"""Account ORM — the opaque identity that owns characters and custody holdings.

Invariants:
    - id is an opaque string assigned by the linking layer (never generated here)
    - selected_character_id is the character exchanges act on (nullable until chosen)

Design Decisions:
    - selected_character_id is not a FK: characters reference accounts, and a cycle
      would force deferred constraints for no gain
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vault.db.base import Base


class Account(Base):
    """Account aggregate root: owns characters and custody holdings."""
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    selected_character_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    characters: Mapped[list["Character"]] = relationship(
        "Character", back_populates="account",
        cascade="all, delete-orphan", lazy="selectin",
    )
