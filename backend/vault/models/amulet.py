"""Amulet ORM — a transferable amulet, empty or filled with a payload.

Invariants:
    - owner_id is exclusive: at most one character owns an amulet
    - payload is NULL (empty amulet) or a non-zero marker (filled amulet)
    - soulbound amulets never leave their owner through an exchange
"""

from sqlalchemy import Integer, Boolean, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vault.db.base import Base


class Amulet(Base):
    """Amulet entity: routed through inventory when empty, belt when filled."""
    __tablename__ = "amulets"
    __table_args__ = (
        CheckConstraint(
            "payload IS NULL OR payload <> 0", name="ck_amulets_payload_nonzero",
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    owner_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("characters.id", ondelete="SET NULL"),
        nullable=True, index=True,
    )
    soulbound: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    payload: Mapped[int | None] = mapped_column(Integer, nullable=True)

    @property
    def is_filled(self) -> bool:
        return self.payload is not None
