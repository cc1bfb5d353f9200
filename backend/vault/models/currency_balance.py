"""CurrencyBalance ORM — Runix / Onyx balance of one character.

Invariants:
    - Keyed by (character_id, currency)
    - amount >= 0 at every committed state
"""

from sqlalchemy import String, Integer, BigInteger, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vault.db.base import Base


class CurrencyBalance(Base):
    """Currency balance row."""
    __tablename__ = "currency_balances"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_currency_balances_amount"),
    )

    character_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True,
    )
    currency: Mapped[str] = mapped_column(String(10), primary_key=True)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
