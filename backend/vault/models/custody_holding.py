"""CustodyHolding ORM — what the custodial ledger holds for an account.

Invariants:
    - Keyed by (account_id, asset_class, asset_key)
    - wallet: units the account holds outside the game
    - escrowed: units locked by the ledger while they live in-game
    - Both quantities non-negative; deposit moves wallet -> escrowed, withdraw the reverse

Design Decisions:
    - Stored in the exchange database so the host transaction covers ledger legs:
      an aborted exchange rolls custody back with everything else
    - asset_key is a string: amulet/ship/item ids and currency codes share one column
"""

from sqlalchemy import String, BigInteger, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vault.db.base import Base


class CustodyHolding(Base):
    """Custody ledger row."""
    __tablename__ = "custody_holdings"
    __table_args__ = (
        CheckConstraint("wallet >= 0", name="ck_custody_holdings_wallet"),
        CheckConstraint("escrowed >= 0", name="ck_custody_holdings_escrowed"),
    )

    account_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True,
    )
    asset_class: Mapped[str] = mapped_column(String(20), primary_key=True)
    asset_key: Mapped[str] = mapped_column(String(64), primary_key=True)
    wallet: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    escrowed: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
