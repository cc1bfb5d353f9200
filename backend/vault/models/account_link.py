"""AccountLink ORM — maps a caller identity to the account it acts for.

Invariants:
    - caller is the primary key: one link per caller
    - Only active links resolve; an inactive link behaves like no link at all
"""

from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from vault.db.base import Base


class AccountLink(Base):
    """Caller -> account link."""
    __tablename__ = "account_links"

    caller: Mapped[str] = mapped_column(String(128), primary_key=True)
    account_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False,
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    linked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
