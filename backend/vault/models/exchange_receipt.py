"""ExchangeReceipt ORM — log of committed exchanges.

Invariants:
    - Written inside the exchange's unit of work: aborted exchanges leave no receipt
    - request stores the validated request body as submitted

Design Decisions:
    - Logging table, not enforcement: no exchange rule reads it
    - JSON column for request: one table for all five operations
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from vault.db.base import Base


class ExchangeReceipt(Base):
    """Receipt for one committed exchange."""
    __tablename__ = "exchange_receipts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    account_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    character_id: Mapped[int] = mapped_column(Integer, nullable=False)
    operation: Mapped[str] = mapped_column(String(40), nullable=False)
    request: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
