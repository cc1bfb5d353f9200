"""Initial schema — accounts, characters, assets, custody and receipts.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("selected_character_id", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "account_links",
        sa.Column("caller", sa.String(128), primary_key=True),
        sa.Column("account_id", sa.String(64), sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("linked_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "characters",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("account_id", sa.String(64), sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(64), nullable=False, server_default=""),
        sa.Column("world_state", sa.String(20), nullable=False, server_default="open_world"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "amulets",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("owner_id", sa.Integer, sa.ForeignKey("characters.id", ondelete="SET NULL"), nullable=True),
        sa.Column("soulbound", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("payload", sa.Integer, nullable=True),
        sa.CheckConstraint("payload IS NULL OR payload <> 0", name="ck_amulets_payload_nonzero"),
    )
    op.create_index("ix_amulets_owner_id", "amulets", ["owner_id"])

    op.create_table(
        "ships",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("owner_id", sa.Integer, sa.ForeignKey("characters.id", ondelete="SET NULL"), nullable=True, unique=True),
    )

    op.create_table(
        "inventory_amulets",
        sa.Column("character_id", sa.Integer, sa.ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("amulet_id", sa.Integer, sa.ForeignKey("amulets.id", ondelete="CASCADE"), primary_key=True, unique=True),
    )

    op.create_table(
        "belt_slots",
        sa.Column("character_id", sa.Integer, sa.ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("amulet_id", sa.Integer, sa.ForeignKey("amulets.id", ondelete="CASCADE"), primary_key=True, unique=True),
        sa.Column("position", sa.Integer, nullable=False),
    )

    op.create_table(
        "item_stacks",
        sa.Column("character_id", sa.Integer, sa.ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("item_id", sa.Integer, primary_key=True),
        sa.Column("quantity", sa.BigInteger, nullable=False, server_default="0"),
        sa.CheckConstraint("quantity >= 0", name="ck_item_stacks_quantity"),
    )

    op.create_table(
        "currency_balances",
        sa.Column("character_id", sa.Integer, sa.ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("currency", sa.String(10), primary_key=True),
        sa.Column("amount", sa.BigInteger, nullable=False, server_default="0"),
        sa.CheckConstraint("amount >= 0", name="ck_currency_balances_amount"),
    )

    op.create_table(
        "custody_holdings",
        sa.Column("account_id", sa.String(64), sa.ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("asset_class", sa.String(20), primary_key=True),
        sa.Column("asset_key", sa.String(64), primary_key=True),
        sa.Column("wallet", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("escrowed", sa.BigInteger, nullable=False, server_default="0"),
        sa.CheckConstraint("wallet >= 0", name="ck_custody_holdings_wallet"),
        sa.CheckConstraint("escrowed >= 0", name="ck_custody_holdings_escrowed"),
    )

    op.create_table(
        "exchange_receipts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("account_id", sa.String(64), nullable=False),
        sa.Column("character_id", sa.Integer, nullable=False),
        sa.Column("operation", sa.String(40), nullable=False),
        sa.Column("request", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_exchange_receipts_account_id", "exchange_receipts", ["account_id"])


def downgrade() -> None:
    op.drop_index("ix_exchange_receipts_account_id", table_name="exchange_receipts")
    op.drop_table("exchange_receipts")
    op.drop_table("custody_holdings")
    op.drop_table("currency_balances")
    op.drop_table("item_stacks")
    op.drop_table("belt_slots")
    op.drop_table("inventory_amulets")
    op.drop_table("ships")
    op.drop_index("ix_amulets_owner_id", table_name="amulets")
    op.drop_table("amulets")
    op.drop_table("characters")
    op.drop_table("account_links")
    op.drop_table("accounts")
