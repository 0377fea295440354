"""incomes, expenses, debts (+ amount history), assets

Revision ID: 0002_finance_tables
Revises: 0001_init
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_finance_tables"
down_revision = "0001_init"
branch_labels = None
depends_on = None


def _owner():
    return sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)


def _created():
    return sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True)


def upgrade():
    op.create_table(
        "incomes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _owner(),
        sa.Column("title", sa.String(length=128), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("category", sa.String(length=64), nullable=False, server_default="other"),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="expected"),
        sa.Column("date", sa.Date(), nullable=False),
        _created(),
    )
    op.create_index("ix_incomes_user_id", "incomes", ["user_id"])
    op.create_index("ix_incomes_date", "incomes", ["date"])

    op.create_table(
        "expenses",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _owner(),
        sa.Column("title", sa.String(length=128), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=False, server_default="other"),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("type", sa.String(length=16), nullable=False, server_default="variable"),
        _created(),
    )
    op.create_index("ix_expenses_user_id", "expenses", ["user_id"])
    op.create_index("ix_expenses_date", "expenses", ["date"])

    op.create_table(
        "debts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _owner(),
        sa.Column("title", sa.String(length=128), nullable=False),
        sa.Column("creditor", sa.String(length=128), nullable=False, server_default=""),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("type", sa.String(length=16), nullable=False, server_default="short"),
        sa.Column("date", sa.Date(), nullable=False),
        _created(),
    )
    op.create_index("ix_debts_user_id", "debts", ["user_id"])
    op.create_index("ix_debts_due_date", "debts", ["due_date"])
    op.create_index("ix_debts_date", "debts", ["date"])

    op.create_table(
        "debt_amount_history",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("debt_id", sa.Uuid(), sa.ForeignKey("debts.id", ondelete="CASCADE"), nullable=False),
        _owner(),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("note", sa.String(length=256), nullable=True),
        sa.Column("logged_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_debt_amount_history_debt_id", "debt_amount_history", ["debt_id"])
    op.create_index("ix_debt_amount_history_user_id", "debt_amount_history", ["user_id"])
    op.create_index("ix_debt_amount_history_logged_at", "debt_amount_history", ["logged_at"])

    op.create_table(
        "assets",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _owner(),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("quantity", sa.Numeric(18, 6), nullable=False),
        sa.Column("unit", sa.String(length=16), nullable=False),
        sa.Column("price_per_unit", sa.Numeric(18, 4), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("auto_update", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("date", sa.Date(), nullable=False),
        _created(),
    )
    op.create_index("ix_assets_user_id", "assets", ["user_id"])
    op.create_index("ix_assets_type", "assets", ["type"])
    op.create_index("ix_assets_date", "assets", ["date"])


def downgrade():
    for table in ("assets", "debt_amount_history", "debts", "expenses", "incomes"):
        op.drop_table(table)
