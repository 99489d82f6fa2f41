"""order_bridge_schema

Revision ID: 4f2a8c1d7e90
Revises: 
Create Date: 2025-11-20 10:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4f2a8c1d7e90'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "mailboxes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=True),
        # per-mailbox Shopify credentials as a JSON blob
        sa.Column("shopify", sa.Text(), nullable=True),
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.Text(), nullable=True),
        sa.Column("last_name", sa.Text(), nullable=True),
        sa.Column("shopify_customer_id", sa.Text(), nullable=True),
    )
    op.create_index("ix_customers_shopify_customer_id", "customers", ["shopify_customer_id"])

    op.create_table(
        "emails",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("email", name="uq_emails_email"),
    )
    op.create_index("ix_emails_customer_id", "emails", ["customer_id"])


def downgrade() -> None:
    op.drop_index("ix_emails_customer_id", table_name="emails")
    op.drop_table("emails")
    op.drop_index("ix_customers_shopify_customer_id", table_name="customers")
    op.drop_table("customers")
    op.drop_table("mailboxes")
