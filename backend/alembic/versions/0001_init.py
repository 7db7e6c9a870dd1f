from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.String(length=64), nullable=False),
        sa.Column("date_iso", sa.Date(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("description", sa.String(length=256), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
    )
    op.create_index("ix_transactions_date_iso", "transactions", ["date_iso"], unique=False)
    op.create_index("ix_transactions_created_at", "transactions", ["created_at"], unique=False)

def downgrade():
    op.drop_index("ix_transactions_created_at", table_name="transactions")
    op.drop_index("ix_transactions_date_iso", table_name="transactions")
    op.drop_table("transactions")
