"""Create users, transactions, merch and purchases tables

Revision ID: 3b9d6c1f0a42
Revises:
Create Date: 2025-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b9d6c1f0a42'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MERCH = [
    {"name": "t-shirt", "price": 80},
    {"name": "cup", "price": 20},
    {"name": "book", "price": 50},
    {"name": "pen", "price": 10},
    {"name": "powerbank", "price": 200},
    {"name": "hoody", "price": 300},
    {"name": "umbrella", "price": 200},
    {"name": "socks", "price": 10},
    {"name": "wallet", "price": 50},
    {"name": "pink-hoody", "price": 500},
]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('users',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('username', sa.String(), nullable=False),
    sa.Column('password', sa.String(), nullable=False),
    sa.Column('coin_balance', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.CheckConstraint('coin_balance >= 0', name='ck_users_coin_balance_non_negative'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('username')
    )
    op.create_table('merch',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('name', sa.String(), nullable=False),
    sa.Column('price', sa.Integer(), nullable=False),
    sa.CheckConstraint('price > 0', name='ck_merch_price_positive'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('name')
    )
    op.create_table('transactions',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('fk_from_user', sa.Integer(), nullable=False),
    sa.Column('fk_to_user', sa.Integer(), nullable=True),
    sa.Column('amount', sa.Integer(), nullable=False),
    sa.Column('type', sa.Enum('transfer', 'purchase', name='transactiontype'), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.CheckConstraint('amount > 0', name='ck_transactions_amount_positive'),
    sa.CheckConstraint(
        "(type = 'transfer' AND fk_to_user IS NOT NULL AND fk_to_user <> fk_from_user)"
        " OR (type = 'purchase' AND fk_to_user IS NULL)",
        name='ck_transactions_recipient_matches_type',
    ),
    sa.ForeignKeyConstraint(['fk_from_user'], ['users.id'], ),
    sa.ForeignKeyConstraint(['fk_to_user'], ['users.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_transactions_fk_from_user'), 'transactions', ['fk_from_user'], unique=False)
    op.create_index(op.f('ix_transactions_fk_to_user'), 'transactions', ['fk_to_user'], unique=False)
    op.create_table('purchases',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('fk_user', sa.Integer(), nullable=False),
    sa.Column('fk_merch', sa.Integer(), nullable=False),
    sa.Column('quantity', sa.Integer(), nullable=False),
    sa.Column('purchased_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.CheckConstraint('quantity > 0', name='ck_purchases_quantity_positive'),
    sa.ForeignKeyConstraint(['fk_merch'], ['merch.id'], ),
    sa.ForeignKeyConstraint(['fk_user'], ['users.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_purchases_fk_user'), 'purchases', ['fk_user'], unique=False)

    merch_table = sa.table('merch', sa.column('name', sa.String()), sa.column('price', sa.Integer()))
    op.bulk_insert(merch_table, MERCH)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_purchases_fk_user'), table_name='purchases')
    op.drop_table('purchases')
    op.drop_index(op.f('ix_transactions_fk_to_user'), table_name='transactions')
    op.drop_index(op.f('ix_transactions_fk_from_user'), table_name='transactions')
    op.drop_table('transactions')
    op.drop_table('merch')
    op.drop_table('users')
    sa.Enum(name='transactiontype').drop(op.get_bind(), checkfirst=True)
