"""initial_schema

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-16 09:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa
from launchpad_indexer.database.types import EvmAddressType
from launchpad_indexer.database.types import EvmHashType
from launchpad_indexer.database.types import UInt256Type

# revision identifiers, used by Alembic.
revision = '3f1c9a7d2b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('indexer_state',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('block_number', sa.BigInteger(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    sa.CheckConstraint('block_number >= 0', name='ck_indexer_state_block_number'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_indexer_state_created_at'), 'indexer_state', ['created_at'], unique=False)

    op.create_table('user_accounts',
    sa.Column('address', EvmAddressType(), nullable=False),
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_user_accounts_address'), 'user_accounts', ['address'], unique=True)
    op.create_index(op.f('ix_user_accounts_created_at'), 'user_accounts', ['created_at'], unique=False)

    op.create_table('tokens',
    sa.Column('address', EvmAddressType(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('symbol', sa.String(length=64), nullable=False),
    sa.Column('txn_hash', EvmHashType(), nullable=False),
    sa.Column('block_number', sa.BigInteger(), nullable=False),
    sa.Column('timestamp', sa.BigInteger(), nullable=False),
    sa.Column('user_id', sa.Uuid(), nullable=True),
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    sa.ForeignKeyConstraint(['user_id'], ['user_accounts.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tokens_address'), 'tokens', ['address'], unique=True)
    op.create_index(op.f('ix_tokens_block_number'), 'tokens', ['block_number'], unique=False)
    op.create_index(op.f('ix_tokens_created_at'), 'tokens', ['created_at'], unique=False)
    op.create_index(op.f('ix_tokens_timestamp'), 'tokens', ['timestamp'], unique=False)
    op.create_index(op.f('ix_tokens_txn_hash'), 'tokens', ['txn_hash'], unique=False)
    op.create_index(op.f('ix_tokens_user_id'), 'tokens', ['user_id'], unique=False)

    op.create_table('trades',
    sa.Column('type', sa.Enum('buy', 'sell', name='tradetype', native_enum=False), nullable=False),
    sa.Column('txn_hash', EvmHashType(), nullable=False),
    sa.Column('log_index', sa.Integer(), nullable=False),
    sa.Column('block_number', sa.BigInteger(), nullable=False),
    sa.Column('token_id', sa.Uuid(), nullable=False),
    sa.Column('amount_in', UInt256Type(), nullable=False),
    sa.Column('amount_out', UInt256Type(), nullable=False),
    sa.Column('fee', UInt256Type(), nullable=False),
    sa.Column('timestamp', sa.BigInteger(), nullable=False),
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    sa.ForeignKeyConstraint(['token_id'], ['tokens.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('txn_hash', 'log_index', name='uq_trades_txn_hash_log_index')
    )
    op.create_index('idx_trades_token_created_at', 'trades', ['token_id', 'created_at'], unique=False)
    op.create_index(op.f('ix_trades_block_number'), 'trades', ['block_number'], unique=False)
    op.create_index(op.f('ix_trades_created_at'), 'trades', ['created_at'], unique=False)
    op.create_index(op.f('ix_trades_timestamp'), 'trades', ['timestamp'], unique=False)
    op.create_index(op.f('ix_trades_txn_hash'), 'trades', ['txn_hash'], unique=False)
    op.create_index(op.f('ix_trades_type'), 'trades', ['type'], unique=False)


def downgrade() -> None:
    op.drop_table('trades')
    op.drop_table('tokens')
    op.drop_table('user_accounts')
    op.drop_table('indexer_state')
