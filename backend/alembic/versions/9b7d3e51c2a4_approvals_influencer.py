"""Stakeholder approvals, influencer profiles, wider distribution column

Revision ID: 9b7d3e51c2a4
Revises: 4f1c2a9e7b30
Create Date: 2026-10-18 16:40:05.881342

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '9b7d3e51c2a4'
down_revision: Union[str, Sequence[str], None] = '4f1c2a9e7b30'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'approvals',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('uuid', sa.String(36), nullable=False),
        sa.Column('release_id', sa.Integer(), sa.ForeignKey('releases.id'), nullable=False),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('company.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('email', sa.String(128), nullable=True),
        sa.Column('email_to', sa.String(64), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('signature', sa.String(64), nullable=True),
        sa.Column('feedback', sa.Text(), nullable=True),
        sa.Column('approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('requested_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('signed_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f('ix_approvals_id'), 'approvals', ['id'])
    op.create_index(op.f('ix_approvals_uuid'), 'approvals', ['uuid'], unique=True)
    op.create_index(op.f('ix_approvals_release_id'), 'approvals', ['release_id'])
    op.create_index(op.f('ix_approvals_company_id'), 'approvals', ['company_id'])

    op.create_table(
        'influencer',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('uuid', sa.String(36), nullable=False, unique=True),
        sa.Column('avatar', sa.Text(), nullable=True),
        sa.Column('name', sa.String(64), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('completed_jobs', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('cell', sa.String(20), nullable=True),
        sa.Column('altemail', sa.String(128), nullable=True),
    )
    op.create_index(op.f('ix_influencer_id'), 'influencer', ['id'])
    op.create_index(op.f('ix_influencer_user_id'), 'influencer', ['user_id'], unique=True)

    # Room for several comma-separated upgrade types
    with op.batch_alter_table('releases') as batch_op:
        batch_op.alter_column('distribution', existing_type=sa.String(20), type_=sa.String(64))


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table('releases') as batch_op:
        batch_op.alter_column('distribution', existing_type=sa.String(64), type_=sa.String(20))
    op.drop_table('influencer')
    op.drop_table('approvals')
