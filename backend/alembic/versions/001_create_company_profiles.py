"""Create users and company_profiles

Revision ID: 001
Revises:
Create Date: 2025-01-10 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users and company_profiles with both uniqueness guards."""

    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('mobile_no', sa.String(length=20), nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('is_email_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_mobile_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('mobile_no'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'company_profiles',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('owner_id', sa.String(), nullable=False),
        sa.Column('company_name', sa.String(length=200), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('city', sa.String(length=50), nullable=True),
        sa.Column('state', sa.String(length=50), nullable=True),
        sa.Column('country', sa.String(length=50), nullable=True),
        sa.Column('postal_code', sa.String(length=20), nullable=True),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('logo_url', sa.String(length=1000), nullable=True),
        sa.Column('banner_url', sa.String(length=1000), nullable=True),
        sa.Column('industry', sa.String(length=100), nullable=True),
        sa.Column('founded_date', sa.Date(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('social_links', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id', name='uq_company_profiles_owner_id'),
    )
    op.create_index('idx_company_profiles_created_at', 'company_profiles', ['created_at'])
    op.create_index('idx_company_profiles_industry', 'company_profiles', ['industry'])
    op.create_index(
        'uq_company_profiles_company_name_lower',
        'company_profiles',
        [sa.text('lower(company_name)')],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index('uq_company_profiles_company_name_lower', table_name='company_profiles')
    op.drop_index('idx_company_profiles_industry', table_name='company_profiles')
    op.drop_index('idx_company_profiles_created_at', table_name='company_profiles')
    op.drop_table('company_profiles')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
