"""Initial casebook schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create institutions, users, cases, case_versions, permissions, users_cases and artifacts."""
    op.create_table(
        'institutions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('acronym', sa.String(length=50), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=True),
        sa.Column('role', sa.String(length=50), nullable=True),
        sa.Column('grade', sa.String(length=50), nullable=True),
        sa.Column('institution_id', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['institution_id'], ['institutions.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)

    op.create_table(
        'cases',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('language', sa.String(length=50), nullable=True),
        sa.Column('domain', sa.String(length=100), nullable=True),
        sa.Column('specialty', sa.String(length=100), nullable=True),
        sa.Column('keywords', sa.Text(), nullable=True),
        sa.Column('original_date', sa.String(length=50), nullable=True),
        sa.Column('complexity', sa.String(length=50), nullable=True),
        sa.Column('author_id', sa.String(length=36), nullable=True),
        sa.Column('author_grade', sa.String(length=50), nullable=True),
        sa.Column('institution_id', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['users.id']),
        sa.ForeignKeyConstraint(['institution_id'], ['institutions.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_cases_author_id'), 'cases', ['author_id'], unique=False)

    op.create_table(
        'case_versions',
        sa.Column('seq', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('case_id', sa.String(length=36), nullable=False),
        sa.Column('source', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['case_id'], ['cases.id']),
        sa.PrimaryKeyConstraint('seq'),
        sa.UniqueConstraint('id')
    )
    op.create_index('ix_case_versions_case_order', 'case_versions', ['case_id', 'created_at', 'seq'], unique=False)

    op.create_table(
        'permissions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('entity', sa.String(length=50), nullable=False),
        sa.Column('subject', sa.String(length=36), nullable=True),
        sa.Column('clearance', sa.String(length=10), nullable=False),
        sa.Column('table', sa.String(length=50), nullable=False),
        sa.Column('table_id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_permissions_resource', 'permissions', ['table', 'table_id'], unique=False)

    op.create_table(
        'users_cases',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('case_id', sa.String(length=36), nullable=False),
        sa.Column('permission', sa.String(length=10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['case_id'], ['cases.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_cases_user_id'), 'users_cases', ['user_id'], unique=False)
    op.create_index(op.f('ix_users_cases_case_id'), 'users_cases', ['case_id'], unique=False)

    op.create_table(
        'artifacts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('case_id', sa.String(length=36), nullable=True),
        sa.Column('relative_path', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['case_id'], ['cases.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_artifacts_case_id'), 'artifacts', ['case_id'], unique=False)


def downgrade() -> None:
    """Drop all casebook tables in reverse dependency order."""
    op.drop_index(op.f('ix_artifacts_case_id'), table_name='artifacts')
    op.drop_table('artifacts')
    op.drop_index(op.f('ix_users_cases_case_id'), table_name='users_cases')
    op.drop_index(op.f('ix_users_cases_user_id'), table_name='users_cases')
    op.drop_table('users_cases')
    op.drop_index('ix_permissions_resource', table_name='permissions')
    op.drop_table('permissions')
    op.drop_index('ix_case_versions_case_order', table_name='case_versions')
    op.drop_table('case_versions')
    op.drop_index(op.f('ix_cases_author_id'), table_name='cases')
    op.drop_table('cases')
    op.drop_index(op.f('ix_users_role'), table_name='users')
    op.drop_table('users')
    op.drop_table('institutions')
