"""initial_schema

Revision ID: 4f1c2a9d7e31
Revises:
Create Date: 2026-10-17 10:12:40.418207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2a9d7e31'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SNAPSHOT_COLUMNS = [
    ('phone', sa.String(32)),
    ('date_of_birth', sa.String(10)),
    ('nationality', sa.String(100)),
    ('gender', sa.String(20)),
    ('address', sa.Text),
    ('class_x_school', sa.String(255)),
    ('class_x_year', sa.Integer),
    ('class_x_percentage', sa.Float),
    ('class_xii_school', sa.String(255)),
    ('class_xii_year', sa.Integer),
    ('class_xii_percentage', sa.Float),
    ('degree_institution', sa.String(255)),
    ('degree_name', sa.String(255)),
    ('degree_year', sa.Integer),
    ('degree_cgpa', sa.Float),
    ('current_company', sa.String(255)),
    ('current_ctc', sa.Float),
    ('expected_ctc', sa.Float),
]


def upgrade() -> None:
    """Create all application tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'candidate_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), unique=True, nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False, server_default=''),
        sa.Column('email', sa.String(255), nullable=False, server_default=''),
        *[sa.Column(name, type_, nullable=True) for name, type_ in SNAPSHOT_COLUMNS],
        sa.Column('primary_resume_url', sa.Text, nullable=True),
        sa.Column('profile_image_url', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('job_type', sa.String(50), nullable=False),
        sa.Column('job_function', sa.String(50), nullable=True),
        sa.Column('description', sa.Text, nullable=False, server_default=''),
        sa.Column('minimum_experience', sa.Integer, nullable=True),
        sa.Column('requirements', sa.JSON, nullable=True),
        sa.Column('responsibilities', sa.JSON, nullable=True),
        sa.Column('salary_range', sa.String(100), nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'applications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('job_id', sa.String(36), sa.ForeignKey('jobs.id'), nullable=False),
        sa.Column('status', sa.String(30), nullable=False, server_default='Applied'),
        sa.Column('snapshot_name', sa.String(255), nullable=False, server_default=''),
        sa.Column('snapshot_email', sa.String(255), nullable=False, server_default=''),
        *[sa.Column(f'snapshot_{name}', type_, nullable=True) for name, type_ in SNAPSHOT_COLUMNS],
        sa.Column('snapshot_resume_url', sa.Text, nullable=True),
        sa.Column('applied_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
        sa.UniqueConstraint('user_id', 'job_id', name='uq_applications_user_job'),
    )


def downgrade() -> None:
    """Drop all application tables."""
    op.drop_table('applications')
    op.drop_table('jobs')
    op.drop_table('candidate_profiles')
    op.drop_table('users')
