"""create assessment tables

Revision ID: 5c1e2f7a9b3d
Revises:
Create Date: 2026-10-19 09:12:41.208311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5c1e2f7a9b3d'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('assessment_tests',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('passing_score', sa.Integer(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('sections', sa.JSON(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_assessment_tests_id'), 'assessment_tests', ['id'], unique=False)
    op.create_index(op.f('ix_assessment_tests_created_by'), 'assessment_tests', ['created_by'], unique=False)

    op.create_table('assessment_invitations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('test_id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('token', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=True),
        sa.Column('candidate_id', sa.Integer(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['test_id'], ['assessment_tests.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_assessment_invitations_id'), 'assessment_invitations', ['id'], unique=False)
    op.create_index(op.f('ix_assessment_invitations_email'), 'assessment_invitations', ['email'], unique=False)
    op.create_index(op.f('ix_assessment_invitations_token'), 'assessment_invitations', ['token'], unique=True)
    op.create_index(op.f('ix_assessment_invitations_created_by'), 'assessment_invitations', ['created_by'], unique=False)

    op.create_table('assessment_results',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('test_id', sa.Integer(), nullable=False),
        sa.Column('candidate_email', sa.String(), nullable=False),
        sa.Column('invitation_token', sa.String(), nullable=False),
        sa.Column('attempt_number', sa.Integer(), nullable=False),
        sa.Column('invitation_id', sa.Integer(), nullable=True),
        sa.Column('candidate_name', sa.String(), nullable=True),
        sa.Column('student_id', sa.Integer(), nullable=True),
        sa.Column('candidate_id', sa.Integer(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('answers', sa.JSON(), nullable=False),
        sa.Column('total_points', sa.Integer(), nullable=True),
        sa.Column('earned_points', sa.Integer(), nullable=True),
        sa.Column('correct_answers', sa.Integer(), nullable=True),
        sa.Column('score', sa.Integer(), nullable=True),
        sa.Column('passing_score', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completion_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('time_taken', sa.Integer(), nullable=True),
        sa.Column('results_declared', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('test_id', 'candidate_email', 'invitation_token', 'attempt_number', name='uq_assessment_result_natural_key')
    )
    op.create_index(op.f('ix_assessment_results_id'), 'assessment_results', ['id'], unique=False)
    op.create_index(op.f('ix_assessment_results_test_id'), 'assessment_results', ['test_id'], unique=False)
    op.create_index(op.f('ix_assessment_results_candidate_email'), 'assessment_results', ['candidate_email'], unique=False)
    op.create_index(op.f('ix_assessment_results_created_by'), 'assessment_results', ['created_by'], unique=False)

    op.create_table('assessment_candidates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('tests_assigned', sa.Integer(), nullable=True),
        sa.Column('tests_completed', sa.Integer(), nullable=True),
        sa.Column('average_score', sa.Float(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('last_completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', 'created_by', name='uq_assessment_candidate_owner')
    )
    op.create_index(op.f('ix_assessment_candidates_id'), 'assessment_candidates', ['id'], unique=False)
    op.create_index(op.f('ix_assessment_candidates_email'), 'assessment_candidates', ['email'], unique=False)

    for table in ('students', 'candidates'):
        op.create_table(table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('salutation', sa.String(), nullable=True),
            sa.Column('first_name', sa.String(), nullable=True),
            sa.Column('middle_name', sa.String(), nullable=True),
            sa.Column('last_name', sa.String(), nullable=True),
            sa.Column('name', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f(f'ix_{table}_id'), table, ['id'], unique=False)
        op.create_index(op.f(f'ix_{table}_email'), table, ['email'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    for table in ('candidates', 'students'):
        op.drop_index(op.f(f'ix_{table}_email'), table_name=table)
        op.drop_index(op.f(f'ix_{table}_id'), table_name=table)
        op.drop_table(table)
    op.drop_index(op.f('ix_assessment_candidates_email'), table_name='assessment_candidates')
    op.drop_index(op.f('ix_assessment_candidates_id'), table_name='assessment_candidates')
    op.drop_table('assessment_candidates')
    op.drop_index(op.f('ix_assessment_results_created_by'), table_name='assessment_results')
    op.drop_index(op.f('ix_assessment_results_candidate_email'), table_name='assessment_results')
    op.drop_index(op.f('ix_assessment_results_test_id'), table_name='assessment_results')
    op.drop_index(op.f('ix_assessment_results_id'), table_name='assessment_results')
    op.drop_table('assessment_results')
    op.drop_index(op.f('ix_assessment_invitations_created_by'), table_name='assessment_invitations')
    op.drop_index(op.f('ix_assessment_invitations_token'), table_name='assessment_invitations')
    op.drop_index(op.f('ix_assessment_invitations_email'), table_name='assessment_invitations')
    op.drop_index(op.f('ix_assessment_invitations_id'), table_name='assessment_invitations')
    op.drop_table('assessment_invitations')
    op.drop_index(op.f('ix_assessment_tests_created_by'), table_name='assessment_tests')
    op.drop_index(op.f('ix_assessment_tests_id'), table_name='assessment_tests')
    op.drop_table('assessment_tests')
