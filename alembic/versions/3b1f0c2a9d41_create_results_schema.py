"""create results schema

Revision ID: 3b1f0c2a9d41
Revises:
Create Date: 2026-10-12 10:02:11.184300

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1f0c2a9d41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

competition_status = sa.Enum('UPCOMING', 'ACTIVE', 'VOTING', 'COMPLETED', name='competitionstatus')
submission_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='submissionstatus')
notification_kind = sa.Enum('MEDAL', 'STATUS', name='notificationkind')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False, unique=True),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('is_admin', sa.Boolean(), server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        'competitions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('theme', sa.String(50), nullable=False),
        sa.Column('status', competition_status, nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('voting_end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('manual_status_override', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('last_auto_status_update', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        'photo_submissions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('competition_id', sa.String(), sa.ForeignKey('competitions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('image_url', sa.String(), nullable=False),
        sa.Column('average_rating', sa.Float(), nullable=True),
        sa.Column('rating_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_rating_sum', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', submission_status, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        'ratings',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('submission_id', sa.String(), sa.ForeignKey('photo_submissions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('competition_id', sa.String(), sa.ForeignKey('competitions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', 'submission_id', name='uq_rating_user_submission'),
    )
    op.create_table(
        'results',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('competition_id', sa.String(), sa.ForeignKey('competitions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('photo_id', sa.String(), sa.ForeignKey('photo_submissions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('final_score', sa.Float(), nullable=False),
        sa.Column('prize', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        # One record per medal position per user
        sa.UniqueConstraint('competition_id', 'position', 'user_id', name='competition_position_user_unique'),
    )
    op.create_table(
        'notifications',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('competition_id', sa.String(), sa.ForeignKey('competitions.id', ondelete='CASCADE'), nullable=True),
        sa.Column('kind', notification_kind, nullable=False),
        sa.Column('message', sa.String(), nullable=False),
        sa.Column('is_read', sa.Boolean(), server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    # Reverse order
    op.drop_table('notifications')
    op.drop_table('results')
    op.drop_table('ratings')
    op.drop_table('photo_submissions')
    op.drop_table('competitions')
    op.drop_table('users')
    notification_kind.drop(op.get_bind(), checkfirst=True)
    submission_status.drop(op.get_bind(), checkfirst=True)
    competition_status.drop(op.get_bind(), checkfirst=True)
