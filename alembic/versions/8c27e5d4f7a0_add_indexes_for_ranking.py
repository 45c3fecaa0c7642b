"""add indexes for ranking

Revision ID: 8c27e5d4f7a0
Revises: 3b1f0c2a9d41
Create Date: 2026-10-14 16:40:27.902113

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '8c27e5d4f7a0'
down_revision: Union[str, Sequence[str], None] = '3b1f0c2a9d41'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Ranking reads approved submissions per competition
    op.create_index('idx_submissions_competition_status', 'photo_submissions', ['competition_id', 'status'])
    op.create_index('idx_submissions_user_id', 'photo_submissions', ['user_id'])
    op.create_index('idx_results_competition_id', 'results', ['competition_id'])
    op.create_index('idx_results_user_id', 'results', ['user_id'])
    op.create_index('idx_competitions_status', 'competitions', ['status'])
    op.create_index('idx_notifications_user_id', 'notifications', ['user_id'])


def downgrade() -> None:
    op.drop_index('idx_notifications_user_id')
    op.drop_index('idx_competitions_status')
    op.drop_index('idx_results_user_id')
    op.drop_index('idx_results_competition_id')
    op.drop_index('idx_submissions_user_id')
    op.drop_index('idx_submissions_competition_status')
