from datetime import timedelta

from app.models.competition import Competition, CompetitionStatus
from app.models.notification import Notification, NotificationKind
from app.models.result import Result
from app.services.competition_status_service import (
    competitions_needing_update,
    expected_status,
    next_status,
    update_competition_statuses,
)

from factories import NOW, make_competition, make_submission, make_user


def _schedule(db, competition_id: str, status: CompetitionStatus, start_days: int, end_days: int, voting_days, **extra):
    return make_competition(
        db,
        competition_id,
        status=status,
        start_date=NOW + timedelta(days=start_days),
        end_date=NOW + timedelta(days=end_days),
        voting_end_date=NOW + timedelta(days=voting_days) if voting_days is not None else None,
        **extra,
    )


def test_expected_status_follows_dates(db) -> None:
    c = _schedule(db, 'c', CompetitionStatus.UPCOMING, 0, 10, 20)

    assert expected_status(c, NOW - timedelta(seconds=1)) == CompetitionStatus.UPCOMING
    assert expected_status(c, NOW) == CompetitionStatus.ACTIVE
    assert expected_status(c, NOW + timedelta(days=10)) == CompetitionStatus.VOTING
    assert expected_status(c, NOW + timedelta(days=20)) == CompetitionStatus.COMPLETED


def test_missing_voting_end_completes_after_end_date(db) -> None:
    c = _schedule(db, 'c', CompetitionStatus.ACTIVE, -5, -1, None)
    assert expected_status(c, NOW) == CompetitionStatus.COMPLETED


def test_transitions_never_move_backwards() -> None:
    assert next_status(CompetitionStatus.COMPLETED, CompetitionStatus.ACTIVE) == CompetitionStatus.COMPLETED
    assert next_status(CompetitionStatus.UPCOMING, CompetitionStatus.VOTING) == CompetitionStatus.VOTING
    assert next_status(CompetitionStatus.VOTING, CompetitionStatus.VOTING) == CompetitionStatus.VOTING


def test_cron_tick_moves_to_voting_and_notifies_participants(db) -> None:
    alice = make_user(db, 'alice')
    bob = make_user(db, 'bob')
    c = _schedule(db, 'c', CompetitionStatus.ACTIVE, -10, -1, 5)
    make_submission(db, 's1', alice, c, None, 0)
    make_submission(db, 's2', bob, c, None, 0)

    results = update_competition_statuses(db, now=NOW)

    assert len(results) == 1
    assert (results[0].old_status, results[0].new_status, results[0].success) == ('active', 'voting', True)
    assert results[0].notifications_sent == 2
    db.refresh(c)
    assert c.status == CompetitionStatus.VOTING
    assert c.last_auto_status_update is not None
    assert db.query(Notification).filter(Notification.kind == NotificationKind.STATUS).count() == 2


def test_entering_completed_synchronizes_results(db) -> None:
    alice = make_user(db, 'alice')
    bob = make_user(db, 'bob')
    c = _schedule(db, 'c', CompetitionStatus.VOTING, -20, -10, -1)
    make_submission(db, 's1', alice, c, 4.5, 4)
    make_submission(db, 's2', bob, c, 3.5, 4)

    results = update_competition_statuses(db, now=NOW)

    assert results[0].new_status == 'completed'
    assert results[0].results_created == 2
    medals = {(r.user_id, r.position) for r in db.query(Result).all()}
    assert medals == {('alice', 1), ('bob', 2)}


def test_manual_override_is_skipped_unless_bypassed(db) -> None:
    _schedule(db, 'pinned', CompetitionStatus.ACTIVE, -10, -1, 5, manual_status_override=True)

    assert update_competition_statuses(db, now=NOW) == []
    assert competitions_needing_update(db, now=NOW) == []

    results = update_competition_statuses(db, now=NOW, bypass_manual_override=True)
    assert [r.competition_id for r in results] == ['pinned']


def test_preview_lists_pending_changes_without_writing(db) -> None:
    _schedule(db, 'due', CompetitionStatus.UPCOMING, -1, 10, 20)
    _schedule(db, 'fine', CompetitionStatus.UPCOMING, 1, 10, 20)

    pending = competitions_needing_update(db, now=NOW)

    assert [(p.competition_id, p.expected_status) for p in pending] == [('due', 'active')]
    assert db.query(Competition).filter(Competition.id == 'due').first().status == CompetitionStatus.UPCOMING
