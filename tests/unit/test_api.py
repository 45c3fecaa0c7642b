from app.config import settings
from app.models.competition import CompetitionStatus
from app.services.achievement_service import synchronize_competition

from factories import auth_headers, make_competition, make_submission, make_user


def _cron_headers() -> dict:
    return {'Authorization': f'Bearer {settings.cron_secret}'}


def _seed(db):
    alice = make_user(db, 'alice')
    bob = make_user(db, 'bob')
    competition = make_competition(db, 'comp-1')
    make_submission(db, 'A', alice, competition, 4.8, 10)
    make_submission(db, 'B', bob, competition, 4.8, 10)
    make_submission(db, 'C', bob, competition, 4.5, 8)
    return alice, bob


def test_health(client) -> None:
    r = client.get('/health')
    assert r.status_code == 200
    assert r.json()['status'] == 'healthy'
    assert 'X-Request-ID' in r.headers


def test_leaderboard_uses_dense_ranks(client, db) -> None:
    _seed(db)

    r = client.get('/api/v1/competitions/comp-1/leaderboard')

    assert r.status_code == 200
    body = r.json()
    assert body['total'] == 3
    assert {e['submission_id']: e['rank'] for e in body['entries']} == {'A': 1, 'B': 1, 'C': 2}


def test_competition_achievements_sorted_by_position(client, db) -> None:
    _seed(db)
    synchronize_competition(db, 'comp-1', send_notifications=False)

    r = client.get('/api/v1/competitions/comp-1/achievements')

    assert r.status_code == 200
    body = r.json()
    assert body['total'] == 3
    assert [(e['position'], e['user_id'], e['photo_id']) for e in body['results']] == [
        (1, 'alice', 'A'),
        (1, 'bob', 'B'),
        (2, 'bob', 'C'),
    ]
    assert body['results'][0]['prize'] == 'Gold Medal'
    assert client.get('/api/v1/competitions/nope/achievements').status_code == 404


def test_leaderboard_unknown_competition(client) -> None:
    assert client.get('/api/v1/competitions/nope/leaderboard').status_code == 404


def test_sync_results_requires_admin(client, db) -> None:
    alice, _ = _seed(db)

    assert client.post('/api/v1/competitions/comp-1/sync-results').status_code in (401, 403)
    assert client.post('/api/v1/competitions/comp-1/sync-results', headers=auth_headers(alice)).status_code == 403


def test_admin_sync_then_read_achievements(client, db) -> None:
    _seed(db)
    admin = make_user(db, 'admin', is_admin=True)

    r = client.post('/api/v1/competitions/comp-1/sync-results', headers=auth_headers(admin))
    assert r.status_code == 200
    assert r.json()['results_created'] == 3

    bob = client.get('/api/v1/users/bob/achievements').json()
    # B ties A for gold, C takes silver
    assert (bob['gold'], bob['silver'], bob['bronze']) == (1, 1, 0)
    assert client.get('/api/v1/users/ghost/achievements').status_code == 404
    assert client.post('/api/v1/competitions/nope/sync-results', headers=auth_headers(admin)).status_code == 404


def test_batch_sync_reports_errors_per_competition(client, db) -> None:
    _seed(db)
    admin = make_user(db, 'admin', is_admin=True)

    r = client.post(
        '/api/v1/admin/sync-achievements',
        json={'competition_ids': ['comp-1', 'missing']},
        headers=auth_headers(admin),
    )

    assert r.status_code == 200
    body = r.json()
    assert [c['competition_id'] for c in body['competitions']] == ['comp-1']
    assert body['errors'][0]['competition_id'] == 'missing'


def test_rating_endpoint(client, db) -> None:
    owner = make_user(db, 'owner')
    voter = make_user(db, 'voter')
    competition = make_competition(db, 'c', status=CompetitionStatus.VOTING)
    make_submission(db, 's1', owner, competition, None, 0)

    first = client.post('/api/v1/ratings', json={'submission_id': 's1', 'score': 5}, headers=auth_headers(voter))
    again = client.post('/api/v1/ratings', json={'submission_id': 's1', 'score': 3}, headers=auth_headers(voter))
    own = client.post('/api/v1/ratings', json={'submission_id': 's1', 'score': 3}, headers=auth_headers(owner))
    invalid = client.post('/api/v1/ratings', json={'submission_id': 's1', 'score': 9}, headers=auth_headers(voter))

    assert first.status_code == 201
    assert again.status_code == 200
    assert again.json()['score'] == 3
    assert own.status_code == 400
    assert invalid.status_code == 422


def test_cron_requires_secret(client) -> None:
    r = client.get('/api/v1/cron/update-competition-statuses', headers={'Authorization': 'Bearer wrong'})
    assert r.status_code == 401


def test_cron_tick_and_preview(client, db) -> None:
    make_competition(db, 'old', status=CompetitionStatus.VOTING)

    preview = client.get('/api/v1/cron/competition-statuses/preview', headers=_cron_headers())
    assert preview.status_code == 200
    assert [p['competition_id'] for p in preview.json()] == ['old']

    tick = client.get('/api/v1/cron/update-competition-statuses', headers=_cron_headers())
    assert tick.status_code == 200
    body = tick.json()
    assert (body['total'], body['successful'], body['errors']) == (1, 1, 0)
    assert body['updates'][0]['new_status'] == 'completed'
