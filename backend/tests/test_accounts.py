import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


def test_health(client):
    res = client.get('/api/health')
    assert res.status_code == 200
    assert res.get_json()['status'] == 'success'


def test_register_login_logout(client):
    res = client.post('/api/auth/register', json={'username': 'dana', 'password': 'secret1'})
    assert res.status_code == 201
    assert res.get_json()['user']['username'] == 'dana'

    client.post('/api/auth/logout')
    assert client.get('/api/auth/profile').status_code == 401

    res = client.post('/api/auth/login', json={'username': 'dana', 'password': 'wrong-pass'})
    assert res.status_code == 401
    res = client.post('/api/auth/login', json={'username': 'dana', 'password': 'secret1'})
    assert res.status_code == 200
    assert client.get('/api/auth/profile').get_json()['user']['username'] == 'dana'


def test_register_rejects_duplicate_and_short_password(client, make_player):
    make_player('erin')
    assert client.post('/api/auth/register', json={'username': 'erin', 'password': 'secret1'}).status_code == 400
    res = client.post('/api/auth/register', json={'username': 'frank', 'password': 'abc'})
    assert res.status_code == 422
    assert 'password' in res.get_json()['errors']


def test_update_profile_checks_uniqueness(make_player):
    alice = make_player('alice')
    make_player('bob')
    res = alice.put('/api/user', json={'username': 'bob'})
    assert res.status_code == 422
    assert 'username' in res.get_json()['errors']

    res = alice.put('/api/user', json={'username': 'alicia', 'email': 'alicia@example.com'})
    assert res.status_code == 200
    assert res.get_json()['username'] == 'alicia'
    assert alice.get('/api/user').get_json()['email'] == 'alicia@example.com'


def test_stats_report_totals_and_rank(make_player):
    alice = make_player('alice')
    bob = make_player('bob')
    for value in (100, 250):
        alice.post('/api/scores', json={'score': value, 'level': 1, 'duration_seconds': 10, 'difficulty': 'easy'})
    bob.post('/api/scores', json={'score': 400, 'level': 1, 'duration_seconds': 10, 'difficulty': 'easy'})

    stats = alice.get('/api/user/stats').get_json()
    assert stats == {
        'total_games': 2,
        'best_score': 250,
        'total_score': 350,
        'average_score': 175.0,
        'rank': 2,
    }
    assert bob.get('/api/user/stats').get_json()['rank'] == 1


def test_db_reset_command_seeds_players(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['db-reset'])
    assert 'reset and seeded' in result.output

    client = flask_app.test_client()
    rows = client.get('/api/leaderboard/global').get_json()
    assert [r['username'] for r in rows] == ['testuser2', 'testuser1', 'testuser3']


def test_login_rejects_non_string_credentials(client, make_player):
    make_player('zed', password='secret1')
    res = client.post('/api/auth/login', json={'username': 'zed', 'password': 12345})
    assert res.status_code == 422
    assert 'password' in res.get_json()['errors']

    res = client.post('/api/auth/login', json={'username': ['zed']})
    assert res.status_code == 422
    assert {'username', 'password'} <= set(res.get_json()['errors'])
    assert client.get('/api/auth/profile').status_code == 401


def test_failed_profile_commit_rolls_back(make_player, monkeypatch):
    alice = make_player('alice')
    rollbacks = []
    real_rollback = Session.rollback

    def failing_commit(self):
        raise SQLAlchemyError('commit failed')

    def recording_rollback(self):
        rollbacks.append(self)
        return real_rollback(self)

    monkeypatch.setattr(Session, 'commit', failing_commit)
    monkeypatch.setattr(Session, 'rollback', recording_rollback)
    with pytest.raises(SQLAlchemyError):
        alice.put('/api/user', json={'username': 'alicia'})
    monkeypatch.undo()

    assert rollbacks
    assert alice.get('/api/user').get_json()['username'] == 'alice'
