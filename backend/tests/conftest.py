import os
import sys
import pytest

# Ensure the backend root (containing the `arcade_backend` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from arcade_backend import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = 'DEBUG'
    CORS_ORIGINS = []
    MAX_LIVES = 5
    LEADERBOARD_LIMIT = 100
    LEADERBOARD_TIMEZONE = 'UTC'
    LEADERBOARD_WEEK_START = 0
    SCORES_PER_PAGE = 20
    HIGH_SCORES_DEFAULT_LIMIT = 10
    HIGH_SCORES_MAX_LIMIT = 100


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import arcade_backend.models  # noqa: F401
        db.create_all()
    # No context stays pushed: each request gets its own flask.g and session
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_ctx(flask_app):
    """App context for calling services directly, without the test client."""
    with flask_app.app_context():
        yield flask_app


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_player(flask_app):
    """Factory returning a test client logged in as a freshly registered user."""
    def _make(username, password='password'):
        player_client = flask_app.test_client()
        res = player_client.post('/api/auth/register', json={'username': username, 'password': password})
        assert res.status_code == 201
        player_client.user_id = res.get_json()['user']['id']
        return player_client
    return _make


@pytest.fixture()
def player(make_player):
    return make_player('alice')


@pytest.fixture()
def add_user(flask_app):
    """Insert a user row directly, bypassing the HTTP layer; returns its id."""
    from arcade_backend.models import User

    def _add(username, best_score=0, **fields):
        with flask_app.app_context():
            user = User(username=username, best_score=best_score, **fields)
            user.set_password('password')
            db.session.add(user)
            db.session.commit()
            return user.id
    return _add


@pytest.fixture()
def add_score(flask_app):
    """Insert a score entry with an explicit timestamp; returns its id."""
    from arcade_backend.models import Score, utcnow

    def _add(user_id, score, difficulty='normal', created_at=None, level=1, duration_seconds=60):
        with flask_app.app_context():
            entry = Score(
                user_id=user_id,
                score=score,
                level=level,
                duration_seconds=duration_seconds,
                difficulty=difficulty,
                created_at=created_at or utcnow(),
            )
            db.session.add(entry)
            db.session.commit()
            return entry.id
    return _add
