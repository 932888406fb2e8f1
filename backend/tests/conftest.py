import os
import sys
import pytest

# Ensure the backend root (containing the `spill` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from spill import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    AUTO_CREATE_TABLES = False
    # Cheapest bcrypt cost, keeps the suite fast
    BCRYPT_LOG_ROUNDS = 4
    BCRYPT_HANDLE_LONG_PASSWORDS = True
    DEFAULT_GAME = 'blackjack'
    CORS_ORIGINS = ['http://localhost:3000']
    LOG_LEVEL = 'DEBUG'


PAGES = ('index.html', 'login.html', 'register.html')


@pytest.fixture()
def static_dir(tmp_path):
    public = tmp_path / 'public'
    public.mkdir()
    for page in PAGES:
        (public / page).write_text(f'<h1>{page}</h1>')
    return str(public)


@pytest.fixture()
def flask_app(static_dir):
    class _Config(TestConfig):
        STATIC_FOLDER = static_dir

    application = create_app(_Config)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def file_app(tmp_path):
    """App on a file-backed SQLite database, shareable across threads."""
    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = 'sqlite:///' + str(tmp_path / 'spill-test.db')
        SQLALCHEMY_ENGINE_OPTIONS = {'connect_args': {'timeout': 30}}
        AUTO_CREATE_TABLES = True

    application = create_app(_Config)
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture()
def shipped_pages_client():
    """Client for an app serving the pages bundled in backend/public."""
    from config import BASE_DIR

    class _Config(TestConfig):
        STATIC_FOLDER = os.path.join(BASE_DIR, 'public')

    return create_app(_Config).test_client()
