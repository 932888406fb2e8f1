from sqlalchemy import inspect

from spill import DEMO_USERS, close_store, db
from spill.services.auth import login
from spill.services.leaderboard import get_ranking


def test_db_reset_seeds_demo_users_and_scores(flask_app):
    result = flask_app.test_cli_runner().invoke(args=['db-reset'])
    assert result.exit_code == 0, result.output
    assert 'Database has been reset and seeded!' in result.output

    ranking = get_ranking(db.session, 'blackjack')
    assert [(r['username'], r['score']) for r in ranking] == list(zip(DEMO_USERS, (300, 200, 100)))
    assert login(db.session, DEMO_USERS[0], 'password')['username'] == DEMO_USERS[0]


def test_init_db_creates_missing_tables(flask_app):
    db.drop_all()
    assert 'users' not in inspect(db.engine).get_table_names()

    result = flask_app.test_cli_runner().invoke(args=['init-db'])
    assert result.exit_code == 0, result.output
    tables = inspect(db.engine).get_table_names()
    assert 'users' in tables
    assert 'leaderboard' in tables


def test_close_store_disposes_the_pool(file_app):
    with file_app.app_context():
        engine = db.engine
        old_pool = engine.pool
        get_ranking(db.session, 'blackjack')

    close_store(file_app)

    assert engine.pool is not old_pool
    assert engine.pool.checkedout() == 0
    # A later request reconnects lazily
    with file_app.app_context():
        assert get_ranking(db.session, 'blackjack') == []
