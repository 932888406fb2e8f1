from flask import Flask, request
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_cors import CORS
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()

DEMO_USERS = ['testuser1', 'testuser2', 'testuser3']

def create_app(config_class=Config):
    flask_app = Flask(
        __name__,
        static_folder=getattr(config_class, 'STATIC_FOLDER', None) or 'static',
        static_url_path='',
    )
    flask_app.config.from_object(config_class)

    from spill.log import configure_logging
    configure_logging(flask_app)

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS', []))

    from spill.main import main
    flask_app.register_blueprint(main)

    from spill.api.leaderboard import leaderboard
    flask_app.register_blueprint(leaderboard, url_prefix='/api')

    @flask_app.before_request
    def log_request():
        flask_app.logger.info(f"[request] {request.method} {request.path}")

    # Tables must be known to the metadata before create_all
    import spill.models  # noqa: F401

    if flask_app.config.get('AUTO_CREATE_TABLES'):
        with flask_app.app_context():
            db.create_all()

    @click.command('init-db')
    def init_db_command():
        """Creates any missing tables."""
        with flask_app.app_context():
            db.create_all()
            print('Database tables created.')

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from spill.services.auth import register
        from spill.services.leaderboard import apply_score_delta
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users with a starting blackjack score each
            for points, u in zip((300, 200, 100), DEMO_USERS):
                user = register(db.session, u, 'password', 'password')
                apply_score_delta(db.session, user.id, flask_app.config['DEFAULT_GAME'], points)

            print('Database has been reset and seeded!')

    flask_app.cli.add_command(init_db_command)
    flask_app.cli.add_command(db_reset_command)

    return flask_app


def close_store(flask_app):
    """Releases every pooled database connection."""
    with flask_app.app_context():
        db.session.remove()
        db.engine.dispose()
        flask_app.logger.info('[success] Database connection closed')
