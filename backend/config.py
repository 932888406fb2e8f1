import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(BASE_DIR, 'spill.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Create missing tables on startup (no migration tooling)
    AUTO_CREATE_TABLES = os.environ.get('AUTO_CREATE_TABLES', '1') == '1'
    # bcrypt cost factor
    BCRYPT_LOG_ROUNDS = int(os.environ.get('BCRYPT_LOG_ROUNDS', '10'))
    # bcrypt truncates at 72 bytes; pre-hash so long passwords still verify exactly
    BCRYPT_HANDLE_LONG_PASSWORDS = True
    # Leaderboard shown when no ?game= is given
    DEFAULT_GAME = os.environ.get('DEFAULT_GAME', 'blackjack')
    STATIC_FOLDER = os.environ.get('STATIC_FOLDER') or os.path.join(BASE_DIR, 'public')
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000'
    ).split(',') if o.strip()]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    PORT = int(os.environ.get('PORT', '3000'))
