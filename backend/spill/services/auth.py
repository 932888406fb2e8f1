from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from spill.errors import AuthenticationError, ConflictError, NotFoundError, StoreError, ValidationError
from spill.models import User

INVALID_CREDENTIALS = 'Invalid username or password'


def register(session, username: str, password: str, confirm_password: str) -> User:
    """Hash and store a new credential.

    Uniqueness is left to the ``users.username`` constraint rather than a
    lookup beforehand, so two concurrent registrations cannot both succeed.
    """
    current_app.logger.info(f"[register] New registration attempt for user: {username}")
    if not username or not password or not confirm_password:
        current_app.logger.warning(f"[error] Registration failed: missing fields for {username}")
        raise ValidationError('All fields are required.')
    if password != confirm_password:
        current_app.logger.warning(f"[error] Registration failed: passwords do not match for {username}")
        raise ValidationError('Passwords do not match.')

    user = User(username=username)
    user.set_password(password)
    try:
        session.add(user)
        session.commit()
    except IntegrityError:
        session.rollback()
        current_app.logger.warning(f"[error] Registration failed: username already exists - {username}")
        raise ConflictError('Username already taken.')
    except SQLAlchemyError as exc:
        session.rollback()
        current_app.logger.error(f"[error] Database error during registration: {exc}")
        raise StoreError('Error creating user account.')

    current_app.logger.info(f"[success] Successfully registered new user: {username} id={user.id}")
    return user


def login(session, username: str, password: str) -> dict:
    """Verify a login attempt and return the public user fields.

    Unknown users and wrong passwords raise different errors but share one
    message, so callers cannot tell which usernames exist.
    """
    current_app.logger.info(f"[login] Attempt for user: {username}")
    if not username or not password:
        current_app.logger.warning(f"[error] Login failed: missing credentials for {username}")
        raise ValidationError('Username and password are required')

    try:
        user = session.query(User).filter_by(username=username).first()
    except SQLAlchemyError as exc:
        session.rollback()
        current_app.logger.error(f"[error] Database error during login: {exc}")
        raise StoreError()

    if user is None:
        current_app.logger.warning(f"[error] Login failed: user not found - {username}")
        raise NotFoundError(INVALID_CREDENTIALS)

    try:
        matched = user.check_password(password)
    except ValueError as exc:
        # stored hash is not a valid bcrypt digest
        current_app.logger.error(f"[error] Authentication error for {username}: {exc}")
        matched = False
    if not matched:
        current_app.logger.warning(f"[error] Login failed: invalid password for {username}")
        raise AuthenticationError(INVALID_CREDENTIALS)

    current_app.logger.info(f"[success] Login successful for user: {username}")
    return user.to_dict()
