import threading
from typing import List, Optional

from flask import current_app
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import contains_eager

from spill.errors import NotFoundError, StoreError, ValidationError
from spill.models import ScoreRecord, User

_UPSERT_DIALECTS = {
    'sqlite': sqlite_insert,
    'postgresql': pg_insert,
}

# Fallback for dialects without INSERT .. ON CONFLICT. A fixed stripe of locks;
# a given (user_id, game_id) always maps to the same one.
KEY_LOCK_STRIPES = 64
_key_locks = tuple(threading.Lock() for _ in range(KEY_LOCK_STRIPES))


def _key_lock(user_id: int, game_id: str) -> threading.Lock:
    return _key_locks[hash((user_id, game_id)) % KEY_LOCK_STRIPES]


def get_ranking(session, game_id: str) -> List[dict]:
    """Scores for one game, highest first.

    Equal scores are ordered by user id ascending.
    """
    try:
        records = (
            session.query(ScoreRecord)
            .join(ScoreRecord.user)
            .options(contains_eager(ScoreRecord.user))
            .filter(ScoreRecord.game_id == game_id)
            .order_by(ScoreRecord.score.desc(), User.id.asc())
            .all()
        )
    except SQLAlchemyError as exc:
        session.rollback()
        current_app.logger.error(f"[error] Database error reading leaderboard game={game_id}: {exc}")
        raise StoreError()
    return [r.to_dict() for r in records]


def _upsert_statement(dialect_name: str, user_id: int, game_id: str, delta: int):
    insert = _UPSERT_DIALECTS.get(dialect_name)
    if insert is None:
        return None
    table = ScoreRecord.__table__
    stmt = insert(table).values(user_id=user_id, game_id=game_id, score=delta)
    return stmt.on_conflict_do_update(
        index_elements=[table.c.user_id, table.c.game_id],
        set_={'score': table.c.score + stmt.excluded.score},
    )


def _locked_increment(session, user_id: int, game_id: str, delta: int) -> None:
    record = (
        session.query(ScoreRecord)
        .filter_by(user_id=user_id, game_id=game_id)
        .with_for_update()
        .first()
    )
    if record:
        record.score = ScoreRecord.score + delta
    else:
        session.add(ScoreRecord(user_id=user_id, game_id=game_id, score=delta))
    session.flush()


def _current_score(session, user_id: int, game_id: str) -> Optional[int]:
    return (
        session.query(ScoreRecord.score)
        .filter_by(user_id=user_id, game_id=game_id)
        .scalar()
    )


def _checked_score(session, user_id: int, game_id: str) -> int:
    score = _current_score(session, user_id, game_id)
    # SQLite promotes an overflowing integer sum to REAL instead of failing
    if not isinstance(score, int):
        raise OverflowError(f'score {score!r} is outside the integer range')
    return score


def apply_score_delta(session, user_id: int, game_id: str, delta: int) -> int:
    """Add ``delta`` to the user's score for ``game_id``, creating the row at ``delta``.

    The check for an existing row and the write happen in one
    ``INSERT .. ON CONFLICT DO UPDATE`` statement with the sum computed by the
    database, so concurrent calls for the same key never lose an increment.
    Returns the score after this call's increment. A user id, delta or total
    that does not fit a 64-bit integer leaves the score untouched and raises
    ``ValidationError``.
    """
    current_app.logger.info(f"[score] Update request user={user_id} game={game_id} delta={delta}")
    try:
        user = session.get(User, user_id)
    except OverflowError:
        session.rollback()
        current_app.logger.warning(f"[error] Score update rejected: user id out of range user={user_id}")
        raise ValidationError('userId is out of range')
    except SQLAlchemyError as exc:
        session.rollback()
        current_app.logger.error(f"[error] Database error looking up user={user_id}: {exc}")
        raise StoreError()
    if user is None:
        current_app.logger.warning(f"[error] Score update rejected: unknown user={user_id}")
        raise NotFoundError('User not found')

    try:
        stmt = _upsert_statement(session.get_bind().dialect.name, user_id, game_id, delta)
        if stmt is not None:
            session.execute(stmt)
            new_score = _checked_score(session, user_id, game_id)
            session.commit()
        else:
            with _key_lock(user_id, game_id):
                _locked_increment(session, user_id, game_id, delta)
                new_score = _checked_score(session, user_id, game_id)
                session.commit()
    except OverflowError as exc:
        session.rollback()
        current_app.logger.warning(f"[error] Score update rejected user={user_id} game={game_id}: {exc}")
        raise ValidationError('Score is out of range')
    except SQLAlchemyError as exc:
        session.rollback()
        current_app.logger.error(f"[error] Database error updating score user={user_id} game={game_id}: {exc}")
        raise StoreError('Error updating score')

    current_app.logger.info(f"[success] Score for user={user_id} game={game_id} is now {new_score}")
    return new_score
