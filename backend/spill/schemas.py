"""Request value types, one per endpoint.

Payloads arrive either as JSON or as URL-encoded forms. Each type validates
its own fields so services never see missing or malformed input.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from spill.errors import ValidationError


def _present(value: Any) -> bool:
    return value is not None and value != ''


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def _as_int(value: Any, field: str) -> int:
    number = None
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            pass
    if number is None:
        raise ValidationError(f'{field} must be an integer')
    # Columns are 64-bit integers
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValidationError(f'{field} is out of range')
    return number


@dataclass(frozen=True)
class RegisterRequest:
    username: str
    email: str
    password: str
    confirm_password: str

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> 'RegisterRequest':
        confirm = data.get('confirm-password', data.get('confirmPassword'))
        fields = (data.get('username'), data.get('email'), data.get('password'), confirm)
        if not all(_present(f) for f in fields):
            raise ValidationError('All fields are required.')
        username, email, password, confirm = (str(f) for f in fields)
        return cls(username=username, email=email, password=password, confirm_password=confirm)


@dataclass(frozen=True)
class LoginRequest:
    username: str
    password: str

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> 'LoginRequest':
        username = data.get('username')
        password = data.get('password')
        if not (_present(username) and _present(password)):
            raise ValidationError('Username and password are required')
        return cls(username=str(username), password=str(password))


@dataclass(frozen=True)
class ScoreUpdateRequest:
    user_id: int
    game_id: str
    delta: int

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> 'ScoreUpdateRequest':
        user_id = data.get('userId')
        game_id = data.get('gameId')
        score = data.get('score')
        if not (_present(user_id) and _present(game_id) and _present(score)):
            raise ValidationError('userId, gameId and score are required')
        if not isinstance(game_id, str):
            raise ValidationError('gameId must be a string')
        return cls(
            user_id=_as_int(user_id, 'userId'),
            game_id=game_id,
            delta=_as_int(score, 'score'),
        )


@dataclass(frozen=True)
class LeaderboardQuery:
    game_id: str

    @classmethod
    def from_args(cls, args: Mapping[str, Any], default_game: Optional[str] = None) -> 'LeaderboardQuery':
        game = args.get('game') or default_game
        if not _present(game):
            raise ValidationError('game is required')
        return cls(game_id=str(game))


def payload_from(req) -> Mapping[str, Any]:
    """Body of a JSON or form-encoded request as a plain mapping."""
    data = req.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return req.form.to_dict()
