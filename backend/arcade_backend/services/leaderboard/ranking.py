from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import List, Optional

from flask import current_app

from arcade_backend import db
from arcade_backend.models import Score, User, DIFFICULTIES
from arcade_backend.services import InvalidDifficulty, InvalidWindow
from .windows import WINDOWS, window_bounds

PLACEHOLDER_USERNAME = '[deleted]'
DEFAULT_LIMIT = 100


@dataclass(frozen=True)
class AllTime:
    pass


@dataclass(frozen=True)
class Windowed:
    window: str

    def __post_init__(self):
        if self.window not in WINDOWS:
            raise InvalidWindow(f"Unknown leaderboard window: {self.window}")


@dataclass(frozen=True)
class ByDifficulty:
    difficulty: str

    def __post_init__(self):
        normalized = (self.difficulty or '').lower()
        if normalized not in DIFFICULTIES:
            raise InvalidDifficulty()
        object.__setattr__(self, 'difficulty', normalized)


def _with_ranks(rows: List[dict]) -> List[dict]:
    for position, row in enumerate(rows, start=1):
        row['rank'] = position
    return rows


def _usernames(user_ids) -> dict:
    if not user_ids:
        return {}
    found = db.session.query(User.id, User.username).filter(User.id.in_(user_ids)).all()
    names = {user_id: username for user_id, username in found}
    missing = set(user_ids) - set(names)
    if missing:
        current_app.logger.warning(f"[leaderboard] unresolved users={sorted(missing)} shown as placeholder")
    return names


def all_time(limit: int = DEFAULT_LIMIT) -> List[dict]:
    users = (
        User.query.filter(User.best_score > 0)
        .order_by(User.best_score.desc(), User.id.asc())
        .limit(limit)
        .all()
    )
    return _with_ranks([{'username': u.username, 'score': u.best_score} for u in users])


def best_per_user(filters, limit: int = DEFAULT_LIMIT) -> List[dict]:
    """Each user's maximum score among rows matching ``filters``, best first.

    Ties on score rank the lower user id first so repeated reads agree.
    """
    best = db.func.max(Score.score).label('best')
    grouped = (
        db.session.query(Score.user_id, best)
        .filter(*filters)
        .group_by(Score.user_id)
        .order_by(best.desc(), Score.user_id.asc())
        .limit(limit)
        .all()
    )
    names = _usernames([user_id for user_id, _ in grouped])
    return _with_ranks([
        {'username': names.get(user_id, PLACEHOLDER_USERNAME), 'score': score}
        for user_id, score in grouped
    ])


def windowed(window: str, now: datetime, tz: tzinfo, week_start: int = 0,
             limit: int = DEFAULT_LIMIT) -> List[dict]:
    start, end = window_bounds(window, now, tz, week_start)
    return best_per_user([Score.created_at >= start, Score.created_at < end], limit)


def by_difficulty(difficulty: str, limit: int = DEFAULT_LIMIT) -> List[dict]:
    scope = ByDifficulty(difficulty)
    return best_per_user([Score.difficulty == scope.difficulty], limit)


def rank(scope, now: Optional[datetime] = None, tz: tzinfo = timezone.utc,
         week_start: int = 0, limit: int = DEFAULT_LIMIT) -> List[dict]:
    if isinstance(scope, AllTime):
        return all_time(limit)
    if isinstance(scope, Windowed):
        return windowed(scope.window, now or datetime.now(timezone.utc), tz, week_start, limit)
    if isinstance(scope, ByDifficulty):
        return by_difficulty(scope.difficulty, limit)
    raise TypeError(f'Unsupported leaderboard scope: {scope!r}')


def high_scores(difficulty: Optional[str] = None, limit: int = 10) -> List[dict]:
    """Top individual entries, not grouped by user; a player may appear more than once."""
    query = Score.query
    if difficulty:
        query = query.filter(Score.difficulty == ByDifficulty(difficulty).difficulty)
    entries = query.order_by(Score.score.desc(), Score.created_at.asc(), Score.id.asc()).limit(limit).all()
    names = _usernames(sorted({e.user_id for e in entries}))
    return _with_ranks([
        {
            'username': names.get(e.user_id, PLACEHOLDER_USERNAME),
            'score': e.score,
            'level': e.level,
            'difficulty': e.difficulty,
            'duration_seconds': e.duration_seconds,
            'created_at': e.to_dict()['created_at'],
        }
        for e in entries
    ])

