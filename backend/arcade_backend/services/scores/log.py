from flask import current_app

from arcade_backend import db
from arcade_backend.models import Score, User, DIFFICULTIES
from arcade_backend.services import ScoreNotFound, ScoreOwnershipError


def submit_score(user_id: int, score: int, level: int, duration_seconds: int,
                 difficulty: str, stats=None) -> Score:
    """Append a play session and update the owner's totals in one transaction.

    Totals are incremented and best_score ratchets upward only. Either the
    new row and the totals are committed together or neither is.
    """
    try:
        user = User.query.filter_by(id=user_id).with_for_update().one()
        entry = Score(
            user_id=user.id,
            score=score,
            level=level,
            duration_seconds=duration_seconds,
            difficulty=difficulty,
        )
        entry.stats = stats
        db.session.add(entry)
        user.total_games = (user.total_games or 0) + 1
        user.total_score = (user.total_score or 0) + score
        previous_best = user.best_score or 0
        if score > previous_best:
            user.best_score = score
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info(
        f"[score] user={user_id} score_id={entry.id} score={score} difficulty={difficulty} "
        f"best={previous_best}->{user.best_score}"
    )
    return entry


def get_owned_score(user_id: int, score_id: int) -> Score:
    entry = db.session.get(Score, score_id)
    if entry is None:
        raise ScoreNotFound()
    if entry.user_id != user_id:
        raise ScoreOwnershipError()
    return entry


def delete_score(user_id: int, score_id: int) -> None:
    """Remove one of the caller's own entries. Running totals are left as they are."""
    entry = get_owned_score(user_id, score_id)
    try:
        db.session.delete(entry)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info(f"[score-delete] user={user_id} score_id={score_id}")


def score_history(user_id: int, page: int, per_page: int):
    return (
        Score.query.filter_by(user_id=user_id)
        .order_by(Score.score.desc(), Score.created_at.desc(), Score.id.desc())
        .paginate(page=page, per_page=per_page, error_out=False)
    )


def best_per_difficulty(user_id: int):
    """The caller's top entry for each difficulty they have played, best first."""
    best = []
    for difficulty in DIFFICULTIES:
        entry = (
            Score.query.filter_by(user_id=user_id, difficulty=difficulty)
            .order_by(Score.score.desc(), Score.created_at.asc(), Score.id.asc())
            .first()
        )
        if entry is not None:
            best.append({
                'difficulty': difficulty,
                'best_score': entry.score,
                'level': entry.level,
                'duration_seconds': entry.duration_seconds,
                'created_at': entry.to_dict()['created_at'],
            })
    best.sort(key=lambda row: -row['best_score'])
    return best
