from arcade_backend import db
from arcade_backend.models import Score, User


def player_stats(user_id: int) -> dict:
    user = db.session.get(User, user_id)
    average = db.session.query(db.func.avg(Score.score)).filter(Score.user_id == user_id).scalar()
    # Competition rank on the all-time board: players strictly ahead, plus one
    ahead = User.query.filter(User.best_score > (user.best_score or 0)).count()
    return {
        'total_games': user.total_games or 0,
        'best_score': user.best_score or 0,
        'total_score': user.total_score or 0,
        'average_score': round(float(average), 2) if average is not None else 0.0,
        'rank': ahead + 1,
    }
