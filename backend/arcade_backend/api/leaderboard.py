from flask import Blueprint, jsonify, request, current_app
from datetime import datetime, timezone

from arcade_backend.services import InvalidWindow
from arcade_backend.services.leaderboard.ranking import AllTime, ByDifficulty, Windowed, high_scores, rank
from arcade_backend.services.leaderboard.windows import DAY, MONTH, WEEK, resolve_timezone

leaderboard = Blueprint('leaderboard', __name__)

SCOPES = {
    'global': AllTime,
    'daily': lambda: Windowed(DAY),
    'weekly': lambda: Windowed(WEEK),
    'monthly': lambda: Windowed(MONTH),
}


def _now():
    # Tests pin the clock through LEADERBOARD_CLOCK
    clock = current_app.config.get('LEADERBOARD_CLOCK')
    return clock() if clock else datetime.now(timezone.utc)


def _rank(scope):
    cfg = current_app.config
    return rank(
        scope,
        now=_now(),
        tz=resolve_timezone(cfg.get('LEADERBOARD_TIMEZONE', 'UTC')),
        week_start=int(cfg.get('LEADERBOARD_WEEK_START', 0)),
        limit=int(cfg.get('LEADERBOARD_LIMIT', 100)),
    )


@leaderboard.route('/leaderboard/<string:scope_name>', methods=['GET'])
def by_scope(scope_name):
    factory = SCOPES.get(scope_name.lower())
    if factory is None:
        raise InvalidWindow(f'Unknown leaderboard: {scope_name}')
    return jsonify(_rank(factory()))


@leaderboard.route('/leaderboard/difficulty/<string:difficulty>', methods=['GET'])
def by_difficulty(difficulty):
    return jsonify(_rank(ByDifficulty(difficulty)))


@leaderboard.route('/high-scores', methods=['GET'])
def top_entries():
    cfg = current_app.config
    limit = request.args.get('limit', int(cfg.get('HIGH_SCORES_DEFAULT_LIMIT', 10)), type=int)
    limit = max(1, min(limit, int(cfg.get('HIGH_SCORES_MAX_LIMIT', 100))))
    difficulty = request.args.get('difficulty') or None
    return jsonify({'success': True, 'data': high_scores(difficulty, limit)})
