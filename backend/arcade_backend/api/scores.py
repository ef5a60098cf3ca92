from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user

from arcade_backend.api.validation import Fields
from arcade_backend.models import DIFFICULTIES
from arcade_backend.services.scores.log import (
    best_per_difficulty,
    delete_score,
    get_owned_score,
    score_history,
    submit_score,
)

scores = Blueprint('scores', __name__)


@scores.route('', methods=['GET'])
@login_required
def index():
    page = request.args.get('page', 1, type=int)
    per_page = int(current_app.config.get('SCORES_PER_PAGE', 20))
    pagination = score_history(current_user.id, max(page, 1), per_page)
    return jsonify({
        'data': [s.to_dict() for s in pagination.items],
        'current_page': pagination.page,
        'per_page': pagination.per_page,
        'total': pagination.total,
        'last_page': pagination.pages,
    })


@scores.route('', methods=['POST'])
@login_required
def store():
    fields = Fields(request.get_json(silent=True))
    score = fields.integer('score', minimum=0)
    level = fields.integer('level', minimum=1)
    duration = fields.integer('duration_seconds', minimum=0)
    difficulty = fields.choice('difficulty', DIFFICULTIES)
    stats = fields.mapping('stats')
    fields.check()

    entry = submit_score(current_user.id, score, level, duration, difficulty, stats)
    return jsonify(entry.to_dict(include_user=True)), 201


@scores.route('/best', methods=['GET'])
@login_required
def best():
    return jsonify(best_per_difficulty(current_user.id))


@scores.route('/<int:score_id>', methods=['GET'])
@login_required
def show(score_id):
    entry = get_owned_score(current_user.id, score_id)
    return jsonify({'success': True, 'data': entry.to_dict(include_user=True)})


@scores.route('/<int:score_id>', methods=['DELETE'])
@login_required
def destroy(score_id):
    delete_score(current_user.id, score_id)
    return jsonify({'success': True, 'message': 'Score deleted successfully'})
