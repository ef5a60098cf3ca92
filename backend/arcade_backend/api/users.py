from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from arcade_backend import db
from arcade_backend.api.validation import Fields
from arcade_backend.models import User
from arcade_backend.services.scores.stats import player_stats

users = Blueprint('users', __name__)


@users.route('', methods=['GET'])
@login_required
def profile():
    return jsonify(current_user.to_dict())


@users.route('', methods=['PUT'])
@login_required
def update_profile():
    fields = Fields(request.get_json(silent=True))
    username = fields.string('username', max_length=64, required=False)
    email = fields.string('email', max_length=255, required=False)
    if username and User.query.filter(User.username == username, User.id != current_user.id).first():
        fields.errors.setdefault('username', []).append('The username has already been taken.')
    if email and User.query.filter(User.email == email, User.id != current_user.id).first():
        fields.errors.setdefault('email', []).append('The email has already been taken.')
    fields.check()

    try:
        if username:
            current_user.username = username
        if email:
            current_user.email = email
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return jsonify(current_user.to_dict())


@users.route('/stats', methods=['GET'])
@login_required
def stats():
    return jsonify(player_stats(current_user.id))
