from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user

from arcade_backend.api.validation import Fields
from arcade_backend.services.progress.reconcile import PlayerProgress
from arcade_backend.services.progress.sync import get_progress, sync_progress, update_progress
from arcade_backend.services.progress.updates import (
    FIELD_SETTERS,
    AdjustCurrency,
    AdjustLives,
    SetCurrency,
    SetLives,
    SetUnlockedLevels,
    UnlockLevel,
    field_update,
)

game_data = Blueprint('game_data', __name__)


def _ok(progress, message=None):
    payload = {'success': True, 'data': progress.to_dict()}
    if message:
        payload['message'] = message
    return jsonify(payload)


@game_data.route('', methods=['GET'])
@login_required
def get_game_data():
    return _ok(get_progress(current_user.id))


@game_data.route('/sync', methods=['POST'])
@login_required
def sync():
    """Merge the device's cached progress with the stored progress.

    Counters take the larger value, unlocked levels are unioned. The merged
    snapshot is both stored and returned.
    """
    fields = Fields(request.get_json(silent=True))
    local = {
        'currency': fields.integer('currency', minimum=0),
        'lives': fields.integer('lives', minimum=0),
        'unlocked_levels': fields.integer_list('unlocked_levels', minimum=1),
        'best_score': fields.integer('best_score', minimum=0),
    }
    fields.check()
    merged = sync_progress(current_user.id, PlayerProgress.from_dict(local))
    return _ok(merged, 'Game data synced successfully')


@game_data.route('', methods=['PUT'])
@login_required
def update_game_data():
    fields = Fields(request.get_json(silent=True))
    max_lives = int(current_app.config.get('MAX_LIVES', 5))
    currency = fields.integer('currency', minimum=0, required=False)
    lives = fields.integer('lives', minimum=0, maximum=max_lives, required=False)
    levels = fields.integer_list('unlocked_levels', minimum=1, required=False)
    fields.check()

    updates = []
    if currency is not None:
        updates.append(SetCurrency(currency))
    if lives is not None:
        updates.append(SetLives(lives))
    if levels is not None:
        updates.append(SetUnlockedLevels(tuple(levels)))
    return _ok(update_progress(current_user.id, updates), 'Game data updated successfully')


@game_data.route('/field', methods=['PUT'])
@login_required
def update_field():
    fields = Fields(request.get_json(silent=True))
    field_name = fields.choice('field', tuple(FIELD_SETTERS))
    fields.check()
    if field_name == 'unlocked_levels':
        value = fields.integer_list('value', minimum=1)
    else:
        value = fields.integer('value', minimum=0)
    fields.check()

    progress = update_progress(current_user.id, [field_update(field_name, value)])
    label = field_name.replace('_', ' ').capitalize()
    return jsonify({
        'success': True,
        'message': f'{label} updated successfully',
        'data': {field_name: progress.to_dict()[field_name]},
    })


@game_data.route('/currency', methods=['POST'])
@login_required
def modify_currency():
    fields = Fields(request.get_json(silent=True))
    amount = fields.integer('amount')
    fields.check()
    progress = update_progress(current_user.id, [AdjustCurrency(amount)])
    return jsonify({'success': True, 'message': 'Currency updated successfully',
                    'data': {'currency': progress.currency}})


@game_data.route('/lives', methods=['POST'])
@login_required
def modify_lives():
    fields = Fields(request.get_json(silent=True))
    amount = fields.integer('amount')
    fields.check()
    progress = update_progress(current_user.id, [AdjustLives(amount)])
    return jsonify({'success': True, 'message': 'Lives updated successfully',
                    'data': {'lives': progress.lives}})


@game_data.route('/unlock-level', methods=['POST'])
@login_required
def unlock_level():
    fields = Fields(request.get_json(silent=True))
    level = fields.integer('level', minimum=1)
    fields.check()
    progress = update_progress(current_user.id, [UnlockLevel(level)])
    return jsonify({'success': True, 'message': 'Level unlocked successfully',
                    'data': {'unlocked_levels': list(progress.unlocked_levels)}})
