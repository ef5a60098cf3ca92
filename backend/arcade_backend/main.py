from flask import Blueprint, jsonify
from datetime import datetime, timezone

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the arcade game server!'})

@main.route('/api/health')
def health():
    return jsonify({
        'status': 'success',
        'message': 'API is working',
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })
