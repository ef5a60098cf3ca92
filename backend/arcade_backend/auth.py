from flask import Blueprint, request, jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user
from .models import db, User
from .api.validation import Fields

auth = Blueprint('auth', __name__)

@auth.route('/register', methods=['POST'])
def register():
    fields = Fields(request.get_json(silent=True))
    username = fields.string('username', max_length=64)
    password = fields.string('password', min_length=6, max_length=128)
    email = fields.string('email', max_length=255, required=False)
    fields.check()

    if User.query.filter_by(username=username).first():
        return jsonify({"success": False, "message": "Username already exists"}), 400
    if email and User.query.filter_by(email=email).first():
        return jsonify({"success": False, "message": "Email already registered"}), 400

    new_user = User(username=username, email=email)
    new_user.set_password(password)
    db.session.add(new_user)
    db.session.commit()
    login_user(new_user)
    current_app.logger.info(f"[register] user={new_user.id} username={username}")
    return jsonify({"success": True, "user": new_user.to_dict()}), 201

@auth.route('/login', methods=['POST'])
def login():
    fields = Fields(request.get_json(silent=True))
    username = fields.string('username', max_length=64)
    password = fields.string('password', max_length=128)
    fields.check()

    user = User.query.filter_by(username=username).first()
    if user and user.check_password(password):
        login_user(user, remember=True)
        return jsonify({"success": True, "user": user.to_dict()})
    return jsonify({"success": False, "message": "Invalid credentials"}), 401

@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({"success": True})

@auth.route('/profile', methods=['GET'])
@login_required
def profile():
    return jsonify({"success": True, "user": current_user.to_dict()})
