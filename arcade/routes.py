from flask import Blueprint, request, jsonify, current_app
from flask_login import current_user, login_user, logout_user, login_required
from arcade import db
from arcade.models import User

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the arcade game server!'})


@main.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True)
    if not data or 'username' not in data or 'password' not in data:
        return jsonify({'error': 'Missing username or password'}), 400

    username = str(data['username']).strip()
    if not username or len(username) > 64:
        return jsonify({'error': 'Username must be 1-64 characters'}), 400
    if User.query.filter_by(username=username).first():
        return jsonify({'error': 'Username already exists'}), 400

    user = User(username=username)
    user.set_password(str(data['password']))
    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"[auth] registered user={user.id}")

    return jsonify({'message': 'User created successfully', 'user': user.to_dict()}), 201


@main.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    user = User.query.filter_by(username=data.get('username')).first()
    if user and user.check_password(str(data.get('password') or '')):
        login_user(user, remember=True)
        return jsonify({'message': 'Logged in successfully.', 'user': user.to_dict()})
    return jsonify({'error': 'Invalid username or password'}), 401


@main.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'message': 'Logged out successfully.'})


@main.route('/me')
@login_required
def me():
    return jsonify(current_user.to_dict())
