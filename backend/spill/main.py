from flask import Blueprint, current_app, jsonify, request, send_from_directory
from spill import db
from spill.errors import ServiceError
from spill.schemas import LoginRequest, RegisterRequest, payload_from
from spill.services import auth

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return send_from_directory(current_app.static_folder, 'index.html')


@main.route('/login', methods=['GET'])
def login_page():
    return send_from_directory(current_app.static_folder, 'login.html')


@main.route('/register', methods=['GET'])
def register_page():
    return send_from_directory(current_app.static_folder, 'register.html')


# Both auth endpoints answer 200 and report failure through the success flag
@main.route('/login', methods=['POST'])
def login():
    try:
        data = LoginRequest.from_payload(payload_from(request))
        user = auth.login(db.session, data.username, data.password)
    except ServiceError as exc:
        return jsonify({'success': False, 'message': exc.message})
    return jsonify({
        'success': True,
        'message': 'Login successful',
        'userId': user['id'],
        'username': user['username'],
    })


@main.route('/register', methods=['POST'])
def register():
    try:
        data = RegisterRequest.from_payload(payload_from(request))
        user = auth.register(db.session, data.username, data.password, data.confirm_password)
    except ServiceError as exc:
        return jsonify({'success': False, 'message': exc.message})
    return jsonify({
        'success': True,
        'message': f'Registration successful! Welcome, {user.username}!',
    })
