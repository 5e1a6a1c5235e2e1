# routes/users.py
# User profiles. There is no login: identity is whatever the client sends.

from flask import Blueprint, jsonify, request

from errors import Conflict
from schemas import UserCreate, UserPatch, parse_body
from storage import get_storage, require

users_bp = Blueprint('users', __name__, url_prefix='/api')


@users_bp.route('/users', methods=['POST'])
def create_user():
    storage = get_storage()
    data = parse_body(UserCreate, request.get_json(silent=True), 'user')
    if storage.get_user_by_username(data.username):
        raise Conflict('Username already taken')
    if storage.get_user_by_email(data.email):
        raise Conflict('Email already registered')

    user = storage.create_user(data)
    return jsonify(user.to_dict()), 201


@users_bp.route('/users/<int:user_id>', methods=['GET'])
def get_user(user_id):
    user = require(get_storage().get_user(user_id), 'User')
    return jsonify(user.to_dict())


@users_bp.route('/users/<int:user_id>', methods=['PATCH'])
def update_user(user_id):
    storage = get_storage()
    user = require(storage.get_user(user_id), 'User')
    patch = parse_body(UserPatch, request.get_json(silent=True), 'user')
    return jsonify(storage.update_user(user, patch).to_dict())


@users_bp.route('/users/<int:user_id>/registrations', methods=['GET'])
def list_user_registrations(user_id):
    storage = get_storage()
    require(storage.get_user(user_id), 'User')
    return jsonify([r.to_dict() for r in storage.get_registrations_by_user(user_id)])


@users_bp.route('/users/<int:user_id>/teams', methods=['GET'])
def list_user_teams(user_id):
    storage = get_storage()
    require(storage.get_user(user_id), 'User')
    return jsonify([t.to_dict() for t in storage.get_teams_by_user(user_id)])


@users_bp.route('/users/<int:user_id>/recruitment-profile', methods=['GET'])
def get_user_recruitment_profile(user_id):
    storage = get_storage()
    require(storage.get_user(user_id), 'User')
    profile = require(storage.get_recruitment_profile_by_user(user_id), 'Recruitment profile')
    return jsonify(profile.to_dict())
