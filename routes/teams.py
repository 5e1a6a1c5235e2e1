# routes/teams.py

from flask import Blueprint, jsonify, request

from errors import Conflict, InvalidAssociation, NotFound, ValidationError
from schemas import TeamCreate, TeamMemberCreate, TeamPatch, parse_body
from storage import get_storage, require

teams_bp = Blueprint('teams', __name__, url_prefix='/api')


@teams_bp.route('/teams', methods=['POST'])
def create_team():
    storage = get_storage()
    data = parse_body(TeamCreate, request.get_json(silent=True), 'team')

    require(storage.get_event(data.event_id), 'Event')
    require(storage.get_user(data.leader_id), 'Team leader')
    if not storage.get_registration_by_user_and_event(data.leader_id, data.event_id):
        raise InvalidAssociation('Team leader is not registered for this event')

    team = storage.create_team(data)
    return jsonify(team.to_dict()), 201


@teams_bp.route('/events/<int:event_id>/teams', methods=['GET'])
def list_event_teams(event_id):
    storage = get_storage()
    require(storage.get_event(event_id), 'Event')
    return jsonify([t.to_dict() for t in storage.get_teams_by_event(event_id)])


@teams_bp.route('/teams/<int:team_id>', methods=['GET'])
def get_team(team_id):
    team = require(get_storage().get_team(team_id), 'Team')
    return jsonify(team.to_dict())


@teams_bp.route('/teams/<int:team_id>', methods=['PATCH'])
def update_team(team_id):
    storage = get_storage()
    team = require(storage.get_team(team_id), 'Team')
    patch = parse_body(TeamPatch, request.get_json(silent=True), 'team')

    member_count = len(storage.get_team_members_by_team(team_id))
    if patch.max_members is not None and patch.max_members < member_count:
        raise ValidationError(
            'Invalid team data',
            details={'max_members': f'Team already has {member_count} members'}
        )
    return jsonify(storage.update_team(team, patch).to_dict())


@teams_bp.route('/teams/<int:team_id>/members', methods=['POST'])
def add_team_member(team_id):
    storage = get_storage()
    team = require(storage.get_team(team_id), 'Team')

    members = storage.get_team_members_by_team(team_id)
    if len(members) >= team.max_members:
        raise Conflict('Team is already full')

    data = parse_body(TeamMemberCreate, request.get_json(silent=True), 'team member')
    require(storage.get_user(data.user_id), 'User')
    if not storage.get_registration_by_user_and_event(data.user_id, team.event_id):
        raise InvalidAssociation('User is not registered for this event')
    if any(m.user_id == data.user_id for m in members):
        raise Conflict('User is already a member of this team')

    member = storage.add_team_member(team_id, data)
    return jsonify(member.to_dict()), 201


@teams_bp.route('/teams/<int:team_id>/members', methods=['GET'])
def list_team_members(team_id):
    storage = get_storage()
    require(storage.get_team(team_id), 'Team')
    return jsonify([m.to_dict() for m in storage.get_team_members_by_team(team_id)])


@teams_bp.route('/teams/<int:team_id>/members/<int:member_id>', methods=['DELETE'])
def remove_team_member(team_id, member_id):
    storage = get_storage()
    team = require(storage.get_team(team_id), 'Team')
    member = storage.get_team_member(member_id)
    if not member or member.team_id != team_id:
        raise NotFound('Team member not found')
    if member.user_id == team.leader_id:
        raise Conflict('Cannot remove team leader')

    storage.remove_team_member(member)
    return '', 204
