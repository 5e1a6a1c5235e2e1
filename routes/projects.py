# routes/projects.py

from flask import Blueprint, jsonify, request

from errors import Conflict, InvalidAssociation
from schemas import ProjectCreate, ProjectPatch, parse_body
from storage import get_storage, require

projects_bp = Blueprint('projects', __name__, url_prefix='/api')


@projects_bp.route('/projects', methods=['POST'])
def create_project():
    storage = get_storage()
    data = parse_body(ProjectCreate, request.get_json(silent=True), 'project')

    require(storage.get_event(data.event_id), 'Event')
    team = require(storage.get_team(data.team_id), 'Team')
    if team.event_id != data.event_id:
        raise InvalidAssociation('Team is not part of this event')
    if storage.get_projects_by_team(team.id):
        raise Conflict('Team already has a project for this event')

    project = storage.create_project(data)
    return jsonify(project.to_dict()), 201


@projects_bp.route('/events/<int:event_id>/projects', methods=['GET'])
def list_event_projects(event_id):
    storage = get_storage()
    require(storage.get_event(event_id), 'Event')
    return jsonify([p.to_dict() for p in storage.get_projects_by_event(event_id)])


@projects_bp.route('/projects/<int:project_id>', methods=['GET'])
def get_project(project_id):
    project = require(get_storage().get_project(project_id), 'Project')
    return jsonify(project.to_dict())


@projects_bp.route('/projects/<int:project_id>', methods=['PATCH'])
def update_project(project_id):
    # Team edits and organizer status changes both go through here
    storage = get_storage()
    project = require(storage.get_project(project_id), 'Project')
    patch = parse_body(ProjectPatch, request.get_json(silent=True), 'project')
    return jsonify(storage.update_project(project, patch).to_dict())


@projects_bp.route('/projects/<int:project_id>', methods=['DELETE'])
def delete_project(project_id):
    storage = get_storage()
    project = require(storage.get_project(project_id), 'Project')
    storage.delete_project(project)
    return '', 204
