# routes/events.py
# Events and participant registrations

from flask import Blueprint, jsonify, request

from errors import Conflict, InvalidAssociation, ValidationError
from schemas import EventCreate, EventPatch, RegistrationCreate, RegistrationPatch, parse_body
from storage import get_storage, require

events_bp = Blueprint('events', __name__, url_prefix='/api')


@events_bp.route('/events', methods=['POST'])
def create_event():
    storage = get_storage()
    data = parse_body(EventCreate, request.get_json(silent=True), 'event')
    if not storage.get_user(data.organizer_id):
        raise InvalidAssociation('Organizer not found')

    event = storage.create_event(data)
    return jsonify(event.to_dict()), 201


@events_bp.route('/events', methods=['GET'])
def list_events():
    events = get_storage().get_events(
        organizer_id=request.args.get('organizer_id', type=int),
        status=request.args.get('status'),
    )
    return jsonify([e.to_dict() for e in events])


@events_bp.route('/events/<int:event_id>', methods=['GET'])
def get_event(event_id):
    event = require(get_storage().get_event(event_id), 'Event')
    return jsonify(event.to_dict())


@events_bp.route('/events/<int:event_id>', methods=['PATCH'])
def update_event(event_id):
    storage = get_storage()
    event = require(storage.get_event(event_id), 'Event')
    patch = parse_body(EventPatch, request.get_json(silent=True), 'event')

    start = patch.start_date if patch.start_date is not None else event.start_date
    end = patch.end_date if patch.end_date is not None else event.end_date
    if start > end:
        raise ValidationError('Invalid event data', details={'end_date': 'end_date must not be before start_date'})

    return jsonify(storage.update_event(event, patch).to_dict())


@events_bp.route('/events/<int:event_id>', methods=['DELETE'])
def delete_event(event_id):
    storage = get_storage()
    event = require(storage.get_event(event_id), 'Event')
    storage.delete_event(event)
    return '', 204


# --- Registrations ---

@events_bp.route('/registrations', methods=['POST'])
def create_registration():
    storage = get_storage()
    data = parse_body(RegistrationCreate, request.get_json(silent=True), 'registration')

    require(storage.get_user(data.user_id), 'User')
    event = require(storage.get_event(data.event_id), 'Event')
    if storage.get_registration_by_user_and_event(data.user_id, data.event_id):
        raise Conflict('User already registered for this event')
    if event.max_participants and storage.count_active_registrations(event.id) >= event.max_participants:
        raise Conflict('Event is full')

    registration = storage.create_registration(data)
    return jsonify(registration.to_dict()), 201


@events_bp.route('/events/<int:event_id>/registrations', methods=['GET'])
def list_event_registrations(event_id):
    storage = get_storage()
    require(storage.get_event(event_id), 'Event')
    return jsonify([r.to_dict() for r in storage.get_registrations_by_event(event_id)])


@events_bp.route('/registrations/<int:registration_id>', methods=['PATCH'])
def update_registration(registration_id):
    storage = get_storage()
    registration = require(storage.get_registration(registration_id), 'Registration')
    patch = parse_body(RegistrationPatch, request.get_json(silent=True), 'registration')
    return jsonify(storage.update_registration(registration, patch).to_dict())
