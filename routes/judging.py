# routes/judging.py
# Judges, judging criteria, score submission and judging aggregates

from flask import Blueprint, jsonify, request

import logic
from errors import NotFound
from schemas import CriterionCreate, CriterionPatch, JudgeCreate, ScoreSubmit, parse_body
from scoring import get_score_store
from storage import get_storage, require

judging_bp = Blueprint('judging', __name__, url_prefix='/api')


# --- Judges ---

@judging_bp.route('/events/<int:event_id>/judges', methods=['POST'])
def add_judge(event_id):
    storage = get_storage()
    require(storage.get_event(event_id), 'Event')
    data = parse_body(JudgeCreate, request.get_json(silent=True), 'judge')
    require(storage.get_user(data.user_id), 'User')

    judge = storage.add_judge(event_id, data)
    return jsonify(judge.to_dict()), 201


@judging_bp.route('/events/<int:event_id>/judges', methods=['GET'])
def list_judges(event_id):
    storage = get_storage()
    require(storage.get_event(event_id), 'Event')
    return jsonify([j.to_dict() for j in storage.get_judges_by_event(event_id)])


@judging_bp.route('/events/<int:event_id>/judges/<int:judge_id>', methods=['DELETE'])
def remove_judge(event_id, judge_id):
    storage = get_storage()
    require(storage.get_event(event_id), 'Event')
    judge = storage.get_judge(judge_id)
    if not judge or judge.event_id != event_id:
        raise NotFound('Judge not found for this event')

    # Scores already entered by this judge are kept
    storage.remove_judge(judge)
    return '', 204


# --- Judging criteria ---

@judging_bp.route('/events/<int:event_id>/criteria', methods=['POST'])
def add_criterion(event_id):
    storage = get_storage()
    require(storage.get_event(event_id), 'Event')
    data = parse_body(CriterionCreate, request.get_json(silent=True), 'criterion')
    criterion = storage.add_judging_criterion(event_id, data)
    return jsonify(criterion.to_dict()), 201


@judging_bp.route('/events/<int:event_id>/criteria', methods=['GET'])
def list_criteria(event_id):
    storage = get_storage()
    require(storage.get_event(event_id), 'Event')
    return jsonify([c.to_dict() for c in storage.get_judging_criteria_by_event(event_id)])


@judging_bp.route('/criteria/<int:criterion_id>', methods=['PATCH'])
def update_criterion(criterion_id):
    storage = get_storage()
    criterion = require(storage.get_judging_criterion(criterion_id), 'Criterion')
    patch = parse_body(CriterionPatch, request.get_json(silent=True), 'criterion')
    return jsonify(storage.update_judging_criterion(criterion, patch).to_dict())


@judging_bp.route('/criteria/<int:criterion_id>', methods=['DELETE'])
def delete_criterion(criterion_id):
    storage = get_storage()
    criterion = require(storage.get_judging_criterion(criterion_id), 'Criterion')
    storage.delete_judging_criterion(criterion)
    return '', 204


# --- Scores ---

@judging_bp.route('/projects/<int:project_id>/scores', methods=['POST'])
def submit_score(project_id):
    require(get_storage().get_project(project_id), 'Project')
    data = parse_body(ScoreSubmit, request.get_json(silent=True), 'score')
    result = get_score_store().submit_score(
        project_id, data.judge_id, data.criterion_id, data.score, data.comment
    )
    return jsonify(result.entry.to_dict()), 201 if result.created else 200


@judging_bp.route('/projects/<int:project_id>/scores', methods=['GET'])
def list_project_scores(project_id):
    scores = get_score_store().list_scores_for_project(project_id)
    return jsonify([s.to_dict() for s in scores])


@judging_bp.route('/judges/<int:judge_id>/scores', methods=['GET'])
def list_judge_scores(judge_id):
    scores = get_score_store().list_scores_for_judge(judge_id)
    return jsonify([s.to_dict() for s in scores])


# --- Aggregates ---

@judging_bp.route('/projects/<int:project_id>/summary', methods=['GET'])
def project_summary(project_id):
    return jsonify(logic.project_summary(get_storage(), project_id))


@judging_bp.route('/events/<int:event_id>/judging-progress', methods=['GET'])
def judging_progress(event_id):
    return jsonify(logic.judging_progress(get_storage(), event_id))


@judging_bp.route('/judges/<int:judge_id>/progress', methods=['GET'])
def judge_progress(judge_id):
    return jsonify(logic.judge_progress(get_storage(), judge_id))


@judging_bp.route('/events/<int:event_id>/results', methods=['GET'])
def event_results(event_id):
    return jsonify(logic.event_results(get_storage(), event_id))
