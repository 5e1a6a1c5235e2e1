# routes/recruitment.py
# Recruiter talent pool

from flask import Blueprint, jsonify, request

from errors import Conflict
from schemas import RecruitmentProfileCreate, RecruitmentProfilePatch, parse_body
from storage import get_storage, require

recruitment_bp = Blueprint('recruitment', __name__, url_prefix='/api')


def _csv_arg(name):
    raw = request.args.get(name)
    if not raw:
        return None
    return [value.strip() for value in raw.split(',') if value.strip()]


@recruitment_bp.route('/recruitment-profiles', methods=['POST'])
def create_recruitment_profile():
    storage = get_storage()
    data = parse_body(RecruitmentProfileCreate, request.get_json(silent=True), 'profile')
    require(storage.get_user(data.user_id), 'User')
    if storage.get_recruitment_profile_by_user(data.user_id):
        raise Conflict('User already has a recruitment profile')

    profile = storage.create_recruitment_profile(data)
    return jsonify(profile.to_dict()), 201


@recruitment_bp.route('/recruitment-profiles', methods=['GET'])
def list_recruitment_profiles():
    profiles = get_storage().get_recruitment_profiles(
        skills=_csv_arg('skills'),
        job_preferences=_csv_arg('job_preferences'),
        location_preferences=_csv_arg('location_preferences'),
        work_type_preference=request.args.get('work_type_preference'),
        experience_level=request.args.get('experience_level'),
    )

    results = []
    for profile in profiles:
        data = profile.to_dict()
        data['user'] = profile.user.to_dict()
        results.append(data)
    return jsonify(results)


@recruitment_bp.route('/recruitment-profiles/<int:profile_id>', methods=['PATCH'])
def update_recruitment_profile(profile_id):
    storage = get_storage()
    profile = require(storage.get_recruitment_profile(profile_id), 'Recruitment profile')
    patch = parse_body(RecruitmentProfilePatch, request.get_json(silent=True), 'profile')
    return jsonify(storage.update_recruitment_profile(profile, patch).to_dict())
