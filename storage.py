# storage.py
# CRUD collaborator over a SQLAlchemy session. Scoring and aggregation code
# receives a Storage instance instead of touching the session directly.

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from errors import Conflict, NotFound
from extensions import db
from models import (
    User, Event, Registration, Team, TeamMember, Project, Judge,
    JudgingCriterion, ProjectScore, RecruitmentProfile
)

logger = logging.getLogger(__name__)


def require(record, what):
    if record is None:
        raise NotFound(f'{what} not found')
    return record


def get_storage():
    return Storage(db.session)


class Storage:
    def __init__(self, session):
        self.session = session

    def _commit(self, conflict_message):
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise Conflict(conflict_message) from exc

    def _add(self, record, conflict_message):
        self.session.add(record)
        self._commit(conflict_message)
        return record

    def _apply(self, record, patch, conflict_message):
        for field, value in patch.changes().items():
            setattr(record, field, value)
        self._commit(conflict_message)
        return record

    # --- Users ---

    def create_user(self, data):
        return self._add(User(**data.model_dump()), 'Username or email already taken')

    def get_user(self, user_id):
        return self.session.get(User, user_id)

    def get_user_by_username(self, username):
        return self.session.query(User).filter_by(username=username).first()

    def get_user_by_email(self, email):
        return self.session.query(User).filter_by(email=email).first()

    def update_user(self, user, patch):
        return self._apply(user, patch, 'Could not update user')

    # --- Events ---

    def create_event(self, data):
        return self._add(Event(**data.model_dump()), 'Could not create event')

    def get_event(self, event_id):
        return self.session.get(Event, event_id)

    def get_events(self, organizer_id=None, status=None):
        query = self.session.query(Event)
        if organizer_id is not None:
            query = query.filter(Event.organizer_id == organizer_id)
        if status:
            query = query.filter(Event.status == status)
        return query.order_by(Event.start_date, Event.id).all()

    def update_event(self, event, patch):
        return self._apply(event, patch, 'Could not update event')

    def delete_event(self, event):
        """Remove an event together with everything scoped to it."""
        event_id = event.id
        project_ids = [p.id for p in self.get_projects_by_event(event_id)]
        if project_ids:
            self.session.query(ProjectScore).filter(
                ProjectScore.project_id.in_(project_ids)
            ).delete(synchronize_session=False)
        self.session.query(Project).filter_by(event_id=event_id).delete(synchronize_session=False)

        team_ids = [t.id for t in self.get_teams_by_event(event_id)]
        if team_ids:
            self.session.query(TeamMember).filter(
                TeamMember.team_id.in_(team_ids)
            ).delete(synchronize_session=False)
        self.session.query(Team).filter_by(event_id=event_id).delete(synchronize_session=False)
        self.session.query(Judge).filter_by(event_id=event_id).delete(synchronize_session=False)
        self.session.query(JudgingCriterion).filter_by(event_id=event_id).delete(synchronize_session=False)
        self.session.query(Registration).filter_by(event_id=event_id).delete(synchronize_session=False)
        self.session.delete(event)
        self._commit('Could not delete event')
        logger.info(f"Event {event_id} deleted with {len(project_ids)} projects")

    # --- Registrations ---

    def create_registration(self, data):
        return self._add(Registration(**data.model_dump()), 'User already registered for this event')

    def get_registration(self, registration_id):
        return self.session.get(Registration, registration_id)

    def get_registration_by_user_and_event(self, user_id, event_id):
        return self.session.query(Registration).filter_by(user_id=user_id, event_id=event_id).first()

    def get_registrations_by_event(self, event_id):
        return self.session.query(Registration).filter_by(event_id=event_id).order_by(Registration.id).all()

    def get_registrations_by_user(self, user_id):
        return self.session.query(Registration).filter_by(user_id=user_id).order_by(Registration.id).all()

    def count_active_registrations(self, event_id):
        return self.session.query(Registration).filter(
            Registration.event_id == event_id,
            Registration.status.in_(['pending', 'approved'])
        ).count()

    def update_registration(self, registration, patch):
        return self._apply(registration, patch, 'Could not update registration')

    # --- Teams ---

    def create_team(self, data):
        team = Team(**data.model_dump())
        self.session.add(team)
        self.session.flush()
        # The leader is always the first member of the team
        self.session.add(TeamMember(team_id=team.id, user_id=team.leader_id, role='Leader'))
        self._commit('Could not create team')
        return team

    def get_team(self, team_id):
        return self.session.get(Team, team_id)

    def get_teams_by_event(self, event_id):
        return self.session.query(Team).filter_by(event_id=event_id).order_by(Team.id).all()

    def get_teams_by_user(self, user_id):
        member_team_ids = self.session.query(TeamMember.team_id).filter_by(user_id=user_id)
        return self.session.query(Team).filter(
            or_(Team.id.in_(member_team_ids), Team.leader_id == user_id)
        ).order_by(Team.id).all()

    def update_team(self, team, patch):
        return self._apply(team, patch, 'Could not update team')

    # --- Team members ---

    def add_team_member(self, team_id, data):
        member = TeamMember(team_id=team_id, **data.model_dump())
        return self._add(member, 'User is already a member of this team')

    def get_team_member(self, member_id):
        return self.session.get(TeamMember, member_id)

    def get_team_members_by_team(self, team_id):
        return self.session.query(TeamMember).filter_by(team_id=team_id).order_by(TeamMember.id).all()

    def remove_team_member(self, member):
        self.session.delete(member)
        self._commit('Could not remove team member')

    # --- Projects ---

    def create_project(self, data):
        return self._add(Project(**data.model_dump()), 'Team already has a project for this event')

    def get_project(self, project_id):
        return self.session.get(Project, project_id)

    def get_projects_by_event(self, event_id):
        return self.session.query(Project).filter_by(event_id=event_id).order_by(Project.id).all()

    def get_projects_by_team(self, team_id):
        return self.session.query(Project).filter_by(team_id=team_id).order_by(Project.id).all()

    def update_project(self, project, patch):
        return self._apply(project, patch, 'Could not update project')

    def delete_project(self, project):
        project_id, score_count = project.id, len(project.scores)
        self.session.delete(project)
        self._commit('Could not delete project')
        logger.info(f"Project {project_id} deleted along with {score_count} scores")

    # --- Judges ---

    def add_judge(self, event_id, data):
        judge = Judge(event_id=event_id, **data.model_dump())
        return self._add(judge, 'User is already a judge for this event')

    def get_judge(self, judge_id):
        return self.session.get(Judge, judge_id)

    def get_judge_by_user_and_event(self, user_id, event_id):
        return self.session.query(Judge).filter_by(user_id=user_id, event_id=event_id).first()

    def get_judges_by_event(self, event_id):
        return self.session.query(Judge).filter_by(event_id=event_id).order_by(Judge.id).all()

    def remove_judge(self, judge):
        self.session.delete(judge)
        self._commit('Could not remove judge')

    # --- Judging criteria ---

    def add_judging_criterion(self, event_id, data):
        criterion = JudgingCriterion(event_id=event_id, **data.model_dump())
        return self._add(criterion, 'Could not add judging criterion')

    def get_judging_criterion(self, criterion_id):
        return self.session.get(JudgingCriterion, criterion_id)

    def get_judging_criteria_by_event(self, event_id):
        return self.session.query(JudgingCriterion).filter_by(event_id=event_id).order_by(JudgingCriterion.id).all()

    def update_judging_criterion(self, criterion, patch):
        return self._apply(criterion, patch, 'Could not update judging criterion')

    def delete_judging_criterion(self, criterion):
        scored = self.session.query(ProjectScore).filter_by(criterion_id=criterion.id).count()
        if scored:
            raise Conflict(
                f'Criterion "{criterion.name}" already has {scored} scores and cannot be deleted',
                details={'score_count': scored}
            )
        self.session.delete(criterion)
        self._commit('Could not delete judging criterion')

    # --- Project scores ---

    def add_project_score(self, project_id, judge_id, criterion_id, score, comment=None):
        entry = ProjectScore(
            project_id=project_id, judge_id=judge_id, criterion_id=criterion_id,
            score=score, comment=comment
        )
        return self._add(entry, 'A score for this project, judge and criterion already exists')

    def get_project_score(self, score_id):
        return self.session.get(ProjectScore, score_id)

    def find_project_score(self, project_id, judge_id, criterion_id):
        return self.session.query(ProjectScore).filter_by(
            project_id=project_id, judge_id=judge_id, criterion_id=criterion_id
        ).first()

    def update_project_score(self, score_id, patch):
        entry = require(self.get_project_score(score_id), 'Score')
        return self._apply(entry, patch, 'Could not update score')

    def get_project_scores_by_project(self, project_id):
        return self.session.query(ProjectScore).filter_by(project_id=project_id).order_by(ProjectScore.id).all()

    def get_project_scores_by_judge(self, judge_id):
        return self.session.query(ProjectScore).filter_by(judge_id=judge_id).order_by(ProjectScore.id).all()

    def get_project_scores_by_event(self, event_id):
        return self.session.query(ProjectScore).join(
            Project, Project.id == ProjectScore.project_id
        ).filter(Project.event_id == event_id).order_by(ProjectScore.id).all()

    # --- Recruitment profiles ---

    def create_recruitment_profile(self, data):
        profile = RecruitmentProfile(**data.model_dump())
        return self._add(profile, 'User already has a recruitment profile')

    def get_recruitment_profile(self, profile_id):
        return self.session.get(RecruitmentProfile, profile_id)

    def get_recruitment_profile_by_user(self, user_id):
        return self.session.query(RecruitmentProfile).filter_by(user_id=user_id).first()

    def get_recruitment_profiles(self, skills=None, job_preferences=None, location_preferences=None,
                                 work_type_preference=None, experience_level=None):
        """Searchable profiles matching every given filter.

        List filters match when any value overlaps; scalar filters match exactly.
        """
        query = self.session.query(RecruitmentProfile).filter(RecruitmentProfile.is_searchable.is_(True))
        if work_type_preference:
            query = query.filter(RecruitmentProfile.work_type_preference == work_type_preference)
        if experience_level:
            query = query.filter(RecruitmentProfile.experience_level == experience_level)
        profiles = query.order_by(RecruitmentProfile.id).all()

        def overlaps(values, wanted):
            return bool(set(values or []) & set(wanted))

        if skills:
            profiles = [p for p in profiles if overlaps(p.user.skills, skills)]
        if job_preferences:
            profiles = [p for p in profiles if overlaps(p.job_preferences, job_preferences)]
        if location_preferences:
            profiles = [p for p in profiles if overlaps(p.location_preferences, location_preferences)]
        return profiles

    def update_recruitment_profile(self, profile, patch):
        return self._apply(profile, patch, 'Could not update recruitment profile')
