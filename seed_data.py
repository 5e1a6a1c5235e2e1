# seed_data.py
# Fills the database with a small demo hackathon: run directly or via `flask seed-data`

import logging
from datetime import datetime

from extensions import db
from models import (
    User, Event, Registration, Team, TeamMember, Project, Judge,
    JudgingCriterion, ProjectScore, RecruitmentProfile
)
from schemas import (
    CriterionCreate, EventCreate, JudgeCreate, ProjectCreate, RecruitmentProfileCreate,
    RegistrationCreate, TeamCreate, TeamMemberCreate, UserCreate
)
from scoring import ScoreStore
from storage import Storage

logger = logging.getLogger(__name__)


def clear_data(session):
    # Reverse dependency order
    for model in (ProjectScore, Project, Judge, JudgingCriterion, TeamMember, Team,
                  Registration, RecruitmentProfile, Event, User):
        session.query(model).delete()
    session.commit()


def seed(session=None):
    session = session or db.session
    storage = Storage(session)
    store = ScoreStore(storage)

    logger.info("Clearing existing data...")
    clear_data(session)

    logger.info("Adding demo data...")
    organizer = storage.create_user(UserCreate(
        username='organizer', email='organizer@example.com', name='Olivia Organizer', is_organizer=True
    ))
    alice = storage.create_user(UserCreate(
        username='alice', email='alice@example.com', name='Alice', skills=['python', 'react']
    ))
    bob = storage.create_user(UserCreate(
        username='bob', email='bob@example.com', name='Bob', skills=['go', 'postgres']
    ))
    carol = storage.create_user(UserCreate(
        username='carol', email='carol@example.com', name='Carol', skills=['design']
    ))
    judge_users = [
        storage.create_user(UserCreate(username=f'judge{i}', email=f'judge{i}@example.com', name=f'Judge {i}'))
        for i in (1, 2)
    ]
    recruiter = storage.create_user(UserCreate(
        username='recruiter', email='recruiter@example.com', name='Rita Recruiter', is_recruiter=True
    ))

    event = storage.create_event(EventCreate(
        title='Spring Hack 2025',
        description='A weekend of building things.',
        start_date=datetime(2025, 4, 12, 9, 0),
        end_date=datetime(2025, 4, 13, 18, 0),
        location='Main Hall',
        organizer_id=organizer.id,
        max_participants=100,
        status='published',
    ))

    for user in (alice, bob, carol):
        storage.create_registration(RegistrationCreate(user_id=user.id, event_id=event.id, status='approved'))

    team_a = storage.create_team(TeamCreate(
        name='Byte Builders', event_id=event.id, leader_id=alice.id, skills=['python']
    ))
    storage.add_team_member(team_a.id, TeamMemberCreate(user_id=carol.id, role='Designer'))
    team_b = storage.create_team(TeamCreate(name='Solo Bob', event_id=event.id, leader_id=bob.id))

    project_a = storage.create_project(ProjectCreate(
        name='Queue Buddy', description='Shared queues for hackathon mentors.',
        event_id=event.id, team_id=team_a.id, repo_url='https://example.com/queue-buddy'
    ))
    storage.create_project(ProjectCreate(
        name='Carbon Counter', description='Tracks the footprint of a build.',
        event_id=event.id, team_id=team_b.id
    ))

    judges = [storage.add_judge(event.id, JudgeCreate(user_id=u.id)) for u in judge_users]
    criteria = [
        storage.add_judging_criterion(event.id, CriterionCreate(name='Innovation', weight=3)),
        storage.add_judging_criterion(event.id, CriterionCreate(name='Technical Difficulty', weight=2)),
        storage.add_judging_criterion(event.id, CriterionCreate(name='Presentation')),
    ]

    # Only the first project gets scores so the demo shows partial progress
    for judge, values in zip(judges, ([8, 7, 9], [9, 6])):
        for criterion, value in zip(criteria, values):
            store.submit_score(project_a.id, judge.id, criterion.id, value)

    storage.create_recruitment_profile(RecruitmentProfileCreate(
        user_id=alice.id, job_preferences=['backend'], location_preferences=['Berlin'],
        work_type_preference='hybrid', experience_level='mid'
    ))

    logger.info(f"Demo data added: event {event.id}, recruiter {recruiter.username}")
    return event


if __name__ == '__main__':
    from app import create_app

    app = create_app()
    with app.app_context():
        db.create_all()
        seed()
