from datetime import datetime

import pytest

from app import create_app
from config import TestConfig
from extensions import db
from schemas import (
    CriterionCreate, EventCreate, JudgeCreate, ProjectCreate,
    RegistrationCreate, TeamCreate, UserCreate
)
from scoring import ScoreStore
from storage import Storage


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage(app):
    return Storage(db.session)


@pytest.fixture
def store(storage):
    return ScoreStore(storage)


class Factory:
    """Builds hackathon records straight through Storage."""

    def __init__(self, storage):
        self.storage = storage
        self.counter = 0

    def user(self, **kwargs):
        self.counter += 1
        fields = {
            'username': f'user{self.counter}',
            'email': f'user{self.counter}@example.com',
            'name': f'User {self.counter}',
        }
        fields.update(kwargs)
        return self.storage.create_user(UserCreate(**fields))

    def event(self, organizer=None, **kwargs):
        organizer = organizer or self.user(is_organizer=True)
        fields = {
            'title': 'Hack Night',
            'description': 'Build something',
            'start_date': datetime(2025, 5, 1, 9, 0),
            'end_date': datetime(2025, 5, 2, 18, 0),
            'organizer_id': organizer.id,
        }
        fields.update(kwargs)
        return self.storage.create_event(EventCreate(**fields))

    def team(self, event, leader=None, **kwargs):
        leader = leader or self.user()
        if not self.storage.get_registration_by_user_and_event(leader.id, event.id):
            self.storage.create_registration(RegistrationCreate(user_id=leader.id, event_id=event.id))
        fields = {'name': f'Team {self.counter}', 'event_id': event.id, 'leader_id': leader.id}
        fields.update(kwargs)
        return self.storage.create_team(TeamCreate(**fields))

    def project(self, event, team=None, **kwargs):
        team = team or self.team(event)
        fields = {
            'name': f'Project {team.id}',
            'description': 'A hack',
            'event_id': event.id,
            'team_id': team.id,
        }
        fields.update(kwargs)
        return self.storage.create_project(ProjectCreate(**fields))

    def judge(self, event, user=None, **kwargs):
        user = user or self.user()
        return self.storage.add_judge(event.id, JudgeCreate(user_id=user.id, **kwargs))

    def criterion(self, event, name='Innovation', weight=1):
        return self.storage.add_judging_criterion(event.id, CriterionCreate(name=name, weight=weight))


@pytest.fixture
def make(storage):
    return Factory(storage)
