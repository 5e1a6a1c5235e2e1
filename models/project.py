# models/project.py

from datetime import datetime, timezone

from extensions import db
from sqlalchemy import CheckConstraint, UniqueConstraint

PROJECT_STATUSES = ('submitted', 'under_review', 'approved', 'rejected')


class Project(db.Model):
    __tablename__ = 'projects'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    event_id = db.Column(db.Integer, db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    team_id = db.Column(db.Integer, db.ForeignKey('teams.id', ondelete='CASCADE'), nullable=False)
    repo_url = db.Column(db.String, nullable=True)
    demo_url = db.Column(db.String, nullable=True)
    presentation_url = db.Column(db.String, nullable=True)
    submitted_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # Set by organizers only, scoring never moves it
    status = db.Column(db.String(20), nullable=False, default='submitted')

    # Deleting a project removes all of its scores
    scores = db.relationship(
        'ProjectScore', backref='project', lazy=True,
        cascade="all, delete-orphan", order_by='ProjectScore.id'
    )

    __table_args__ = (
        UniqueConstraint('team_id', 'event_id', name='unique_team_event_project'),
        CheckConstraint(
            "status IN ('submitted', 'under_review', 'approved', 'rejected')",
            name="check_project_status"
        ),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'event_id': self.event_id,
            'team_id': self.team_id,
            'repo_url': self.repo_url,
            'demo_url': self.demo_url,
            'presentation_url': self.presentation_url,
            'submitted_at': self.submitted_at.isoformat() if self.submitted_at else None,
            'status': self.status,
        }
