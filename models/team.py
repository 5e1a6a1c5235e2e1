# models/team.py

from datetime import datetime, timezone

from extensions import db


class Team(db.Model):
    __tablename__ = 'teams'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=True)
    event_id = db.Column(db.Integer, db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    leader_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    max_members = db.Column(db.Integer, nullable=False, default=4)
    # Whether the team accepts new members
    is_open = db.Column(db.Boolean, nullable=False, default=True)
    skills = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    members = db.relationship('TeamMember', backref='team', lazy=True, cascade="all, delete-orphan")

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'event_id': self.event_id,
            'leader_id': self.leader_id,
            'max_members': self.max_members,
            'is_open': self.is_open,
            'skills': self.skills or [],
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
