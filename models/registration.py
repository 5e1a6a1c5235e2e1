# models/registration.py

from datetime import datetime, timezone

from extensions import db
from sqlalchemy import CheckConstraint, UniqueConstraint


class Registration(db.Model):
    __tablename__ = 'registrations'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    event_id = db.Column(db.Integer, db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    status = db.Column(db.String(20), nullable=False, default='pending')
    form_data = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint('user_id', 'event_id', name='unique_user_event_registration'),
        CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="check_registration_status"),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'event_id': self.event_id,
            'status': self.status,
            'form_data': self.form_data,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
