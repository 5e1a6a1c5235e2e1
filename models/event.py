# models/event.py

from datetime import datetime, timezone

from extensions import db
from sqlalchemy import CheckConstraint

EVENT_STATUSES = ('draft', 'published', 'completed', 'cancelled')


class Event(db.Model):
    __tablename__ = 'events'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    location = db.Column(db.String, nullable=True)
    is_virtual = db.Column(db.Boolean, nullable=False, default=False)
    organizer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    max_participants = db.Column(db.Integer, nullable=True)
    registration_deadline = db.Column(db.DateTime, nullable=True)
    website = db.Column(db.String, nullable=True)
    status = db.Column(db.String(20), nullable=False, default='draft')
    # Extra registration form fields defined by the organizer
    custom_fields = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    organizer = db.relationship('User')

    __table_args__ = (
        CheckConstraint("status IN ('draft', 'published', 'completed', 'cancelled')", name="check_event_status"),
        CheckConstraint("start_date <= end_date", name="check_event_dates"),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'location': self.location,
            'is_virtual': self.is_virtual,
            'organizer_id': self.organizer_id,
            'max_participants': self.max_participants,
            'registration_deadline': self.registration_deadline.isoformat() if self.registration_deadline else None,
            'website': self.website,
            'status': self.status,
            'custom_fields': self.custom_fields,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
