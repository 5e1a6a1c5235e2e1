# models/judge.py

from extensions import db
from sqlalchemy import CheckConstraint

JUDGE_ROLES = ('judge', 'head_judge')


class Judge(db.Model):
    __tablename__ = 'judges'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    event_id = db.Column(db.Integer, db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='judge')

    user = db.relationship('User')

    __table_args__ = (
        db.UniqueConstraint('user_id', 'event_id', name='unique_judge_event'),
        CheckConstraint("role IN ('judge', 'head_judge')", name="check_judge_role"),
        # Judge ids are never reused: scores of a removed judge keep pointing at it
        {'sqlite_autoincrement': True},
    )

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'event_id': self.event_id,
            'role': self.role,
        }
