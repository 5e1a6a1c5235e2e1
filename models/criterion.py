# models/criterion.py

from extensions import db
from sqlalchemy import CheckConstraint


class JudgingCriterion(db.Model):
    __tablename__ = 'judging_criteria'
    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    name = db.Column(db.String, nullable=False)
    description = db.Column(db.Text, nullable=True)
    # Relative importance, only used by the weighted average
    weight = db.Column(db.Integer, nullable=False, default=1)

    __table_args__ = (
        CheckConstraint("weight >= 1", name="check_criterion_weight"),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'event_id': self.event_id,
            'name': self.name,
            'description': self.description,
            'weight': self.weight,
        }
