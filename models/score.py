# models/score.py

from datetime import datetime, timezone

from extensions import db


class ProjectScore(db.Model):
    __tablename__ = 'project_scores'
    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    # No foreign key: scores stay in place when a judge is removed from the event
    judge_id = db.Column(db.Integer, nullable=False, index=True)
    criterion_id = db.Column(db.Integer, db.ForeignKey('judging_criteria.id'), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        db.UniqueConstraint('project_id', 'judge_id', 'criterion_id', name='unique_project_judge_criterion'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'project_id': self.project_id,
            'judge_id': self.judge_id,
            'criterion_id': self.criterion_id,
            'score': self.score,
            'comment': self.comment,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
