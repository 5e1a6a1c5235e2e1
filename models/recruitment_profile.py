# models/recruitment_profile.py

from extensions import db
from sqlalchemy import CheckConstraint


class RecruitmentProfile(db.Model):
    __tablename__ = 'recruitment_profiles'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False)
    is_searchable = db.Column(db.Boolean, nullable=False, default=True)
    job_preferences = db.Column(db.JSON, nullable=False, default=list)
    location_preferences = db.Column(db.JSON, nullable=False, default=list)
    work_type_preference = db.Column(db.String(20), nullable=True)
    experience_level = db.Column(db.String(20), nullable=True)
    available_from = db.Column(db.DateTime, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "work_type_preference IN ('remote', 'onsite', 'hybrid') OR work_type_preference IS NULL",
            name="check_work_type_preference"
        ),
        CheckConstraint(
            "experience_level IN ('entry', 'mid', 'senior') OR experience_level IS NULL",
            name="check_experience_level"
        ),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'is_searchable': self.is_searchable,
            'job_preferences': self.job_preferences or [],
            'location_preferences': self.location_preferences or [],
            'work_type_preference': self.work_type_preference,
            'experience_level': self.experience_level,
            'available_from': self.available_from.isoformat() if self.available_from else None,
        }
