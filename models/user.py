# models/user.py

from datetime import datetime, timezone

from extensions import db


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(120), nullable=False)
    bio = db.Column(db.Text, nullable=True)
    skills = db.Column(db.JSON, nullable=False, default=list)
    interests = db.Column(db.JSON, nullable=False, default=list)
    github_url = db.Column(db.String, nullable=True)
    linkedin_url = db.Column(db.String, nullable=True)
    portfolio_url = db.Column(db.String, nullable=True)
    resume_url = db.Column(db.String, nullable=True)
    is_organizer = db.Column(db.Boolean, nullable=False, default=False)
    is_recruiter = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    recruitment_profile = db.relationship(
        'RecruitmentProfile', backref='user', uselist=False, cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'name': self.name,
            'bio': self.bio,
            'skills': self.skills or [],
            'interests': self.interests or [],
            'github_url': self.github_url,
            'linkedin_url': self.linkedin_url,
            'portfolio_url': self.portfolio_url,
            'resume_url': self.resume_url,
            'is_organizer': self.is_organizer,
            'is_recruiter': self.is_recruiter,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
