# schemas.py
# Request bodies and partial-update (patch) models for the JSON API

from datetime import datetime, timezone
from typing import Any, ClassVar, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError

EventStatus = Literal['draft', 'published', 'completed', 'cancelled']
RegistrationStatus = Literal['pending', 'approved', 'rejected']
ProjectStatus = Literal['submitted', 'under_review', 'approved', 'rejected']
JudgeRole = Literal['judge', 'head_judge']
WorkType = Literal['remote', 'onsite', 'hybrid']
ExperienceLevel = Literal['entry', 'mid', 'senior']


def naive_utc(value):
    """Store event dates as naive UTC so they compare with what the database returns."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_body(schema, payload, label):
    """Validate a decoded JSON body against ``schema``.

    Raises the API ``ValidationError`` with one message per offending field.
    """
    if not isinstance(payload, dict):
        raise ValidationError(f'Invalid {label} data', details={'body': 'Expected a JSON object'})
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        errors = {}
        for err in exc.errors():
            field = '.'.join(str(part) for part in err['loc']) or 'body'
            errors[field] = err['msg']
        raise ValidationError(f'Invalid {label} data', details=errors) from exc


class PatchSchema(BaseModel):
    # Fields that may be omitted but never explicitly set to null
    not_null: ClassVar[tuple] = ()

    @model_validator(mode='after')
    def reject_nulls(self):
        for name in self.not_null:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f'{name} may not be null')
        return self

    def changes(self):
        return self.model_dump(exclude_unset=True)


# --- Users ---

class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=80)
    email: str = Field(min_length=3, max_length=255, pattern=r'^[^@\s]+@[^@\s]+$')
    name: str = Field(min_length=1, max_length=120)
    bio: Optional[str] = None
    skills: List[str] = []
    interests: List[str] = []
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    resume_url: Optional[str] = None
    is_organizer: bool = False
    is_recruiter: bool = False


class UserPatch(PatchSchema):
    not_null: ClassVar[tuple] = ('name', 'skills', 'interests', 'is_organizer', 'is_recruiter')

    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    bio: Optional[str] = None
    skills: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    resume_url: Optional[str] = None
    is_organizer: Optional[bool] = None
    is_recruiter: Optional[bool] = None


# --- Events ---

class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str
    start_date: datetime
    end_date: datetime
    location: Optional[str] = None
    is_virtual: bool = False
    organizer_id: int
    max_participants: Optional[int] = Field(default=None, ge=1)
    registration_deadline: Optional[datetime] = None
    website: Optional[str] = None
    status: EventStatus = 'draft'
    custom_fields: Optional[Any] = None

    @field_validator('start_date', 'end_date', 'registration_deadline')
    @classmethod
    def normalize_dates(cls, value):
        return naive_utc(value)

    @model_validator(mode='after')
    def check_dates(self):
        if self.start_date > self.end_date:
            raise ValueError('start_date must not be after end_date')
        return self


class EventPatch(PatchSchema):
    not_null: ClassVar[tuple] = ('title', 'description', 'start_date', 'end_date', 'is_virtual', 'status')

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    is_virtual: Optional[bool] = None
    max_participants: Optional[int] = Field(default=None, ge=1)
    registration_deadline: Optional[datetime] = None
    website: Optional[str] = None
    status: Optional[EventStatus] = None
    custom_fields: Optional[Any] = None

    @field_validator('start_date', 'end_date', 'registration_deadline')
    @classmethod
    def normalize_dates(cls, value):
        return naive_utc(value)


# --- Registrations ---

class RegistrationCreate(BaseModel):
    user_id: int
    event_id: int
    status: RegistrationStatus = 'pending'
    form_data: Optional[dict] = None


class RegistrationPatch(PatchSchema):
    not_null: ClassVar[tuple] = ('status',)

    status: Optional[RegistrationStatus] = None
    form_data: Optional[dict] = None


# --- Teams ---

class TeamCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    description: Optional[str] = None
    event_id: int
    leader_id: int
    max_members: int = Field(default=4, ge=1)
    is_open: bool = True
    skills: List[str] = []


class TeamPatch(PatchSchema):
    not_null: ClassVar[tuple] = ('name', 'max_members', 'is_open', 'skills')

    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = None
    max_members: Optional[int] = Field(default=None, ge=1)
    is_open: Optional[bool] = None
    skills: Optional[List[str]] = None


class TeamMemberCreate(BaseModel):
    user_id: int
    role: Optional[str] = None


# --- Projects ---

class ProjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str
    event_id: int
    team_id: int
    repo_url: Optional[str] = None
    demo_url: Optional[str] = None
    presentation_url: Optional[str] = None


class ProjectPatch(PatchSchema):
    not_null: ClassVar[tuple] = ('name', 'description', 'status')

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    repo_url: Optional[str] = None
    demo_url: Optional[str] = None
    presentation_url: Optional[str] = None
    status: Optional[ProjectStatus] = None


# --- Judging ---

class JudgeCreate(BaseModel):
    user_id: int
    role: JudgeRole = 'judge'


class CriterionCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    weight: int = Field(default=1, ge=1)


class CriterionPatch(PatchSchema):
    not_null: ClassVar[tuple] = ('name', 'weight')

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    weight: Optional[int] = Field(default=None, ge=1)


class ScoreSubmit(BaseModel):
    judge_id: int
    criterion_id: int
    # No coercion from "8" or true
    score: int = Field(strict=True)
    comment: Optional[str] = None


class ScorePatch(PatchSchema):
    not_null: ClassVar[tuple] = ('score',)

    score: Optional[int] = None
    comment: Optional[str] = None


# --- Recruitment ---

class RecruitmentProfileCreate(BaseModel):
    user_id: int
    is_searchable: bool = True
    job_preferences: List[str] = []
    location_preferences: List[str] = []
    work_type_preference: Optional[WorkType] = None
    experience_level: Optional[ExperienceLevel] = None
    available_from: Optional[datetime] = None


class RecruitmentProfilePatch(PatchSchema):
    not_null: ClassVar[tuple] = ('is_searchable', 'job_preferences', 'location_preferences')

    is_searchable: Optional[bool] = None
    job_preferences: Optional[List[str]] = None
    location_preferences: Optional[List[str]] = None
    work_type_preference: Optional[WorkType] = None
    experience_level: Optional[ExperienceLevel] = None
    available_from: Optional[datetime] = None
