# models/__init__.py

from .user import User
from .event import Event
from .registration import Registration
from .team import Team
from .team_member import TeamMember
from .project import Project
from .judge import Judge
from .criterion import JudgingCriterion
from .score import ProjectScore
from .recruitment_profile import RecruitmentProfile
