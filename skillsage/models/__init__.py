# Import all models here for SQLAlchemy metadata discovery
from skillsage.models.base import Base
from skillsage.models.user import User
from skillsage.models.course import Course
from skillsage.models.chat import ChatMessage
from skillsage.models.skill import SkillProgress
from skillsage.models.activity import Activity
from skillsage.models.interview import InterviewSession
from skillsage.models.resume import Resume
