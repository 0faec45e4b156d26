# Import all models here for SQLAlchemy discovery
from pathwise.models.user import CareerPath, Resume, Skill, User
