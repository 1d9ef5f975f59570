"""Model module imports for SQLAlchemy metadata registration."""

from hopebridge.db.models.donation import Donation
from hopebridge.db.models.post import Post
from hopebridge.db.models.project import Base
from hopebridge.db.models.project import Project
from hopebridge.db.models.task import Task
from hopebridge.db.models.user import User
from hopebridge.db.models.visit import Visit

__all__ = [
    "Base",
    "Donation",
    "Post",
    "Project",
    "Task",
    "User",
    "Visit",
]
