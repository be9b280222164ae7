"""Database models"""

from portfolio_hub.models.project import Project
from portfolio_hub.models.user import User

__all__ = [
    "Project",
    "User",
]
