"""Project model owned by a single user."""

import uuid

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import relationship

from portfolio_hub.config.database import Base


def _new_project_id() -> str:
    return uuid.uuid4().hex


class Project(Base):
    """Project entity mapped to `projects` table.

    Author username and avatar are copied at creation time so listings
    never need a join against `users`.
    """

    __tablename__ = "projects"

    id = Column(String(32), primary_key=True, default=_new_project_id)

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    cover_image_url = Column(String(500), nullable=False, default="")
    video_url = Column(String(500), nullable=True)
    live_url = Column(String(500), nullable=True)
    source_code_url = Column(String(500), nullable=True)
    technologies = Column(JSON, nullable=False, default=list)

    # Assigned by the database at insert time
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    author_id = Column(String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    author_username = Column(String(20), nullable=False)
    author_avatar = Column(String(500), nullable=False, default="")

    author = relationship("User", backref="projects")

    __table_args__ = (
        Index("idx_projects_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<Project {self.title} by {self.author_username}>"
