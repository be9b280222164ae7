"""User model: one tenant and the owner of a portfolio."""

from sqlalchemy import JSON, Column, DateTime, String, Text, func

from portfolio_hub.config.database import Base


class User(Base):
    """Tenant entity mapped to `users` table."""

    __tablename__ = "users"

    id = Column(String(128), primary_key=True)

    username = Column(String(20), nullable=False, index=True)
    full_name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=False)
    headline = Column(String(100), nullable=False, default="")
    bio = Column(Text, nullable=False, default="")
    profile_picture_url = Column(String(500), nullable=False, default="")

    # Each host binds to exactly one user; cross-column uniqueness is
    # enforced by DomainService before writes.
    portfolio_domain = Column(String(255), unique=True, nullable=True)
    admin_domain = Column(String(255), unique=True, nullable=True)

    social_links = Column(JSON, nullable=False, default=dict)
    skills = Column(JSON, nullable=False, default=list)
    experience = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<User {self.username} ({self.id})>"
