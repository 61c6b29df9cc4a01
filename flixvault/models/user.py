"""User model"""

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from ..database import Base


def empty_lists() -> dict:
    """Fresh storage value for a new user's five categories"""
    return {
        "watched": [],
        "watching": [],
        "planned": [],
        "onhold": [],
        "dropped": [],
    }


class User(Base):
    """User account with its watchlist collection"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(10), default="user", nullable=False)  # 'user' or 'admin'
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # JSON object: {"watched": [...], "watching": [...], ...}
    lists = Column(JSON, default=empty_lists, nullable=False)

    def __repr__(self):
        return f"<User {self.email}>"
