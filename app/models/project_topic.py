"""
Project topic catalog.

title_key holds the lower-cased title under a unique index, so the
case-insensitive title rule is enforced by the database and not only by the
pre-check in the service.
"""
from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, JSON, Enum as SQLEnum, Index
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class TopicCategory(str, enum.Enum):
    """Topic category"""
    web = "web"
    mobile = "mobile"
    ai = "ai"
    data = "data"
    iot = "iot"
    blockchain = "blockchain"
    cybersecurity = "cybersecurity"


class TopicDifficulty(str, enum.Enum):
    """Difficulty level"""
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


def title_key(title: str) -> str:
    return title.strip().lower()


class ProjectTopic(Base):
    """Project topic students can pick for a proposal"""
    __tablename__ = "project_topics"

    id = Column(GUID, primary_key=True, default=generate_uuid)

    title = Column(String(200), nullable=False)
    title_key = Column(String(200), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(SQLEnum(TopicCategory, values_callable=lambda obj: [e.value for e in obj]), nullable=False)
    difficulty = Column(SQLEnum(TopicDifficulty, values_callable=lambda obj: [e.value for e in obj]), nullable=False)
    duration = Column(String(100), nullable=False)

    # Ranking
    popularity = Column(Integer, default=0, nullable=False)  # 0-100
    complexity = Column(Integer, default=1, nullable=False)  # 1-10
    is_trending = Column(Boolean, default=False, nullable=False)

    # Content
    technologies = Column(JSON, default=list)
    learning_objectives = Column(JSON, default=list)
    prerequisites = Column(JSON, default=list)
    expected_outcomes = Column(JSON, default=list)
    resources = Column(Integer, default=0, nullable=False)
    image = Column(String(500), default="", nullable=False)

    # Soft delete flag
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_project_topics_category_difficulty_active", "category", "difficulty", "is_active"),
    )

    def __repr__(self):
        return f"<ProjectTopic {self.title}>"
