# Pydantic schemas
from app.schemas.auth import UserRegister, UserLogin, UserPublic
from app.schemas.project_topic import (
    ProjectTopicCreate,
    ProjectTopicUpdate,
    ProjectTopicResponse,
    CategoryTopicItem,
    TrendingTopicItem,
)
from app.schemas.proposal import ProposalSubmit, ProposalStatusUpdate, ProposalResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserPublic",
    "ProjectTopicCreate",
    "ProjectTopicUpdate",
    "ProjectTopicResponse",
    "CategoryTopicItem",
    "TrendingTopicItem",
    "ProposalSubmit",
    "ProposalStatusUpdate",
    "ProposalResponse",
]
