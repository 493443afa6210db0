# Re-export all models for convenient imports
from app.models.user import UserAccount, UserRole
from app.models.project_topic import ProjectTopic, TopicCategory, TopicDifficulty
from app.models.proposal import Proposal, ProposalStatus

__all__ = [
    # Accounts
    "UserAccount",
    "UserRole",
    # Topic catalog
    "ProjectTopic",
    "TopicCategory",
    "TopicDifficulty",
    # Proposals
    "Proposal",
    "ProposalStatus",
]
