from app.services.auth_service import AuthService
from app.services.topic_service import TopicService
from app.services.proposal_service import ProposalService

__all__ = [
    "AuthService",
    "TopicService",
    "ProposalService",
]
