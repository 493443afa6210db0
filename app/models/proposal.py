"""
Student proposal submissions.

The submitting user, the three selected topics and the generated proposal
body are stored as JSON snapshots taken at submission time. They are never
synchronized with the accounts or project_topics tables afterwards.
"""
from sqlalchemy import Column, String, DateTime, JSON
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class ProposalStatus(str, enum.Enum):
    """Review status of a proposal"""
    pending = "pending"
    reviewed = "reviewed"
    approved = "approved"
    rejected = "rejected"
    in_progress = "in-progress"
    completed = "completed"


class Proposal(Base):
    """Proposal with embedded user and topic snapshots"""
    __tablename__ = "proposals"

    id = Column(GUID, primary_key=True, default=generate_uuid)

    # Copy of user["userId"] so proposals can be listed per user
    user_ref = Column(String(255), index=True, nullable=False)

    # Snapshots
    user = Column(JSON, nullable=False)
    selected_topics = Column(JSON, nullable=False)
    generated_proposal = Column(JSON, nullable=False)

    # Review
    status = Column(String(20), default=ProposalStatus.pending.value, nullable=False, index=True)
    admin_feedback = Column(JSON, nullable=True)

    # Timestamps
    submission_date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    last_updated = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Proposal {self.id} ({self.status})>"
