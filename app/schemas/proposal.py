from typing import Any, Dict, List, Optional
from datetime import datetime

from app.schemas.common import CamelModel


class ProposalSubmit(CamelModel):
    """Raw submission - the composer does the normalization"""
    user: Optional[Dict[str, Any]] = None
    selected_topics: Optional[Any] = None
    generated_proposal: Optional[Dict[str, Any]] = None


class ProposalStatusUpdate(CamelModel):
    status: Optional[str] = None
    feedback: Optional[str] = None
    reviewed_by: Optional[str] = None


class ProposalResponse(CamelModel):
    id: str
    user: Dict[str, Any]
    selected_topics: List[Dict[str, Any]]
    generated_proposal: Dict[str, Any]
    status: str
    admin_feedback: Optional[Dict[str, Any]] = None
    submission_date: datetime
    last_updated: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
