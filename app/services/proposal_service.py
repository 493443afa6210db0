"""
Proposal composer and review workflow.

submit() turns a loosely shaped client payload into a stored proposal:

    user               -> user snapshot (userId generated when missing)
    selectedTopics[3]  -> three topic snapshots, each field defaulted on its own
    generatedProposal  -> proposal body with defaults for every optional part

A field counts as missing when it is absent, null, false, zero or "". Empty
lists and whitespace-only text are kept as sent. Exactly three topics are
required at submission; the count is not re-checked on later updates.
Snapshots are copies and do not follow later catalog edits.

Review operations change status and attach admin feedback. Unlike topics,
proposals are deleted for real.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging_config import logger, set_account_id
from app.core.types import generate_uuid, is_valid_uuid
from app.core.validation import is_blank
from app.models.proposal import Proposal, ProposalStatus
from app.schemas.proposal import ProposalResponse
from app.services.persistence import commit_or_raise

REQUIRED_TOPIC_COUNT = 3

VALID_STATUSES = [s.value for s in ProposalStatus]

TOPIC_DEFAULTS: Dict[str, Any] = {
    "title": "Untitled Topic",
    "category": "general",
    "difficulty": "beginner",
    "description": "",
    "technologies": [],
    "duration": "4 weeks",
    "complexity": 5,
    "popularity": 50,
    "image": "",
}

PROPOSAL_DEFAULTS: Dict[str, Any] = {
    "objectives": ["Objective 1", "Objective 2"],
    "scope": "Project scope not specified",
    "methodology": "Agile methodology",
    "expectedOutcomes": ["Working application"],
    "timeline": "12-14 weeks",
    "resourcesNeeded": ["Development team", "Cloud services"],
    "budgetEstimate": "$15,000 - $20,000",
}

USER_OPTIONAL_FIELDS = ("studentId", "department", "semester")


def _pick(source: Dict[str, Any], key: str, default: Any) -> Any:
    value = source.get(key)
    if is_blank(value):
        # Fresh copy so mutable defaults are never shared between records
        return list(default) if isinstance(default, list) else default
    return value


def build_user_snapshot(user: Dict[str, Any]) -> Dict[str, Any]:
    snapshot = {
        "userId": _pick(user, "userId", None) or generate_uuid(),
        "name": user["name"],
        "email": user["email"],
    }
    for key in USER_OPTIONAL_FIELDS:
        snapshot[key] = _pick(user, key, "")
    return snapshot


def build_topic_snapshot(topic: Any) -> Dict[str, Any]:
    """Copy one selected topic, defaulting each missing field independently"""
    if not isinstance(topic, dict):
        topic = {}
    topic_id = topic.get("topicId") or topic.get("_id") or topic.get("id") or generate_uuid()
    snapshot = {"topicId": str(topic_id)}
    for key, default in TOPIC_DEFAULTS.items():
        snapshot[key] = _pick(topic, key, default)
    return snapshot


def build_proposal_body(proposal: Dict[str, Any]) -> Dict[str, Any]:
    body = {
        "title": proposal["title"],
        "description": proposal["description"],
    }
    for key, default in PROPOSAL_DEFAULTS.items():
        body[key] = _pick(proposal, key, default)
    return body


def validate_submission(
    user: Optional[Dict[str, Any]],
    selected_topics: Any,
    generated_proposal: Optional[Dict[str, Any]],
) -> None:
    """Raise ValidationError for the first rule the submission breaks"""
    if any(is_blank(part) for part in (user, selected_topics, generated_proposal)):
        raise ValidationError("Missing required fields: user, selectedTopics, or generatedProposal")

    if not isinstance(selected_topics, list) or len(selected_topics) != REQUIRED_TOPIC_COUNT:
        raise ValidationError(
            f"A proposal must contain exactly {REQUIRED_TOPIC_COUNT} topics",
            field="selectedTopics",
            received=len(selected_topics) if isinstance(selected_topics, list) else None,
        )

    if not isinstance(user, dict) or is_blank(user.get("name")) or is_blank(user.get("email")):
        raise ValidationError("User must have name and email", field="user")

    if (
        not isinstance(generated_proposal, dict)
        or is_blank(generated_proposal.get("title"))
        or is_blank(generated_proposal.get("description"))
    ):
        raise ValidationError("Generated proposal must have title and description", field="generatedProposal")


def proposal_to_dict(proposal: Proposal) -> dict:
    return ProposalResponse.model_validate(proposal).to_wire()


class ProposalService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_or_404(self, proposal_id: str) -> Proposal:
        proposal = None
        if is_valid_uuid(proposal_id):
            proposal = await self.db.get(Proposal, str(proposal_id))
        if proposal is None:
            raise NotFoundError("Proposal", str(proposal_id), "Proposal not found")
        return proposal

    # ========== Composer ==========

    async def submit(
        self,
        user: Optional[Dict[str, Any]],
        selected_topics: Any,
        generated_proposal: Optional[Dict[str, Any]],
    ) -> dict:
        validate_submission(user, selected_topics, generated_proposal)

        user_snapshot = build_user_snapshot(user)
        set_account_id(str(user_snapshot["userId"]))

        proposal = Proposal(
            user_ref=str(user_snapshot["userId"]),
            user=user_snapshot,
            selected_topics=[build_topic_snapshot(t) for t in selected_topics],
            generated_proposal=build_proposal_body(generated_proposal),
            status=ProposalStatus.pending.value,
            submission_date=datetime.utcnow(),
        )
        self.db.add(proposal)
        await commit_or_raise(self.db, "submit_proposal")
        await self.db.refresh(proposal)

        logger.log_proposal_event(
            "submitted", proposal.id, status=proposal.status,
            student=user_snapshot["email"], topics=[t["title"] for t in proposal.selected_topics],
        )
        return proposal_to_dict(proposal)

    async def create_samples(self, samples: List[Dict[str, Any]]) -> List[dict]:
        """Insert fully specified proposals as-is (seeding only)"""
        proposals = [
            Proposal(
                user_ref=str(sample["user"]["userId"]),
                user=sample["user"],
                selected_topics=sample["selectedTopics"],
                generated_proposal=sample["generatedProposal"],
                status=sample.get("status", ProposalStatus.pending.value),
                submission_date=datetime.utcnow(),
            )
            for sample in samples
        ]
        self.db.add_all(proposals)
        await commit_or_raise(self.db, "create_sample_proposals")
        for proposal in proposals:
            await self.db.refresh(proposal)

        logger.log_store_write("insert", Proposal.__tablename__, rows=len(proposals), sample=True)
        return [proposal_to_dict(p) for p in proposals]

    # ========== Review workflow ==========

    async def list_all(self) -> List[dict]:
        result = await self.db.execute(
            select(Proposal).order_by(desc(Proposal.submission_date), desc(Proposal.created_at))
        )
        return [proposal_to_dict(p) for p in result.scalars().all()]

    async def list_by_user(self, user_id: str) -> List[dict]:
        result = await self.db.execute(
            select(Proposal)
            .where(Proposal.user_ref == user_id)
            .order_by(desc(Proposal.submission_date), desc(Proposal.created_at))
        )
        return [proposal_to_dict(p) for p in result.scalars().all()]

    async def get_by_id(self, proposal_id: str) -> dict:
        return proposal_to_dict(await self._get_or_404(proposal_id))

    async def update_status(
        self,
        proposal_id: str,
        status: Optional[str] = None,
        feedback: Optional[str] = None,
        reviewed_by: Optional[str] = None,
    ) -> dict:
        """Change status and/or attach admin feedback; always stamps lastUpdated"""
        if status and status not in VALID_STATUSES:
            raise ValidationError(
                f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}",
                field="status",
            )

        proposal = await self._get_or_404(proposal_id)
        now = datetime.utcnow()

        if status:
            proposal.status = status
        if feedback or reviewed_by:
            proposal.admin_feedback = {
                "feedback": feedback or "",
                "reviewedBy": reviewed_by or "Admin",
                "reviewedAt": now.isoformat(),
            }
        proposal.last_updated = now

        await commit_or_raise(self.db, "update_proposal")
        await self.db.refresh(proposal)

        logger.log_proposal_event(
            "reviewed", proposal.id, status=proposal.status,
            reviewed_by=(proposal.admin_feedback or {}).get("reviewedBy"),
        )
        return proposal_to_dict(proposal)

    async def delete(self, proposal_id: str) -> None:
        proposal = await self._get_or_404(proposal_id)
        await self.db.delete(proposal)
        await commit_or_raise(self.db, "delete_proposal")
        logger.log_proposal_event("deleted", proposal_id)

    async def clear(self) -> int:
        """Delete every proposal; returns how many were removed"""
        result = await self.db.execute(delete(Proposal))
        await commit_or_raise(self.db, "clear_proposals")
        logger.log_proposal_event("cleared", removed=result.rowcount)
        return result.rowcount
