"""
Proposal submission and review endpoints
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.responses import success_response
from app.db.seed_data import sample_proposals
from app.schemas.proposal import ProposalSubmit, ProposalStatusUpdate
from app.services.proposal_service import ProposalService

router = APIRouter(prefix="/proposals", tags=["Proposals"])


@router.get("/health")
async def proposals_health():
    return success_response(
        message="Proposals API is running",
        timestamp=datetime.utcnow().isoformat(),
    )


@router.post("/submit", status_code=status.HTTP_201_CREATED)
async def submit_proposal(
    payload: Optional[ProposalSubmit] = None,
    db: AsyncSession = Depends(get_db)
):
    """Validate, normalize and store a proposal built from three topics"""
    payload = payload or ProposalSubmit()
    proposal = await ProposalService(db).submit(
        payload.user,
        payload.selected_topics,
        payload.generated_proposal,
    )
    return success_response(
        data=proposal,
        message="Proposal submitted successfully!",
        status_code=status.HTTP_201_CREATED,
    )


@router.post("/sample", status_code=status.HTTP_201_CREATED)
async def create_sample_proposals(db: AsyncSession = Depends(get_db)):
    created = await ProposalService(db).create_samples(sample_proposals())
    return success_response(
        data=created,
        message=f"{len(created)} sample proposals created",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/admin/all")
async def list_all_proposals(db: AsyncSession = Depends(get_db)):
    proposals = await ProposalService(db).list_all()
    return success_response(data=proposals, count=len(proposals))


@router.delete("/admin/clear")
async def clear_proposals(db: AsyncSession = Depends(get_db)):
    deleted = await ProposalService(db).clear()
    return success_response(
        data={"deletedCount": deleted},
        message=f"Deleted {deleted} proposals",
    )


@router.get("/user/{user_id}")
async def list_user_proposals(user_id: str, db: AsyncSession = Depends(get_db)):
    proposals = await ProposalService(db).list_by_user(user_id)
    return success_response(data=proposals, count=len(proposals))


@router.get("/{proposal_id}")
async def get_proposal(proposal_id: str, db: AsyncSession = Depends(get_db)):
    return success_response(data=await ProposalService(db).get_by_id(proposal_id))


@router.put("/admin/update/{proposal_id}")
async def update_proposal(
    proposal_id: str,
    update: Optional[ProposalStatusUpdate] = None,
    db: AsyncSession = Depends(get_db)
):
    """Change status and/or attach reviewer feedback"""
    update = update or ProposalStatusUpdate()
    proposal = await ProposalService(db).update_status(
        proposal_id,
        status=update.status,
        feedback=update.feedback,
        reviewed_by=update.reviewed_by,
    )
    return success_response(data=proposal, message="Proposal updated successfully")


@router.delete("/{proposal_id}")
async def delete_proposal(proposal_id: str, db: AsyncSession = Depends(get_db)):
    await ProposalService(db).delete(proposal_id)
    return success_response(message="Proposal deleted successfully")
