"""
Project topic catalog endpoints

Route order matters: /trending and /category/{category} are declared
before /{topic_id} so they are not captured as ids.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.responses import success_response
from app.services.topic_service import TopicService

router = APIRouter(prefix="/topics", tags=["Project Topics"])


@router.get("")
async def list_topics(
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    search: Optional[str] = None,
    trending: Optional[bool] = None,
    sort_by: str = Query("popularity", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    db: AsyncSession = Depends(get_db)
):
    """Active topics with filtering, sorting and pagination"""
    result = await TopicService(db).list(
        category=category,
        difficulty=difficulty,
        trending=trending,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=limit,
    )
    return success_response(data=result["data"], pagination=result["pagination"])


@router.get("/trending")
async def trending_topics(db: AsyncSession = Depends(get_db)):
    return success_response(data=await TopicService(db).list_trending())


@router.get("/category/{category}")
async def topics_by_category(category: str, db: AsyncSession = Depends(get_db)):
    return success_response(data=await TopicService(db).list_by_category(category))


@router.get("/{topic_id}")
async def get_topic(topic_id: str, db: AsyncSession = Depends(get_db)):
    return success_response(data=await TopicService(db).get_by_id(topic_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_topic(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db)
):
    topic = await TopicService(db).create(payload)
    return success_response(
        data=topic,
        message="Project topic created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/{topic_id}")
async def update_topic(
    topic_id: str,
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db)
):
    """Partial update: only the supplied fields change"""
    topic = await TopicService(db).update(topic_id, payload)
    return success_response(data=topic, message="Project topic updated successfully")


@router.delete("/{topic_id}")
async def delete_topic(topic_id: str, db: AsyncSession = Depends(get_db)):
    await TopicService(db).soft_delete(topic_id)
    return success_response(message="Project topic deleted successfully")
