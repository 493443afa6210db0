"""
Topic catalog service.

Topics are never physically removed: delete flips is_active, list views only
show active topics, and get_by_id returns a topic whatever its state.
Titles are unique case-insensitively across active and inactive topics.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import select, or_, asc, desc, false
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging_config import logger
from app.core.types import is_valid_uuid
from app.core.validation import validate_model
from app.models.project_topic import ProjectTopic, TopicCategory, TopicDifficulty, title_key
from app.schemas.project_topic import (
    ProjectTopicCreate,
    ProjectTopicUpdate,
    ProjectTopicResponse,
    CategoryTopicItem,
    TrendingTopicItem,
)
from app.services.persistence import commit_or_raise
from app.utils.pagination import paginate

TITLE_TAKEN = "A project topic with this title already exists"

SORT_FIELDS = {
    "popularity": ProjectTopic.popularity,
    "duration": ProjectTopic.duration,
    "complexity": ProjectTopic.complexity,
    "createdAt": ProjectTopic.created_at,
}
DEFAULT_SORT = "popularity"

CATEGORY_VIEW_LIMIT = 20
TRENDING_VIEW_LIMIT = 10


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _enum_member(enum_cls, value: str):
    """Member for a raw query value, or None when it is not one of the enum's values"""
    try:
        return enum_cls(value)
    except ValueError:
        return None


def topic_to_dict(topic: ProjectTopic) -> dict:
    return ProjectTopicResponse.model_validate(topic).to_wire()


class TopicService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_or_404(self, topic_id: str) -> ProjectTopic:
        topic = None
        if is_valid_uuid(topic_id):
            topic = await self.db.get(ProjectTopic, str(topic_id))
        if topic is None:
            raise NotFoundError("ProjectTopic", str(topic_id), "Project topic not found")
        return topic

    async def _title_taken(self, title: str, exclude_id: Optional[str] = None) -> bool:
        query = select(ProjectTopic.id).where(ProjectTopic.title_key == title_key(title))
        if exclude_id:
            query = query.where(ProjectTopic.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def create(self, payload: Dict[str, Any]) -> dict:
        data = validate_model(ProjectTopicCreate, payload).unwrap("Invalid project topic data")

        if await self._title_taken(data.title):
            raise ConflictError(TITLE_TAKEN, field="title")

        topic = ProjectTopic(
            title=data.title,
            title_key=title_key(data.title),
            description=data.description,
            category=data.category,
            difficulty=data.difficulty,
            duration=data.duration,
            popularity=data.popularity,
            complexity=data.complexity,
            is_trending=data.is_trending,
            technologies=data.technologies,
            learning_objectives=data.learning_objectives,
            prerequisites=data.prerequisites,
            expected_outcomes=data.expected_outcomes,
            resources=data.resources,
            image=data.image,
        )
        self.db.add(topic)
        await commit_or_raise(self.db, "create_topic", conflict_message=TITLE_TAKEN, conflict_field="title")
        await self.db.refresh(topic)

        logger.log_store_write("insert", ProjectTopic.__tablename__, topic_id=topic.id)
        logger.log_catalog_event("created", topic.id, title=topic.title, category=topic.category.value)
        return topic_to_dict(topic)

    async def list(
        self,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        trending: Optional[bool] = None,
        search: Optional[str] = None,
        sort_by: str = DEFAULT_SORT,
        sort_order: str = "desc",
        page: int = 1,
        page_size: int = settings.DEFAULT_PAGE_SIZE,
    ) -> dict:
        """Active topics matching every supplied filter, sorted and paginated"""
        query = select(ProjectTopic).where(ProjectTopic.is_active.is_(True))

        # Unknown values match nothing; Postgres would reject them as enum input
        if category and category != "all":
            member = _enum_member(TopicCategory, category)
            query = query.where(ProjectTopic.category == member if member is not None else false())
        if difficulty and difficulty != "all":
            member = _enum_member(TopicDifficulty, difficulty)
            query = query.where(ProjectTopic.difficulty == member if member is not None else false())
        if trending:
            query = query.where(ProjectTopic.is_trending.is_(True))
        if search and search.strip():
            pattern = _like_pattern(search.strip())
            query = query.where(or_(
                ProjectTopic.title.ilike(pattern, escape="\\"),
                ProjectTopic.description.ilike(pattern, escape="\\"),
            ))

        if sort_by in SORT_FIELDS:
            direction = asc if sort_order == "asc" else desc
            sort_column = SORT_FIELDS[sort_by]
        else:
            direction, sort_column = desc, SORT_FIELDS[DEFAULT_SORT]
        query = query.order_by(direction(sort_column), desc(ProjectTopic.created_at), ProjectTopic.id)

        result = await paginate(self.db, query, page=page, page_size=page_size)

        return {
            "data": [topic_to_dict(t) for t in result["items"]],
            "pagination": {
                "currentPage": result["page"],
                "pageSize": result["page_size"],
                "totalPages": result["total_pages"],
                "totalTopics": result["total"],
                "hasNext": result["has_next"],
                "hasPrev": result["has_previous"],
            },
        }

    async def get_by_id(self, topic_id: str) -> dict:
        return topic_to_dict(await self._get_or_404(topic_id))

    async def update(self, topic_id: str, payload: Dict[str, Any]) -> dict:
        """Apply only the supplied fields, re-validating each against its constraints"""
        topic = await self._get_or_404(topic_id)
        changes = validate_model(ProjectTopicUpdate, payload).unwrap("Invalid project topic data")
        fields = changes.model_dump(exclude_unset=True)

        if "title" in fields:
            if await self._title_taken(fields["title"], exclude_id=topic.id):
                raise ConflictError(TITLE_TAKEN, field="title")
            topic.title_key = title_key(fields["title"])

        for name, value in fields.items():
            setattr(topic, name, value)

        await commit_or_raise(self.db, "update_topic", conflict_message=TITLE_TAKEN, conflict_field="title")
        await self.db.refresh(topic)

        logger.log_catalog_event("updated", topic.id, title=topic.title, fields=sorted(fields))
        return topic_to_dict(topic)

    async def soft_delete(self, topic_id: str) -> None:
        """Mark inactive; repeating the call is not an error"""
        topic = await self._get_or_404(topic_id)
        topic.is_active = False
        await commit_or_raise(self.db, "delete_topic")
        logger.log_catalog_event("deactivated", topic.id, title=topic.title)

    async def list_by_category(self, category: str) -> List[dict]:
        member = _enum_member(TopicCategory, category)
        if member is None:
            return []
        result = await self.db.execute(
            select(ProjectTopic)
            .where(ProjectTopic.category == member, ProjectTopic.is_active.is_(True))
            .order_by(desc(ProjectTopic.popularity))
            .limit(CATEGORY_VIEW_LIMIT)
        )
        return [CategoryTopicItem.model_validate(t).to_wire() for t in result.scalars().all()]

    async def list_trending(self) -> List[dict]:
        result = await self.db.execute(
            select(ProjectTopic)
            .where(ProjectTopic.is_trending.is_(True), ProjectTopic.is_active.is_(True))
            .order_by(desc(ProjectTopic.popularity))
            .limit(TRENDING_VIEW_LIMIT)
        )
        return [TrendingTopicItem.model_validate(t).to_wire() for t in result.scalars().all()]
