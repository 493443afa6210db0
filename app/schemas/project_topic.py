from pydantic import Field, ConfigDict, model_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, List, Optional
from datetime import datetime

from app.models.project_topic import TopicCategory, TopicDifficulty
from app.schemas.common import CamelModel

Title = Annotated[str, Field(min_length=1, max_length=200)]
Description = Annotated[str, Field(min_length=1, max_length=1000)]
Duration = Annotated[str, Field(min_length=1, max_length=100)]
Popularity = Annotated[int, Field(ge=0, le=100)]
Complexity = Annotated[int, Field(ge=1, le=10)]
ResourceCount = Annotated[int, Field(ge=0)]


class _TopicInput(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ProjectTopicCreate(_TopicInput):
    title: Title
    description: Description
    category: TopicCategory
    difficulty: TopicDifficulty
    duration: Duration
    popularity: Popularity = 0
    complexity: Complexity = 1
    is_trending: bool = False
    technologies: List[str] = Field(default_factory=list)
    learning_objectives: List[str] = Field(default_factory=list)
    prerequisites: List[str] = Field(default_factory=list)
    expected_outcomes: List[str] = Field(default_factory=list)
    resources: ResourceCount = 0
    image: str = ""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat explicit nulls as unspecified so declared defaults apply"""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ProjectTopicUpdate(_TopicInput):
    """Partial update - only fields present in the payload are applied.

    Defaults of None are not validated, but an explicit null is rejected.
    """
    title: Title = None
    description: Description = None
    category: TopicCategory = None
    difficulty: TopicDifficulty = None
    duration: Duration = None
    popularity: Popularity = None
    complexity: Complexity = None
    is_trending: bool = None
    technologies: List[str] = None
    learning_objectives: List[str] = None
    prerequisites: List[str] = None
    expected_outcomes: List[str] = None
    resources: ResourceCount = None
    image: str = None
    is_active: bool = None


class ProjectTopicResponse(CamelModel):
    id: str
    title: str
    description: str
    category: TopicCategory
    difficulty: TopicDifficulty
    duration: str
    popularity: int
    complexity: int
    is_trending: bool
    technologies: List[str] = []
    learning_objectives: List[str] = []
    prerequisites: List[str] = []
    expected_outcomes: List[str] = []
    resources: int
    image: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class CategoryTopicItem(CamelModel):
    """Reduced projection for the by-category view"""
    id: str
    title: str
    description: str
    difficulty: TopicDifficulty
    duration: str
    popularity: int
    image: str


class TrendingTopicItem(CamelModel):
    """Reduced projection for the trending view"""
    id: str
    title: str
    description: str
    category: TopicCategory
    difficulty: TopicDifficulty
    popularity: int
    image: str
    is_trending: bool
