"""
Unit Tests for the topic catalog service
"""
import uuid

import pytest
from sqlalchemy import event

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.services.topic_service import TopicService, TITLE_TAKEN
from tests.factories import make_topic_payload


class TestCreate:

    async def test_create_applies_defaults(self, db_session):
        topic = await TopicService(db_session).create({
            "title": "Expense Tracker",
            "description": "Track spending",
            "category": "mobile",
            "difficulty": "beginner",
            "duration": "3 weeks",
        })

        assert topic["title"] == "Expense Tracker"
        assert topic["popularity"] == 0
        assert topic["complexity"] == 1
        assert topic["isTrending"] is False
        assert topic["isActive"] is True
        assert uuid.UUID(topic["id"])

    async def test_create_rejects_invalid(self, db_session):
        with pytest.raises(ValidationError):
            await TopicService(db_session).create(make_topic_payload(complexity=20))

    async def test_duplicate_title_case_insensitive(self, db_session):
        service = TopicService(db_session)
        await service.create(make_topic_payload(title="Smart Parking"))

        with pytest.raises(ConflictError) as exc_info:
            await service.create(make_topic_payload(title="  smart PARKING "))

        assert exc_info.value.message == TITLE_TAKEN

    async def test_duplicate_of_inactive_topic(self, db_session, stored_topics):
        with pytest.raises(ConflictError):
            await TopicService(db_session).create(make_topic_payload(title="retired topic"))


class TestList:

    async def test_only_active_topics(self, db_session, stored_topics):
        result = await TopicService(db_session).list()

        titles = [t["title"] for t in result["data"]]
        assert "Retired Topic" not in titles
        assert result["pagination"]["totalTopics"] == 3

    async def test_default_sort_popularity_desc(self, db_session, stored_topics):
        result = await TopicService(db_session).list()

        assert [t["popularity"] for t in result["data"]] == [90, 88, 85]

    async def test_sort_ascending(self, db_session, stored_topics):
        result = await TopicService(db_session).list(sort_by="popularity", sort_order="asc")

        assert [t["popularity"] for t in result["data"]] == [85, 88, 90]

    async def test_unknown_sort_falls_back(self, db_session, stored_topics):
        result = await TopicService(db_session).list(sort_by="title", sort_order="asc")

        assert [t["popularity"] for t in result["data"]] == [90, 88, 85]

    async def test_category_filter_and_all(self, db_session, stored_topics):
        service = TopicService(db_session)

        web = await service.list(category="web")
        every = await service.list(category="all", difficulty="all")

        assert [t["title"] for t in web["data"]] == ["E-commerce Platform"]
        assert every["pagination"]["totalTopics"] == 3

    async def test_unknown_enum_values_match_nothing(self, db_session, stored_topics):
        service = TopicService(db_session)

        by_category = await service.list(category="cooking")
        by_difficulty = await service.list(difficulty="expert")

        assert by_category["data"] == []
        assert by_category["pagination"]["totalTopics"] == 0
        assert by_difficulty["data"] == []

    async def test_unknown_category_never_sent_to_database(self, db_session, stored_topics):
        bound = []

        def capture(conn, cursor, statement, parameters, context, executemany):
            bound.append(repr(parameters))

        sync_engine = db_session.bind.sync_engine
        event.listen(sync_engine, "before_cursor_execute", capture)
        try:
            service = TopicService(db_session)
            await service.list(category="cooking", difficulty="expert")
            await service.list_by_category("cooking")
        finally:
            event.remove(sync_engine, "before_cursor_execute", capture)

        assert not any("cooking" in params or "expert" in params for params in bound)

    async def test_trending_filter(self, db_session, stored_topics):
        result = await TopicService(db_session).list(trending=True)

        assert [t["title"] for t in result["data"]] == ["E-commerce Platform"]

    async def test_search_title_and_description(self, db_session, stored_topics):
        service = TopicService(db_session)

        by_title = await service.list(search="banking")
        by_description = await service.list(search="nlp")

        assert [t["title"] for t in by_title["data"]] == ["Mobile Banking App"]
        assert [t["title"] for t in by_description["data"]] == ["AI Chatbot"]

    async def test_search_wildcards_are_literal(self, db_session, stored_topics):
        result = await TopicService(db_session).list(search="%")

        assert result["data"] == []

    async def test_empty_catalog(self, db_session):
        result = await TopicService(db_session).list()

        assert result["data"] == []
        assert result["pagination"] == {
            "currentPage": 1,
            "pageSize": 10,
            "totalPages": 0,
            "totalTopics": 0,
            "hasNext": False,
            "hasPrev": False,
        }


class TestGetUpdateDelete:

    async def test_get_returns_inactive(self, db_session, stored_topics):
        retired = stored_topics[-1]

        topic = await TopicService(db_session).get_by_id(retired.id)

        assert topic["isActive"] is False

    @pytest.mark.parametrize("topic_id", ["not-a-uuid", str(uuid.uuid4())])
    async def test_get_missing(self, db_session, topic_id):
        with pytest.raises(NotFoundError) as exc_info:
            await TopicService(db_session).get_by_id(topic_id)

        assert exc_info.value.message == "Project topic not found"

    async def test_partial_update(self, db_session, stored_topics):
        target = stored_topics[0]

        topic = await TopicService(db_session).update(target.id, {"popularity": 12})

        assert topic["popularity"] == 12
        assert topic["title"] == "E-commerce Platform"

    async def test_update_rechecks_ranges(self, db_session, stored_topics):
        with pytest.raises(ValidationError):
            await TopicService(db_session).update(stored_topics[0].id, {"popularity": 500})

    async def test_update_same_title_different_case_allowed(self, db_session, stored_topics):
        topic = await TopicService(db_session).update(stored_topics[0].id, {"title": "E-Commerce platform"})

        assert topic["title"] == "E-Commerce platform"

    async def test_update_title_conflict(self, db_session, stored_topics):
        with pytest.raises(ConflictError):
            await TopicService(db_session).update(stored_topics[0].id, {"title": "ai chatbot"})

    async def test_update_missing(self, db_session):
        with pytest.raises(NotFoundError):
            await TopicService(db_session).update(str(uuid.uuid4()), {"popularity": 1})

    async def test_soft_delete_is_idempotent(self, db_session, stored_topics):
        service = TopicService(db_session)
        target = stored_topics[0]

        await service.soft_delete(target.id)
        await service.soft_delete(target.id)

        assert (await service.get_by_id(target.id))["isActive"] is False
        assert (await service.list())["pagination"]["totalTopics"] == 2


class TestProjections:

    async def test_by_category_projection(self, db_session, stored_topics):
        items = await TopicService(db_session).list_by_category("web")

        assert len(items) == 1
        assert set(items[0]) == {"id", "title", "description", "difficulty", "duration", "popularity", "image"}

    async def test_trending_projection(self, db_session, stored_topics):
        items = await TopicService(db_session).list_trending()

        assert [i["title"] for i in items] == ["E-commerce Platform"]
        assert set(items[0]) == {
            "id", "title", "description", "category", "difficulty", "popularity", "image", "isTrending"
        }

    async def test_by_category_unknown_value(self, db_session, stored_topics):
        assert await TopicService(db_session).list_by_category("cooking") == []
