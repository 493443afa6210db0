"""
Unit Tests for proposal submission validation and snapshot building
"""
import pytest

from app.core.exceptions import ValidationError
from app.core.types import is_valid_uuid
from app.services.proposal_service import (
    TOPIC_DEFAULTS,
    PROPOSAL_DEFAULTS,
    build_user_snapshot,
    build_topic_snapshot,
    build_proposal_body,
    validate_submission,
)

USER = {"name": "A", "email": "a@x.com"}
BODY = {"title": "T", "description": "D"}


class TestValidateSubmission:

    @pytest.mark.parametrize("user, topics, body", [
        (None, [{}, {}, {}], BODY),
        (USER, None, BODY),
        (USER, [{}, {}, {}], None),
        ("", [{}, {}, {}], BODY),
    ])
    def test_missing_part(self, user, topics, body):
        with pytest.raises(ValidationError) as exc_info:
            validate_submission(user, topics, body)

        assert exc_info.value.message == "Missing required fields: user, selectedTopics, or generatedProposal"

    @pytest.mark.parametrize("topics, received", [
        ([], 0),
        ([{}, {}], 2),
        ([{}, {}, {}, {}], 4),
        ({"a": 1}, None),
    ])
    def test_topic_count(self, topics, received):
        with pytest.raises(ValidationError) as exc_info:
            validate_submission(USER, topics, BODY)

        assert exc_info.value.message == "A proposal must contain exactly 3 topics"
        assert exc_info.value.details["received"] == received

    def test_count_checked_before_user_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_submission({"name": "A"}, [{}], BODY)

        assert "exactly 3" in exc_info.value.message

    @pytest.mark.parametrize("user", [{"name": "A"}, {"email": "a@x.com"}, {"name": "", "email": "a@x.com"}])
    def test_user_needs_name_and_email(self, user):
        with pytest.raises(ValidationError) as exc_info:
            validate_submission(user, [{}, {}, {}], BODY)

        assert exc_info.value.message == "User must have name and email"

    @pytest.mark.parametrize("body", [{"title": "T"}, {"description": "D"}, {"title": "", "description": "D"}])
    def test_proposal_needs_title_and_description(self, body):
        with pytest.raises(ValidationError) as exc_info:
            validate_submission(USER, [{}, {}, {}], body)

        assert exc_info.value.message == "Generated proposal must have title and description"

    def test_valid_submission_passes(self):
        assert validate_submission(USER, [{}, {}, {}], BODY) is None

    def test_whitespace_user_name_is_supplied(self):
        assert validate_submission({"name": "  ", "email": "a@x.com"}, [{}, {}, {}], BODY) is None


class TestUserSnapshot:

    def test_defaults(self):
        snapshot = build_user_snapshot(USER)

        assert is_valid_uuid(snapshot["userId"])
        assert snapshot["name"] == "A"
        assert snapshot["email"] == "a@x.com"
        assert snapshot["studentId"] == ""
        assert snapshot["department"] == ""
        assert snapshot["semester"] == ""

    def test_supplied_values_kept(self):
        snapshot = build_user_snapshot({**USER, "userId": "u-7", "semester": "8th"})

        assert snapshot["userId"] == "u-7"
        assert snapshot["semester"] == "8th"

    def test_extra_fields_dropped(self):
        assert "password" not in build_user_snapshot({**USER, "password": "secret"})


class TestTopicSnapshot:

    def test_empty_topic_fully_defaulted(self):
        snapshot = build_topic_snapshot({})

        assert is_valid_uuid(snapshot["topicId"])
        assert snapshot["title"] == "Untitled Topic"
        assert snapshot["category"] == "general"
        assert snapshot["difficulty"] == "beginner"
        assert snapshot["duration"] == "4 weeks"
        assert snapshot["complexity"] == 5
        assert snapshot["popularity"] == 50
        assert snapshot["technologies"] == []
        assert snapshot["image"] == ""

    def test_fields_defaulted_independently(self):
        snapshot = build_topic_snapshot({"title": "Chat", "complexity": 9})

        assert snapshot["title"] == "Chat"
        assert snapshot["complexity"] == 9
        assert snapshot["popularity"] == TOPIC_DEFAULTS["popularity"]

    def test_falsy_values_defaulted_but_whitespace_and_empty_lists_kept(self):
        snapshot = build_topic_snapshot({"title": "  ", "technologies": [], "complexity": 0, "image": None})

        assert snapshot["title"] == "  "
        assert snapshot["technologies"] == []
        assert snapshot["complexity"] == TOPIC_DEFAULTS["complexity"]
        assert snapshot["image"] == ""

    @pytest.mark.parametrize("topic, expected", [
        ({"topicId": "t1", "_id": "m1", "id": "i1"}, "t1"),
        ({"_id": "m1", "id": "i1"}, "m1"),
        ({"id": "i1"}, "i1"),
    ])
    def test_topic_id_fallbacks(self, topic, expected):
        assert build_topic_snapshot(topic)["topicId"] == expected

    def test_default_lists_not_shared(self):
        first = build_topic_snapshot({})
        first["technologies"].append("Go")

        assert build_topic_snapshot({})["technologies"] == []

    def test_non_dict_topic_defaulted(self):
        assert build_topic_snapshot("web")["title"] == "Untitled Topic"


class TestProposalBody:

    def test_defaults(self):
        body = build_proposal_body(BODY)

        assert body["title"] == "T"
        assert body["description"] == "D"
        for key, default in PROPOSAL_DEFAULTS.items():
            assert body[key] == default

    def test_empty_values_fall_back(self):
        body = build_proposal_body({**BODY, "scope": "", "budgetEstimate": None})

        assert body["scope"] == "Project scope not specified"
        assert body["budgetEstimate"] == "$15,000 - $20,000"

    def test_empty_lists_kept(self):
        body = build_proposal_body({**BODY, "objectives": [], "resourcesNeeded": []})

        assert body["objectives"] == []
        assert body["resourcesNeeded"] == []

    def test_supplied_values_kept(self):
        body = build_proposal_body({**BODY, "timeline": "6 weeks", "budgetEstimate": "$1"})

        assert body["timeline"] == "6 weeks"
        assert body["budgetEstimate"] == "$1"
