"""Domain Model 测试"""

from datetime import UTC, datetime, timedelta

import pytest
from devtaskflow.core.models import (
    Identity,
    PushEvent,
    PushEventType,
    Session,
    Task,
    TaskStatus,
    parse_task_status,
)
from pydantic import SecretStr
from pydantic import ValidationError as PydanticValidationError


class TestTaskStatus:
    @pytest.mark.parametrize("value", ["open", "in-progress", "closed"])
    def test_parse_valid(self, value):
        assert parse_task_status(value) == TaskStatus(value)

    @pytest.mark.parametrize("value", ["OPEN", "done", "in_progress", "", None, 1])
    def test_parse_invalid(self, value):
        assert parse_task_status(value) is None


class TestTask:
    def test_defaults_to_open(self):
        task = Task(id=1, title="Fix bug", user_id="u1")
        assert task.status == TaskStatus.OPEN
        assert task.commit_sha is None

    def test_payload_shape(self):
        task = Task(id=1, title="Fix bug", commit_sha="abc123", user_id="u1")
        assert task.to_payload() == {
            "id": 1,
            "title": "Fix bug",
            "status": "open",
            "commit_sha": "abc123",
            "user_id": "u1",
        }

    def test_empty_title_rejected(self):
        with pytest.raises(PydanticValidationError):
            Task(id=1, title="", user_id="u1")


class TestIdentity:
    def test_public_view_hides_access_token(self):
        identity = Identity(
            id="1",
            username="alice",
            access_token=SecretStr("gho_secret"),
        )
        view = identity.public_view()
        assert "access_token" not in view
        assert view["username"] == "alice"

    def test_session_expiry(self):
        now = datetime.now(UTC)
        session = Session(
            session_id="s",
            identity=Identity(id="1", username="alice"),
            expires_at=now + timedelta(minutes=30),
        )
        assert session.is_expired(now) is False
        assert session.is_expired(now + timedelta(minutes=31)) is True


class TestPushEvent:
    def test_event_type_values(self):
        event = PushEvent(type=PushEventType.TASK_UPDATE, data={"id": 1})
        assert event.type.value == "task_update"
        assert PushEventType.TASK_STATUS_UPDATE.value == "task_status_update"
