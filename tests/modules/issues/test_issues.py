from datetime import datetime, timezone
from types import SimpleNamespace
import uuid

import pytest
from httpx import AsyncClient
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from healthwatch.main import app
from healthwatch.modules.issues.schemas import (
    IssueCreate,
    IssueSyncRequest,
    OfflineIssueUpload,
)
from healthwatch.modules.issues.service import IssueService
from healthwatch.shared.constants import IssueType

CREATED_AT = datetime(2025, 8, 14, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def stored_issues(monkeypatch: pytest.MonkeyPatch) -> list[SimpleNamespace]:
    """Replace the CommunityIssue document with an in-memory fake."""
    stored: list[SimpleNamespace] = []

    class _FakeIssue(SimpleNamespace):
        def __init__(self, **fields: object) -> None:
            super().__init__(
                id=uuid.uuid4().hex, created_at=datetime.now(timezone.utc), **fields
            )

        async def insert(self) -> "_FakeIssue":
            if self.village == "Offline":
                raise PyMongoError("write failed")
            stored.append(self)
            return self

    monkeypatch.setattr("healthwatch.modules.issues.service.CommunityIssue", _FakeIssue)
    return stored


@pytest.mark.asyncio
async def test_create_stores_issue(stored_issues) -> None:
    issue = await IssueService().create(
        IssueCreate(
            issue_type=IssueType.HAND_PUMP_BROKEN,
            description="  ",
            village=" Rampur ",
            submitted_by="villager-1",
        )
    )

    assert stored_issues == [issue]
    assert issue.village == "Rampur"
    assert issue.description is None


@pytest.mark.asyncio
async def test_sync_reports_each_issue(stored_issues) -> None:
    queued_at = datetime(2025, 8, 13, 6, 0, tzinfo=timezone.utc)
    sync_in = IssueSyncRequest(
        issues=[
            OfflineIssueUpload(
                client_id="offline_1",
                issue_type=IssueType.DIRTY_WATER,
                village="Rampur",
                submitted_by="villager-1",
                created_at=queued_at.timestamp(),
            ),
            OfflineIssueUpload(
                client_id="offline_2",
                issue_type=IssueType.OTHER,
                village="Offline",
                submitted_by="villager-1",
            ),
        ]
    )

    result = await IssueService().sync_offline(sync_in)

    assert result.synced == ["offline_1"]
    assert result.failed == ["offline_2"]
    assert stored_issues[0].created_at == queued_at


def test_unknown_issue_type_rejected() -> None:
    with pytest.raises(ValidationError):
        IssueCreate.model_validate(
            {"issueType": "flood", "village": "Rampur", "submittedBy": "villager-1"}
        )


class FakeIssueService:
    def __init__(self) -> None:
        self.created: list[IssueCreate] = []
        self.listed_for: list[str] = []

    async def create(self, issue_in: IssueCreate) -> SimpleNamespace:
        self.created.append(issue_in)
        return SimpleNamespace(id="i1", created_at=CREATED_AT, **issue_in.model_dump())

    async def get_for_submitter(self, submitted_by: str, limit: int = 100) -> list[SimpleNamespace]:
        self.listed_for.append(submitted_by)
        return [
            SimpleNamespace(
                id=f"i{index}",
                issue_type=IssueType.DIRTY_WATER,
                description=None,
                village="Rampur",
                submitted_by=issue.submitted_by,
                created_at=CREATED_AT,
            )
            for index, issue in enumerate(self.created)
            if issue.submitted_by == submitted_by
        ][:limit]


@pytest.fixture
def fake_service() -> FakeIssueService:
    service = FakeIssueService()
    app.dependency_overrides[IssueService] = lambda: service
    return service


@pytest.mark.asyncio
async def test_submit_and_list_own_issues(client: AsyncClient, fake_service) -> None:
    response = await client.post(
        "/api/v1/issues",
        json={
            "issueType": "dirty_water",
            "description": "Water from the well smells bad",
            "village": "Rampur",
            "submittedBy": "villager-1",
        },
    )

    assert response.status_code == 201
    assert response.json()["issueType"] == "dirty_water"

    listing = await client.get("/api/v1/issues", params={"submittedBy": "villager-1"})

    assert listing.status_code == 200
    assert fake_service.listed_for == ["villager-1"]
    assert [item["submittedBy"] for item in listing.json()] == ["villager-1"]


@pytest.mark.asyncio
async def test_list_requires_submitter(client: AsyncClient, fake_service) -> None:
    response = await client.get("/api/v1/issues")

    assert response.status_code == 422
