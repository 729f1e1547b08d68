from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from httpx import AsyncClient

from healthwatch.main import app
from healthwatch.modules.alerts.schemas import AlertCreate, AlertInsert
from healthwatch.modules.alerts.service import AlertService
from healthwatch.shared.constants import AlertType, Role

CREATED_AT = datetime(2025, 8, 14, 12, 0, tzinfo=timezone.utc)


class FakeAlertService:
    def __init__(self) -> None:
        self.created: list[AlertCreate] = []
        self.list_args: dict[str, object] | None = None
        self.feed = [
            SimpleNamespace(
                id="a1",
                message="Water quality alert: High turbidity in Rampur (8.0 NTU)",
                target_roles=[Role.OFFICIAL, Role.COMMUNITY, Role.VILLAGER],
                created_by="00000000-0000-0000-0000-000000000000",
                village="Rampur",
                type=AlertType.WATER_QUALITY,
                disease_or_parameter="turbidity",
                value=8.0,
                auto=True,
                created_at=CREATED_AT,
                updated_at=CREATED_AT,
            )
        ]

    async def create(self, alert_in: AlertCreate) -> SimpleNamespace:
        self.created.append(alert_in)
        return SimpleNamespace(
            id="a2",
            message=alert_in.message,
            target_roles=alert_in.target_roles,
            created_by=alert_in.created_by,
            village=alert_in.village,
            type=None,
            disease_or_parameter=None,
            value=None,
            auto=False,
            created_at=CREATED_AT,
            updated_at=CREATED_AT,
        )

    async def get_multi(self, role=None, village=None, auto=None, limit=50):
        self.list_args = {"role": role, "village": village, "auto": auto, "limit": limit}
        return self.feed


@pytest.fixture
def fake_service() -> FakeAlertService:
    service = FakeAlertService()
    app.dependency_overrides[AlertService] = lambda: service
    return service


@pytest.mark.asyncio
async def test_manual_alert_deduplicates_roles(client: AsyncClient, fake_service) -> None:
    response = await client.post(
        "/api/v1/alerts",
        json={
            "message": "Boil water before drinking",
            "targetRoles": ["villager", "asha", "villager"],
            "createdBy": "official-1",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["targetRoles"] == ["villager", "asha"]
    assert body["auto"] is False


@pytest.mark.asyncio
async def test_manual_alert_needs_a_target_role(client: AsyncClient, fake_service) -> None:
    response = await client.post(
        "/api/v1/alerts",
        json={"message": "Boil water", "targetRoles": [], "createdBy": "official-1"},
    )

    assert response.status_code == 422
    assert fake_service.created == []


@pytest.mark.asyncio
async def test_role_feed(client: AsyncClient, fake_service) -> None:
    response = await client.get("/api/v1/alerts", params={"role": "villager", "auto": "true"})

    assert response.status_code == 200
    assert fake_service.list_args == {
        "role": Role.VILLAGER,
        "village": None,
        "auto": True,
        "limit": 50,
    }
    alert = response.json()[0]
    assert alert["diseaseOrParameter"] == "turbidity"
    assert alert["type"] == "water_quality"


def test_auto_alert_insert_requires_detection_fields() -> None:
    with pytest.raises(ValueError):
        AlertInsert(
            message="auto",
            target_roles=[Role.OFFICIAL],
            created_by="system",
            auto=True,
        )


class _RecordingFind:
    def __init__(self, filters: dict) -> None:
        self.filters = filters
        self.sort_key: str | None = None
        self.limit_n: int | None = None

    def sort(self, key: str) -> "_RecordingFind":
        self.sort_key = key
        return self

    def limit(self, n: int) -> "_RecordingFind":
        self.limit_n = n
        return self

    async def to_list(self) -> list:
        return []


@pytest.mark.asyncio
async def test_feed_filters_by_role_membership(monkeypatch: pytest.MonkeyPatch) -> None:
    finds: list[_RecordingFind] = []

    def find(filters: dict) -> _RecordingFind:
        finds.append(_RecordingFind(filters))
        return finds[-1]

    monkeypatch.setattr(
        "healthwatch.modules.alerts.service.Alert", SimpleNamespace(find=find)
    )

    await AlertService().get_multi(role=Role.VILLAGER, village="Rampur", auto=True, limit=10)
    await AlertService().get_multi(village="")

    assert finds[0].filters == {"village": "Rampur", "auto": True, "target_roles": "villager"}
    assert finds[0].sort_key == "-created_at"
    assert finds[0].limit_n == 10
    assert finds[1].filters == {}
