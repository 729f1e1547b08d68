"""In-memory gateway and fixtures for outbreak detection tests."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any
import uuid

import pytest

from healthwatch.modules.alerts.schemas import AlertInsert
from healthwatch.modules.outbreak.clock import FixedClock
from healthwatch.modules.outbreak.config import OutbreakRulesConfig
from healthwatch.modules.outbreak.detector import OutbreakDetector
from healthwatch.modules.outbreak.gateway import DataStoreError
from healthwatch.modules.outbreak.models import (
    AlertQuery,
    ProfileQuery,
    ReportQuery,
    SensorQuery,
)
from healthwatch.shared.constants import Role

# A Thursday in the monsoon window
MONSOON_NOW = datetime(2025, 8, 14, 12, 0, tzinfo=timezone.utc)
DRY_SEASON_NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


class InMemoryDataStore:
    """Gateway stand-in backed by lists. `fail_on` names operations that raise."""

    def __init__(self, clock: FixedClock) -> None:
        self.clock = clock
        self.reports: list[SimpleNamespace] = []
        self.sensors: list[SimpleNamespace] = []
        self.alerts: list[SimpleNamespace] = []
        self.profiles: list[SimpleNamespace] = []
        self.fail_on: set[str] = set()
        self.calls: list[str] = []

    # --- seeding helpers ---

    def add_report(self, village: str, symptoms: str, hours_ago: float = 1) -> SimpleNamespace:
        report = SimpleNamespace(
            id=uuid.uuid4().hex,
            patient_name="Patient",
            village=village,
            symptoms=symptoms,
            created_at=self.clock.now() - timedelta(hours=hours_ago),
        )
        self.reports.append(report)
        return report

    def add_sensor(
        self, village: str, ph: float, turbidity: float, hours_ago: float = 1
    ) -> SimpleNamespace:
        reading = SimpleNamespace(
            id=uuid.uuid4().hex,
            village=village,
            ph=ph,
            turbidity=turbidity,
            created_at=self.clock.now() - timedelta(hours=hours_ago),
        )
        self.sensors.append(reading)
        return reading

    def add_alert(self, hours_ago: float = 1, **fields: Any) -> SimpleNamespace:
        data = {
            "message": "existing",
            "target_roles": [Role.OFFICIAL],
            "created_by": "seed",
            "village": None,
            "type": None,
            "disease_or_parameter": None,
            "value": None,
            "auto": False,
        }
        data.update(fields)
        alert = SimpleNamespace(
            id=uuid.uuid4().hex,
            created_at=self.clock.now() - timedelta(hours=hours_ago),
            **data,
        )
        self.alerts.append(alert)
        return alert

    def add_profile(self, user_id: str, role: Role) -> SimpleNamespace:
        profile = SimpleNamespace(user_id=user_id, role=role, name=user_id, village="Rampur")
        self.profiles.append(profile)
        return profile

    def auto_alerts(self, type_value: str | None = None) -> list[SimpleNamespace]:
        return [
            a
            for a in self.alerts
            if a.auto and (type_value is None or a.type.value == type_value)
        ]

    # --- gateway protocol ---

    def _check(self, op: str) -> None:
        self.calls.append(op)
        if op in self.fail_on:
            raise DataStoreError(f"{op} unavailable")

    async def query_reports(self, query: ReportQuery) -> list[SimpleNamespace]:
        self._check("query_reports")

        def matches(report: SimpleNamespace) -> bool:
            if report.created_at < query.created_after:
                return False
            if query.village is not None and report.village != query.village:
                return False
            if query.symptoms is not None and report.symptoms != query.symptoms:
                return False
            if query.symptoms_contains_any_of:
                lowered = report.symptoms.lower()
                if not any(k.lower() in lowered for k in query.symptoms_contains_any_of):
                    return False
            return True

        return [r for r in self.reports if matches(r)]

    async def query_sensors(self, query: SensorQuery) -> list[SimpleNamespace]:
        self._check("query_sensors")

        def matches(reading: SimpleNamespace) -> bool:
            if reading.created_at < query.created_after:
                return False
            ph_breach = query.ph_below is not None and reading.ph < query.ph_below
            turbidity_breach = (
                query.turbidity_above is not None and reading.turbidity > query.turbidity_above
            )
            return ph_breach or turbidity_breach

        return sorted(
            (s for s in self.sensors if matches(s)), key=lambda s: s.created_at
        )

    async def query_alerts(
        self, query: AlertQuery, limit: int | None = None
    ) -> list[SimpleNamespace]:
        self._check("query_alerts")

        def matches(alert: SimpleNamespace) -> bool:
            if query.village is not None and alert.village != query.village:
                return False
            if (
                query.disease_or_parameter is not None
                and alert.disease_or_parameter != query.disease_or_parameter
            ):
                return False
            if query.auto is not None and alert.auto != query.auto:
                return False
            if query.created_after is not None and alert.created_at < query.created_after:
                return False
            if query.target_role is not None and query.target_role not in alert.target_roles:
                return False
            return True

        items = sorted(
            (a for a in self.alerts if matches(a)), key=lambda a: a.created_at, reverse=True
        )
        return items[:limit] if limit is not None else items

    async def query_profiles(
        self, query: ProfileQuery, limit: int | None = None
    ) -> list[SimpleNamespace]:
        self._check("query_profiles")
        items = [p for p in self.profiles if p.role == query.role]
        return items[:limit] if limit is not None else items

    async def insert_alert(self, alert: AlertInsert) -> SimpleNamespace:
        self._check("insert_alert")
        stored = SimpleNamespace(
            id=uuid.uuid4().hex,
            created_at=self.clock.now(),
            **alert.model_dump(),
        )
        self.alerts.append(stored)
        return stored


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(MONSOON_NOW)


@pytest.fixture
def dry_clock() -> FixedClock:
    return FixedClock(DRY_SEASON_NOW)


@pytest.fixture
def rules() -> OutbreakRulesConfig:
    return OutbreakRulesConfig()


@pytest.fixture
def store(clock: FixedClock) -> InMemoryDataStore:
    return InMemoryDataStore(clock)


@pytest.fixture
def detector(
    store: InMemoryDataStore, rules: OutbreakRulesConfig, clock: FixedClock
) -> OutbreakDetector:
    return OutbreakDetector(gateway=store, rules=rules, clock=clock)
