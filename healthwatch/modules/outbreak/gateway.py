"""Data access used by outbreak detection.

The rules only talk to a `DataStoreGateway`; `BeanieDataStore` is the
MongoDB-backed implementation used by the running service.
"""

import re
from typing import Any, Protocol

from pymongo.errors import PyMongoError

from healthwatch.modules.alerts.models import Alert
from healthwatch.modules.alerts.schemas import AlertInsert
from healthwatch.modules.outbreak.models import (
    AlertQuery,
    ProfileQuery,
    ReportQuery,
    SensorQuery,
)
from healthwatch.modules.profiles.models import Profile
from healthwatch.modules.reports.models import Report
from healthwatch.modules.sensors.models import SensorReading


class DataStoreError(Exception):
    """A query or insert against the backing store failed."""


class DataStoreGateway(Protocol):
    async def query_reports(self, query: ReportQuery) -> list[Report]: ...

    async def query_sensors(self, query: SensorQuery) -> list[SensorReading]: ...

    async def query_alerts(
        self, query: AlertQuery, limit: int | None = None
    ) -> list[Alert]: ...

    async def query_profiles(
        self, query: ProfileQuery, limit: int | None = None
    ) -> list[Profile]: ...

    async def insert_alert(self, alert: AlertInsert) -> Alert: ...


def _contains_pattern(needle: str) -> dict[str, str]:
    return {"$regex": re.escape(needle), "$options": "i"}


def report_filter(query: ReportQuery) -> dict[str, Any]:
    filters: dict[str, Any] = {"created_at": {"$gte": query.created_after}}
    if query.village is not None:
        filters["village"] = query.village
    if query.symptoms is not None:
        filters["symptoms"] = query.symptoms
    if query.symptoms_contains_any_of:
        filters["$or"] = [
            {"symptoms": _contains_pattern(keyword)}
            for keyword in query.symptoms_contains_any_of
        ]
    return filters


def sensor_filter(query: SensorQuery) -> dict[str, Any]:
    filters: dict[str, Any] = {"created_at": {"$gte": query.created_after}}
    breaches: list[dict[str, Any]] = []
    if query.ph_below is not None:
        breaches.append({"ph": {"$lt": query.ph_below}})
    if query.turbidity_above is not None:
        breaches.append({"turbidity": {"$gt": query.turbidity_above}})
    if breaches:
        filters["$or"] = breaches
    return filters


def alert_filter(query: AlertQuery) -> dict[str, Any]:
    filters: dict[str, Any] = {}
    if query.village is not None:
        filters["village"] = query.village
    if query.disease_or_parameter is not None:
        filters["disease_or_parameter"] = query.disease_or_parameter
    if query.auto is not None:
        filters["auto"] = query.auto
    if query.created_after is not None:
        filters["created_at"] = {"$gte": query.created_after}
    if query.target_role is not None:
        # array field: equality matches membership
        filters["target_roles"] = query.target_role.value
    return filters


def profile_filter(query: ProfileQuery) -> dict[str, Any]:
    return {"role": query.role.value}


class BeanieDataStore:
    """DataStoreGateway over the beanie documents. Driver errors become DataStoreError."""

    async def query_reports(self, query: ReportQuery) -> list[Report]:
        try:
            return await Report.find(report_filter(query)).sort("-created_at").to_list()
        except PyMongoError as exc:
            raise DataStoreError(f"report query failed: {exc}") from exc

    async def query_sensors(self, query: SensorQuery) -> list[SensorReading]:
        try:
            return (
                await SensorReading.find(sensor_filter(query))
                .sort("+created_at")
                .to_list()
            )
        except PyMongoError as exc:
            raise DataStoreError(f"sensor query failed: {exc}") from exc

    async def query_alerts(
        self, query: AlertQuery, limit: int | None = None
    ) -> list[Alert]:
        try:
            cursor = Alert.find(alert_filter(query)).sort("-created_at")
            if limit is not None:
                cursor = cursor.limit(limit)
            return await cursor.to_list()
        except PyMongoError as exc:
            raise DataStoreError(f"alert query failed: {exc}") from exc

    async def query_profiles(
        self, query: ProfileQuery, limit: int | None = None
    ) -> list[Profile]:
        try:
            cursor = Profile.find(profile_filter(query))
            if limit is not None:
                cursor = cursor.limit(limit)
            return await cursor.to_list()
        except PyMongoError as exc:
            raise DataStoreError(f"profile query failed: {exc}") from exc

    async def insert_alert(self, alert: AlertInsert) -> Alert:
        document = Alert(**alert.model_dump())
        try:
            await document.insert()
        except PyMongoError as exc:
            raise DataStoreError(f"alert insert failed: {exc}") from exc
        return document
