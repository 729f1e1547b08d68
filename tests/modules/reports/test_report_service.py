from datetime import datetime, timezone
from types import SimpleNamespace
import uuid

import pytest
from pymongo.errors import PyMongoError

from healthwatch.modules.outbreak.models import ReportTrigger
from healthwatch.modules.reports.schemas import (
    OfflineReportUpload,
    ReportCreate,
    ReportSyncRequest,
    SmsReportRequest,
)
from healthwatch.modules.reports.service import ReportService
from healthwatch.modules.reports.sms import SmsParseError, render_sms_report
from healthwatch.shared.constants import SubmissionChannel


@pytest.fixture
def stored_reports(monkeypatch: pytest.MonkeyPatch) -> list[SimpleNamespace]:
    """Replace the Report document with an in-memory fake; returns the backing list."""
    stored: list[SimpleNamespace] = []

    class _FakeReport(SimpleNamespace):
        def __init__(self, **fields: object) -> None:
            super().__init__(
                id=uuid.uuid4().hex, created_at=datetime.now(timezone.utc), **fields
            )

        async def insert(self) -> "_FakeReport":
            if self.patient_name == "unsavable":
                raise PyMongoError("write failed")
            stored.append(self)
            return self

    monkeypatch.setattr("healthwatch.modules.reports.service.Report", _FakeReport)
    return stored


def _report_in(**overrides: object) -> ReportCreate:
    data = {
        "patientName": "Sita Devi",
        "village": "Rampur",
        "symptoms": "Diarrhea",
        "submitterId": "asha-1",
    }
    data.update(overrides)
    return ReportCreate.model_validate(data)


@pytest.mark.asyncio
async def test_create_stores_report_and_schedules_detection(
    stored_reports, recording_detector
) -> None:
    service = ReportService(detector=recording_detector)

    report = await service.create(_report_in())

    assert stored_reports == [report]
    assert report.submitted_via == SubmissionChannel.ONLINE
    assert recording_detector.scheduled == [ReportTrigger(village="Rampur", symptoms="Diarrhea")]


@pytest.mark.asyncio
async def test_create_from_sms_marks_channel(stored_reports, recording_detector) -> None:
    service = ReportService(detector=recording_detector)
    body = render_sms_report("Ravi", "Sitapur", "Vomiting", age=9)

    report = await service.create_from_sms(SmsReportRequest(body=body, sender_id="villager-7"))

    assert report.submitted_via == SubmissionChannel.SMS_VILLAGER
    assert report.submitter_id == "villager-7"
    assert report.age == 9
    assert recording_detector.scheduled == [ReportTrigger(village="Sitapur", symptoms="Vomiting")]


@pytest.mark.asyncio
async def test_malformed_sms_is_not_stored(stored_reports, recording_detector) -> None:
    service = ReportService(detector=recording_detector)

    with pytest.raises(SmsParseError):
        await service.create_from_sms(SmsReportRequest(body="hello", sender_id="v-1"))

    assert stored_reports == []
    assert recording_detector.scheduled == []


@pytest.mark.asyncio
async def test_sync_keeps_going_after_a_failed_insert(stored_reports, recording_detector) -> None:
    service = ReportService(detector=recording_detector)
    queued_at = datetime(2025, 8, 14, 6, 0, tzinfo=timezone.utc)
    sync_in = ReportSyncRequest(
        reports=[
            OfflineReportUpload(
                client_id="a",
                patient_name="Sita",
                village="Rampur",
                symptoms="Fever",
                submitter_id="asha-1",
                created_at=queued_at,
            ),
            OfflineReportUpload(
                client_id="b",
                patient_name="unsavable",
                village="Rampur",
                symptoms="Fever",
                submitter_id="asha-1",
            ),
            OfflineReportUpload(
                client_id="c",
                patient_name="Ravi",
                village="Rampur",
                symptoms="Fever",
                submitter_id="asha-1",
                submitted_via=SubmissionChannel.SMS,
            ),
        ]
    )

    result = await service.sync_offline(sync_in)

    assert result.synced == ["a", "c"]
    assert result.failed == ["b"]
    assert stored_reports[0].created_at == queued_at
    assert stored_reports[0].submitted_via == SubmissionChannel.OFFLINE_VILLAGER
    assert len(recording_detector.scheduled) == 2


def test_offline_upload_rejects_online_channel() -> None:
    with pytest.raises(ValueError):
        OfflineReportUpload(
            client_id="a",
            patient_name="Sita",
            village="Rampur",
            symptoms="Fever",
            submitter_id="asha-1",
            submitted_via=SubmissionChannel.ONLINE,
        )
