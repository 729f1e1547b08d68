from datetime import datetime, timedelta, timezone
from typing import List, Optional

import structlog
from fastapi import Depends
from pymongo.errors import PyMongoError

from healthwatch.modules.outbreak.detector import OutbreakDetector
from healthwatch.modules.outbreak.models import ReportTrigger
from healthwatch.modules.outbreak.service import get_outbreak_detector
from healthwatch.modules.reports.hotspots import summarize_hotspots
from healthwatch.modules.reports.models import Report
from healthwatch.modules.reports.schemas import (
    OfflineReportUpload,
    ReportCreate,
    ReportSyncRequest,
    ReportSyncResponse,
    SmsReportRequest,
    VillageHotspot,
)
from healthwatch.modules.reports.sms import parse_sms_report
from healthwatch.shared.constants import SubmissionChannel

log = structlog.get_logger()


class ReportService:
    """Stores symptom reports and hands every stored report to outbreak detection."""

    def __init__(
        self, detector: OutbreakDetector = Depends(get_outbreak_detector)
    ) -> None:
        self._detector = detector

    async def create(self, report_in: ReportCreate) -> Report:
        report = await self._store(report_in)
        self._trigger_detection(report)
        return report

    async def create_from_sms(self, sms_in: SmsReportRequest) -> Report:
        """Parse a villager SMS; raises SmsParseError (a ValueError) on a malformed body."""
        parsed = parse_sms_report(sms_in.body)
        report_in = ReportCreate(
            patient_name=parsed.patient_name,
            village=parsed.village,
            symptoms=parsed.symptoms,
            water_source=sms_in.water_source,
            submitted_via=SubmissionChannel.SMS_VILLAGER,
            submitter_id=sms_in.sender_id,
            age=parsed.age,
        )
        return await self.create(report_in)

    async def sync_offline(self, sync_in: ReportSyncRequest) -> ReportSyncResponse:
        """Upload queued reports one by one; a failed insert does not stop the batch."""
        result = ReportSyncResponse()
        for upload in sync_in.reports:
            try:
                report = await self._store(upload, created_at=upload.created_at)
            except PyMongoError as exc:
                log.warning(
                    "offline_report_sync_failed", client_id=upload.client_id, error=str(exc)
                )
                result.failed.append(upload.client_id)
                continue
            result.synced.append(upload.client_id)
            self._trigger_detection(report)

        log.info("offline_reports_synced", synced=len(result.synced), failed=len(result.failed))
        return result

    async def get_multi(
        self, village: Optional[str] = None, limit: int = 100, skip: int = 0
    ) -> List[Report]:
        """Return reports newest-first, optionally for a single village."""
        filters = {"village": village} if village else {}
        reports: List[Report] = (
            await Report.find(filters).sort("-created_at").skip(skip).limit(limit).to_list()
        )
        return reports

    async def hotspots(self, days: int = 7) -> List[VillageHotspot]:
        """Case count, most common symptom and risk level per village over the last `days`."""
        since = datetime.now(timezone.utc) - timedelta(days=days)
        reports: List[Report] = (
            await Report.find({"created_at": {"$gte": since}}).sort("-created_at").to_list()
        )
        return summarize_hotspots(reports)

    async def _store(
        self, report_in: ReportCreate | OfflineReportUpload, created_at: datetime | None = None
    ) -> Report:
        report = Report(
            patient_name=report_in.patient_name,
            village=report_in.village,
            symptoms=report_in.symptoms,
            water_source=report_in.water_source,
            submitted_via=report_in.submitted_via,
            submitter_id=report_in.submitter_id,
            age=report_in.age,
        )
        if created_at is not None:
            report.created_at = _ensure_utc(created_at)
        await report.insert()
        return report

    def _trigger_detection(self, report: Report) -> None:
        # Fire and forget: the submission result does not depend on detection.
        self._detector.schedule(ReportTrigger(village=report.village, symptoms=report.symptoms))


def _ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
