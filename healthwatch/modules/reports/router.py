from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from healthwatch.modules.reports.models import Report
from healthwatch.modules.reports.schemas import (
    HotspotQuery,
    ReportCreate,
    ReportListQuery,
    ReportRead,
    ReportSyncRequest,
    ReportSyncResponse,
    SmsReportRequest,
    VillageHotspot,
)
from healthwatch.modules.reports.service import ReportService

router = APIRouter()


@router.post(
    "",
    response_model=ReportRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a symptom report",
)
async def create_report(
    report_in: ReportCreate,
    service: ReportService = Depends(ReportService),
) -> Report:
    """
    Store a report submitted online by an ASHA worker or villager.

    Outbreak detection runs in the background for the report's village and
    symptoms; its outcome never changes this response.
    """
    return await service.create(report_in)


@router.post(
    "/sms",
    response_model=ReportRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a villager SMS report",
)
async def create_report_from_sms(
    sms_in: SmsReportRequest,
    service: ReportService = Depends(ReportService),
) -> Report:
    try:
        return await service.create_from_sms(sms_in)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post(
    "/sync",
    response_model=ReportSyncResponse,
    summary="Upload reports queued while offline",
)
async def sync_offline_reports(
    sync_in: ReportSyncRequest,
    service: ReportService = Depends(ReportService),
) -> ReportSyncResponse:
    return await service.sync_offline(sync_in)


@router.get("", response_model=List[ReportRead], summary="List reports")
async def list_reports(
    params: ReportListQuery = Depends(),
    service: ReportService = Depends(ReportService),
) -> List[Report]:
    return await service.get_multi(village=params.village, limit=params.limit, skip=params.skip)


@router.get(
    "/hotspots",
    response_model=List[VillageHotspot],
    summary="Per-village case counts and risk levels",
)
async def report_hotspots(
    params: HotspotQuery = Depends(),
    service: ReportService = Depends(ReportService),
) -> List[VillageHotspot]:
    """
    Reports from the last `days` (default 7) grouped by village. Risk is
    `high` above 5 cases, `medium` from 3 to 5 and `low` otherwise.
    """
    return await service.hotspots(days=params.days)
