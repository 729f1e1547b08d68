from typing import List

from fastapi import APIRouter, Depends, Query, status

from healthwatch.modules.issues.models import CommunityIssue
from healthwatch.modules.issues.schemas import (
    IssueCreate,
    IssueRead,
    IssueSyncRequest,
    IssueSyncResponse,
)
from healthwatch.modules.issues.service import IssueService

router = APIRouter()


@router.post(
    "",
    response_model=IssueRead,
    status_code=status.HTTP_201_CREATED,
    summary="Report a village issue",
)
async def create_issue(
    issue_in: IssueCreate,
    service: IssueService = Depends(IssueService),
) -> CommunityIssue:
    return await service.create(issue_in)


@router.post(
    "/sync",
    response_model=IssueSyncResponse,
    summary="Upload issues queued while offline",
)
async def sync_offline_issues(
    sync_in: IssueSyncRequest,
    service: IssueService = Depends(IssueService),
) -> IssueSyncResponse:
    return await service.sync_offline(sync_in)


@router.get("", response_model=List[IssueRead], summary="List a villager's own issues")
async def list_issues(
    submitted_by: str = Query(..., alias="submittedBy", min_length=1),
    limit: int = Query(100, ge=1, le=1000),
    service: IssueService = Depends(IssueService),
) -> List[CommunityIssue]:
    return await service.get_for_submitter(submitted_by, limit=limit)
