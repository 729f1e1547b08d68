from typing import List

import structlog
from pymongo.errors import PyMongoError

from healthwatch.modules.issues.models import CommunityIssue
from healthwatch.modules.issues.schemas import (
    IssueCreate,
    IssueSyncRequest,
    IssueSyncResponse,
)

log = structlog.get_logger()


class IssueService:
    """Villager issue reports. These are not symptom reports and do not feed outbreak detection."""

    async def create(self, issue_in: IssueCreate) -> CommunityIssue:
        issue = CommunityIssue(
            issue_type=issue_in.issue_type,
            description=issue_in.description,
            village=issue_in.village,
            submitted_by=issue_in.submitted_by,
        )
        await issue.insert()
        log.info("community_issue_created", village=issue.village, issue_type=issue.issue_type.value)
        return issue

    async def get_for_submitter(self, submitted_by: str, limit: int = 100) -> List[CommunityIssue]:
        issues: List[CommunityIssue] = (
            await CommunityIssue.find({"submitted_by": submitted_by})
            .sort("-created_at")
            .limit(limit)
            .to_list()
        )
        return issues

    async def sync_offline(self, sync_in: IssueSyncRequest) -> IssueSyncResponse:
        result = IssueSyncResponse()
        for upload in sync_in.issues:
            issue = CommunityIssue(
                issue_type=upload.issue_type,
                description=upload.description,
                village=upload.village,
                submitted_by=upload.submitted_by,
            )
            if upload.created_at is not None:
                issue.created_at = upload.created_at
            try:
                await issue.insert()
            except PyMongoError as exc:
                log.warning("offline_issue_sync_failed", client_id=upload.client_id, error=str(exc))
                result.failed.append(upload.client_id)
                continue
            result.synced.append(upload.client_id)

        log.info("offline_issues_synced", synced=len(result.synced), failed=len(result.failed))
        return result
