from typing import List, Optional

import structlog
from bson import ObjectId

from healthwatch.modules.feedback.models import EducationContent, Feedback
from healthwatch.modules.feedback.schemas import (
    EducationContentCreate,
    FeedbackCreate,
    FeedbackUpdate,
)
from healthwatch.shared.constants import FeedbackStatus, Role

log = structlog.get_logger()


class FeedbackService:
    """Community feedback and the officials' replies to it."""

    async def create(self, feedback_in: FeedbackCreate) -> Feedback:
        feedback = Feedback(**feedback_in.model_dump())
        await feedback.insert()
        return feedback

    async def get_multi(
        self,
        village: Optional[str] = None,
        status: Optional[FeedbackStatus] = None,
        limit: int = 100,
    ) -> List[Feedback]:
        filters: dict[str, object] = {}
        if village:
            filters["village"] = village
        if status is not None:
            filters["status"] = status.value
        items: List[Feedback] = (
            await Feedback.find(filters).sort("-created_at").limit(limit).to_list()
        )
        return items

    async def respond(self, feedback_id: str, update: FeedbackUpdate) -> Feedback | None:
        """Apply an official's reply. Returns None when the feedback does not exist."""
        if not ObjectId.is_valid(feedback_id):
            return None
        feedback = await Feedback.get(ObjectId(feedback_id))
        if feedback is None:
            return None

        if update.response is not None:
            feedback.response = update.response
            # A reply without an explicit status moves the item out of pending
            if update.status is None and feedback.status == FeedbackStatus.PENDING:
                feedback.status = FeedbackStatus.REVIEWED
        if update.status is not None:
            feedback.status = update.status

        await feedback.save()
        log.info("feedback_responded", feedback_id=feedback_id, status=feedback.status.value)
        return feedback


class EducationService:
    async def create(self, content_in: EducationContentCreate) -> EducationContent:
        content = EducationContent(**content_in.model_dump())
        await content.insert()
        return content

    async def get_for_role(self, role: Role) -> List[EducationContent]:
        """Active content for a role, highest priority first."""
        items: List[EducationContent] = (
            await EducationContent.find({"target_role": role.value, "is_active": True})
            .sort([("priority", -1), ("created_at", -1)])
            .to_list()
        )
        return items
