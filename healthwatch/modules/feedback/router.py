from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from healthwatch.modules.feedback.models import EducationContent, Feedback
from healthwatch.modules.feedback.schemas import (
    EducationContentCreate,
    EducationContentRead,
    FeedbackCreate,
    FeedbackListQuery,
    FeedbackRead,
    FeedbackUpdate,
)
from healthwatch.modules.feedback.service import EducationService, FeedbackService
from healthwatch.shared.constants import Role

router = APIRouter()


@router.post(
    "/feedback",
    response_model=FeedbackRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit community feedback",
)
async def create_feedback(
    feedback_in: FeedbackCreate,
    service: FeedbackService = Depends(FeedbackService),
) -> Feedback:
    return await service.create(feedback_in)


@router.get("/feedback", response_model=List[FeedbackRead], summary="List feedback")
async def list_feedback(
    params: FeedbackListQuery = Depends(),
    service: FeedbackService = Depends(FeedbackService),
) -> List[Feedback]:
    return await service.get_multi(village=params.village, status=params.status, limit=params.limit)


@router.patch(
    "/feedback/{feedback_id}",
    response_model=FeedbackRead,
    summary="Respond to feedback",
)
async def respond_to_feedback(
    feedback_id: str,
    update: FeedbackUpdate,
    service: FeedbackService = Depends(FeedbackService),
) -> Feedback:
    feedback = await service.respond(feedback_id, update)
    if feedback is None:
        raise HTTPException(status_code=404, detail="Feedback not found")
    return feedback


@router.post(
    "/education",
    response_model=EducationContentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Publish education content",
)
async def create_education_content(
    content_in: EducationContentCreate,
    service: EducationService = Depends(EducationService),
) -> EducationContent:
    return await service.create(content_in)


@router.get(
    "/education",
    response_model=List[EducationContentRead],
    summary="Education content for a role",
)
async def list_education_content(
    role: Role = Query(..., description="Role whose content to return"),
    service: EducationService = Depends(EducationService),
) -> List[EducationContent]:
    return await service.get_for_role(role)
