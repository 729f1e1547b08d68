from typing import List

from fastapi import APIRouter, Depends, status

from healthwatch.modules.alerts.models import Alert
from healthwatch.modules.alerts.schemas import AlertCreate, AlertListQuery, AlertRead
from healthwatch.modules.alerts.service import AlertService

router = APIRouter()


@router.post(
    "",
    response_model=AlertRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an alert as an official",
)
async def create_alert(
    alert_in: AlertCreate,
    service: AlertService = Depends(AlertService),
) -> Alert:
    return await service.create(alert_in)


@router.get("", response_model=List[AlertRead], summary="List alerts, newest first")
async def list_alerts(
    params: AlertListQuery = Depends(),
    service: AlertService = Depends(AlertService),
) -> List[Alert]:
    """
    Filter by `role` to get the feed shown on that role's dashboard. Automatic
    alerts raised by outbreak detection carry `auto=true`.
    """
    return await service.get_multi(
        role=params.role, village=params.village, auto=params.auto, limit=params.limit
    )
