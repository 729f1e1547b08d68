from typing import List

from fastapi import APIRouter, Depends, status

from healthwatch.modules.sensors.models import SensorReading
from healthwatch.modules.sensors.schemas import (
    SensorListQuery,
    SensorReadingCreate,
    SensorReadingRead,
)
from healthwatch.modules.sensors.service import SensorService

router = APIRouter()


@router.post(
    "",
    response_model=SensorReadingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Ingest a water-quality reading",
)
async def create_reading(
    reading_in: SensorReadingCreate,
    service: SensorService = Depends(SensorService),
) -> SensorReading:
    return await service.create(reading_in)


@router.get("", response_model=List[SensorReadingRead], summary="List recent readings")
async def list_readings(
    params: SensorListQuery = Depends(),
    service: SensorService = Depends(SensorService),
) -> List[SensorReading]:
    return await service.get_multi(village=params.village, limit=params.limit)
