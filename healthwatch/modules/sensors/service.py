from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends

from healthwatch.modules.outbreak.detector import OutbreakDetector
from healthwatch.modules.outbreak.service import get_outbreak_detector
from healthwatch.modules.sensors.models import SensorReading
from healthwatch.modules.sensors.schemas import SensorReadingCreate


class SensorService:
    def __init__(
        self, detector: OutbreakDetector = Depends(get_outbreak_detector)
    ) -> None:
        self._detector = detector

    async def create(self, reading_in: SensorReadingCreate) -> SensorReading:
        """Persist a reading and re-run the water-quality scan in the background."""
        reading = SensorReading(
            village=reading_in.village,
            ph=reading_in.ph,
            turbidity=reading_in.turbidity,
        )
        if reading_in.timestamp is not None:
            reading.created_at = self._ensure_utc(reading_in.timestamp)
        await reading.insert()
        self._detector.schedule(None)
        return reading

    async def get_multi(
        self, village: Optional[str] = None, limit: int = 100
    ) -> List[SensorReading]:
        filters = {"village": village} if village else {}
        readings: List[SensorReading] = (
            await SensorReading.find(filters).sort("-created_at").limit(limit).to_list()
        )
        return readings

    @staticmethod
    def _ensure_utc(value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
