from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from healthwatch.main import app


class RecordingDetector:
    """Stands in for OutbreakDetector; records scheduled triggers instead of running rules."""

    def __init__(self) -> None:
        self.scheduled: list[object] = []

    def schedule(self, trigger: object = None) -> None:
        self.scheduled.append(trigger)
        return None


@pytest.fixture
def recording_detector() -> RecordingDetector:
    return RecordingDetector()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
