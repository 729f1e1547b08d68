from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from healthwatch.core.config import settings
from healthwatch.modules.alerts.models import Alert
from healthwatch.modules.feedback.models import EducationContent, Feedback
from healthwatch.modules.issues.models import CommunityIssue
from healthwatch.modules.profiles.models import Profile
from healthwatch.modules.reports.models import Report
from healthwatch.modules.sensors.models import SensorReading

MONGO_CLIENT: AsyncIOMotorClient | None = None


async def init_db() -> AsyncIOMotorClient:
    """
    Create a single Motor client, initialize Beanie, and return the client.

    This should be called exactly once at app startup.
    """
    global MONGO_CLIENT

    client = AsyncIOMotorClient(
        settings.MONGODB_URL,
        uuidRepresentation="standard",
        serverSelectionTimeoutMS=5000,
    )

    db: AsyncIOMotorDatabase = client[settings.MONGODB_DB_NAME]

    await init_beanie(
        database=db,
        document_models=[
            Report,
            SensorReading,
            Alert,
            Profile,
            Feedback,
            EducationContent,
            CommunityIssue,
        ],
    )

    MONGO_CLIENT = client
    return client
