from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from healthwatch.core.config import settings
from healthwatch.core.db import init_db
from healthwatch.core.logging import setup_logging
from healthwatch.core.middleware import StructlogMiddleware
from healthwatch.modules.alerts import router as alerts_router
from healthwatch.modules.feedback import router as feedback_router
from healthwatch.modules.issues import router as issues_router
from healthwatch.modules.outbreak.service import outbreak_detector
from healthwatch.modules.profiles import router as profiles_router
from healthwatch.modules.reports import router as reports_router
from healthwatch.modules.sensors import router as sensors_router

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    mongo_client = await init_db()
    app.state.mongo_client = mongo_client

    yield

    # Shutdown: let in-flight detection runs finish before the client goes away
    await outbreak_detector.drain()
    mongo_client.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    ## Health Watch API

    This API provides:
    * **Reports**: Symptom reports from ASHA workers and villagers (online, SMS, offline sync)
    * **Sensors**: Water-quality readings (pH, turbidity)
    * **Alerts**: Manual alerts from officials and automatic outbreak alerts
    * **Issues**: Village problems raised by villagers (dirty water, broken hand pumps)
    * **Profiles, Feedback & Education**: Community-facing records

    Every stored report or sensor reading triggers outbreak detection in the background.
    """,
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# Set all CORS enabled origins
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(StructlogMiddleware)

app.include_router(
    reports_router.router, prefix=f"{settings.API_V1_STR}/reports", tags=["reports"]
)
app.include_router(
    sensors_router.router, prefix=f"{settings.API_V1_STR}/sensors", tags=["sensors"]
)
app.include_router(
    alerts_router.router, prefix=f"{settings.API_V1_STR}/alerts", tags=["alerts"]
)
app.include_router(
    profiles_router.router, prefix=f"{settings.API_V1_STR}/profiles", tags=["profiles"]
)
app.include_router(
    issues_router.router, prefix=f"{settings.API_V1_STR}/issues", tags=["issues"]
)
app.include_router(
    feedback_router.router, prefix=settings.API_V1_STR, tags=["feedback"]
)


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}
