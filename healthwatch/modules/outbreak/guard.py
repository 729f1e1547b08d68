import structlog

from healthwatch.modules.outbreak.clock import Clock, window_start
from healthwatch.modules.outbreak.config import OutbreakRulesConfig
from healthwatch.modules.outbreak.gateway import DataStoreError, DataStoreGateway
from healthwatch.modules.outbreak.models import AlertQuery

log = structlog.get_logger()


async def is_duplicate(
    gateway: DataStoreGateway,
    village: str,
    parameter: str,
    rules: OutbreakRulesConfig,
    clock: Clock,
) -> bool:
    """True when an automatic alert for (village, parameter) exists inside the window.

    Check-then-insert is not atomic: two concurrent detection runs can both see
    no alert and both insert.
    """
    query = AlertQuery(
        village=village,
        disease_or_parameter=parameter,
        auto=True,
        created_after=window_start(clock, rules.window_hours),
    )
    try:
        existing = await gateway.query_alerts(query, limit=1)
    except DataStoreError as exc:
        # Unknown state; skip rather than risk a duplicate.
        log.error(
            "outbreak_dedup_query_failed",
            village=village,
            parameter=parameter,
            error=str(exc),
        )
        return True
    return bool(existing)
