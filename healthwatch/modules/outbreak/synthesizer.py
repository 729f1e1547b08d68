import structlog

from healthwatch.modules.alerts.models import Alert
from healthwatch.modules.alerts.schemas import AlertInsert
from healthwatch.modules.outbreak.config import OutbreakRulesConfig
from healthwatch.modules.outbreak.gateway import DataStoreError, DataStoreGateway
from healthwatch.modules.outbreak.models import AlertCandidate, ProfileQuery
from healthwatch.shared.constants import Role

log = structlog.get_logger()


class AlertSynthesizer:
    """Turns rule candidates into persisted automatic alerts."""

    def __init__(self, gateway: DataStoreGateway, rules: OutbreakRulesConfig) -> None:
        self._gateway = gateway
        self._rules = rules

    async def resolve_author(self) -> str:
        """Any official will do; the sentinel id is used when there is none."""
        try:
            officials = await self._gateway.query_profiles(
                ProfileQuery(role=Role.OFFICIAL), limit=1
            )
        except DataStoreError as exc:
            log.warning("outbreak_author_lookup_failed", error=str(exc))
            officials = []
        if officials:
            return str(officials[0].user_id)
        return self._rules.fallback_creator_id

    async def emit(self, candidate: AlertCandidate) -> Alert | None:
        created_by = await self.resolve_author()
        payload = AlertInsert(
            message=candidate.message,
            target_roles=candidate.target_roles or list(self._rules.target_roles),
            created_by=created_by,
            village=candidate.village,
            type=candidate.type,
            disease_or_parameter=candidate.disease_or_parameter,
            value=candidate.value,
            auto=True,
        )
        try:
            alert = await self._gateway.insert_alert(payload)
        except DataStoreError as exc:
            log.error(
                "outbreak_alert_insert_failed",
                village=candidate.village,
                type=candidate.type.value,
                parameter=candidate.disease_or_parameter,
                error=str(exc),
            )
            return None

        log.info(
            "outbreak_alert_created",
            village=candidate.village,
            type=candidate.type.value,
            parameter=candidate.disease_or_parameter,
            value=candidate.value,
        )
        return alert
