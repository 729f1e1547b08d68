from typing import List, Optional

from healthwatch.modules.alerts.models import Alert
from healthwatch.modules.alerts.schemas import AlertCreate
from healthwatch.modules.outbreak.gateway import alert_filter
from healthwatch.modules.outbreak.models import AlertQuery
from healthwatch.shared.constants import Role


class AlertService:
    """Manual alerts from officials and the alert feed read by every dashboard."""

    async def create(self, alert_in: AlertCreate) -> Alert:
        alert = Alert(
            message=alert_in.message,
            target_roles=alert_in.target_roles,
            created_by=alert_in.created_by,
            village=alert_in.village,
            auto=False,
        )
        await alert.insert()
        return alert

    async def get_multi(
        self,
        role: Optional[Role] = None,
        village: Optional[str] = None,
        auto: Optional[bool] = None,
        limit: int = 50,
    ) -> List[Alert]:
        query = AlertQuery(village=village or None, auto=auto, target_role=role)
        alerts: List[Alert] = (
            await Alert.find(alert_filter(query)).sort("-created_at").limit(limit).to_list()
        )
        return alerts
