from pathlib import Path

from healthwatch.core.config import settings
from healthwatch.modules.outbreak.clock import SystemClock
from healthwatch.modules.outbreak.config import DEFAULT_RULES_PATH, load_rules
from healthwatch.modules.outbreak.detector import OutbreakDetector
from healthwatch.modules.outbreak.gateway import BeanieDataStore

rules_path = (
    Path(settings.OUTBREAK_RULES_PATH) if settings.OUTBREAK_RULES_PATH else DEFAULT_RULES_PATH
)
outbreak_detector = OutbreakDetector(
    gateway=BeanieDataStore(),
    rules=load_rules(rules_path),
    clock=SystemClock(),
    enabled=settings.OUTBREAK_DETECTION_ENABLED,
)


def get_outbreak_detector() -> OutbreakDetector:
    return outbreak_detector
