"""Per-village case aggregation for the hotspot map."""

from collections import Counter
from typing import Iterable, List

from healthwatch.modules.reports.models import Report
from healthwatch.modules.reports.schemas import VillageHotspot
from healthwatch.shared.constants import RiskLevel

HIGH_RISK_ABOVE = 5
MEDIUM_RISK_FROM = 3


def risk_level(case_count: int) -> RiskLevel:
    if case_count > HIGH_RISK_ABOVE:
        return RiskLevel.HIGH
    if case_count >= MEDIUM_RISK_FROM:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def summarize_hotspots(reports: Iterable[Report]) -> List[VillageHotspot]:
    """Group reports by village, in the order villages are first seen.

    Symptom labels are counted exactly as stored. On a tie the label seen
    first wins.
    """
    symptoms_by_village: dict[str, Counter[str]] = {}
    for report in reports:
        symptoms_by_village.setdefault(report.village, Counter())[report.symptoms] += 1

    hotspots: List[VillageHotspot] = []
    for village, symptoms in symptoms_by_village.items():
        case_count = sum(symptoms.values())
        hotspots.append(
            VillageHotspot(
                village=village,
                case_count=case_count,
                most_common_symptom=symptoms.most_common(1)[0][0],
                risk_level=risk_level(case_count),
            )
        )
    return hotspots
