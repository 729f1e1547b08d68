"""Outbreak rules.

Each rule is a stateless coroutine over a window of stored records. The
keyed rules return at most one candidate; the water-quality rule scans every
recent sensor reading and yields one candidate per breaching reading that
survives the dedup guard.
"""

import calendar
from typing import AsyncIterator

import structlog

from healthwatch.modules.outbreak.clock import Clock, window_start
from healthwatch.modules.outbreak.config import OutbreakRulesConfig
from healthwatch.modules.outbreak.gateway import DataStoreError, DataStoreGateway
from healthwatch.modules.outbreak.guard import is_duplicate
from healthwatch.modules.outbreak.models import (
    AlertCandidate,
    ReportQuery,
    ReportTrigger,
    SensorQuery,
)
from healthwatch.modules.sensors.models import SensorReading
from healthwatch.shared.constants import AlertType

log = structlog.get_logger()


def matches_seasonal_keyword(symptoms: str, keywords: list[str]) -> bool:
    lowered = symptoms.lower()
    return any(keyword in lowered for keyword in keywords)


async def check_disease_cluster(
    gateway: DataStoreGateway,
    trigger: ReportTrigger,
    rules: OutbreakRulesConfig,
    clock: Clock,
) -> AlertCandidate | None:
    # Exact label match: "Diarrhea" and "diarrhea" are separate clusters.
    query = ReportQuery(
        created_after=window_start(clock, rules.window_hours),
        village=trigger.village,
        symptoms=trigger.symptoms,
    )
    try:
        reports = await gateway.query_reports(query)
    except DataStoreError as exc:
        log.error(
            "outbreak_rule_query_failed",
            rule=AlertType.DISEASE_CLUSTER.value,
            village=trigger.village,
            error=str(exc),
        )
        return None

    count = len(reports)
    if count < rules.cluster_min_cases:
        return None

    return AlertCandidate(
        village=trigger.village,
        type=AlertType.DISEASE_CLUSTER,
        message=(
            f"Disease outbreak detected: {count} cases of {trigger.symptoms} "
            f"in {trigger.village} within {rules.window_hours} hours"
        ),
        disease_or_parameter=trigger.symptoms,
        value=count,
        target_roles=list(rules.target_roles),
    )


async def check_seasonal(
    gateway: DataStoreGateway,
    trigger: ReportTrigger,
    rules: OutbreakRulesConfig,
    clock: Clock,
) -> AlertCandidate | None:
    if clock.now().month not in rules.monsoon_months:
        return None
    if not matches_seasonal_keyword(trigger.symptoms, rules.seasonal_keywords):
        return None

    # Broader than the trigger: any report matching any keyword counts.
    query = ReportQuery(
        created_after=window_start(clock, rules.window_hours),
        village=trigger.village,
        symptoms_contains_any_of=list(rules.seasonal_keywords),
    )
    try:
        reports = await gateway.query_reports(query)
    except DataStoreError as exc:
        log.error(
            "outbreak_rule_query_failed",
            rule=AlertType.SEASONAL.value,
            village=trigger.village,
            error=str(exc),
        )
        return None

    count = len(reports)
    if count < rules.seasonal_min_cases:
        return None

    return AlertCandidate(
        village=trigger.village,
        type=AlertType.SEASONAL,
        message=(
            f"Monsoon season alert: {count} cases of {rules.seasonal_label} "
            f"in {trigger.village}. High risk period ({_month_span(rules.monsoon_months)})"
        ),
        disease_or_parameter=rules.seasonal_label,
        value=count,
        target_roles=list(rules.target_roles),
    )


def evaluate_reading(
    reading: SensorReading, rules: OutbreakRulesConfig
) -> AlertCandidate | None:
    """Classify one reading. pH wins when both thresholds are breached."""
    if reading.ph < rules.ph_min:
        message = (
            f"Water quality alert: Acidic water detected in {reading.village} "
            f"(pH: {reading.ph})"
        )
        parameter, value = "pH", reading.ph
    elif reading.turbidity > rules.turbidity_max:
        message = (
            f"Water quality alert: High turbidity in {reading.village} "
            f"({reading.turbidity} NTU)"
        )
        parameter, value = "turbidity", reading.turbidity
    else:
        return None

    return AlertCandidate(
        village=reading.village,
        type=AlertType.WATER_QUALITY,
        message=message,
        disease_or_parameter=parameter,
        value=value,
        target_roles=list(rules.target_roles),
    )


async def check_water_quality(
    gateway: DataStoreGateway,
    rules: OutbreakRulesConfig,
    clock: Clock,
) -> AsyncIterator[AlertCandidate]:
    """Yield guarded candidates lazily.

    The caller is expected to persist each candidate before asking for the
    next one, so the guard for a later reading sees alerts raised for earlier
    readings in the same run.
    """
    query = SensorQuery(
        created_after=window_start(clock, rules.window_hours),
        ph_below=rules.ph_min,
        turbidity_above=rules.turbidity_max,
    )
    try:
        readings = await gateway.query_sensors(query)
    except DataStoreError as exc:
        log.error(
            "outbreak_rule_query_failed",
            rule=AlertType.WATER_QUALITY.value,
            error=str(exc),
        )
        return

    for reading in readings:
        try:
            candidate = evaluate_reading(reading, rules)
            if candidate is None:
                continue
            duplicate = await is_duplicate(
                gateway, candidate.village, candidate.disease_or_parameter, rules, clock
            )
        except Exception:
            # One bad reading must not end the scan.
            log.exception(
                "outbreak_reading_failed",
                rule=AlertType.WATER_QUALITY.value,
                village=getattr(reading, "village", None),
            )
            continue
        if duplicate:
            log.info(
                "outbreak_candidate_suppressed",
                village=candidate.village,
                parameter=candidate.disease_or_parameter,
            )
            continue
        yield candidate


def _month_span(months: list[int]) -> str:
    ordered = sorted(months)
    if len(ordered) == 1:
        return calendar.month_name[ordered[0]]
    return f"{calendar.month_name[ordered[0]]}-{calendar.month_name[ordered[-1]]}"
