from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import structlog

from healthwatch.modules.outbreak.clock import Clock, SystemClock
from healthwatch.modules.outbreak.config import OutbreakRulesConfig
from healthwatch.modules.outbreak.gateway import DataStoreGateway
from healthwatch.modules.outbreak.models import AlertCandidate, ReportTrigger
from healthwatch.modules.outbreak.rules import (
    check_disease_cluster,
    check_seasonal,
    check_water_quality,
)
from healthwatch.modules.outbreak.synthesizer import AlertSynthesizer

log = structlog.get_logger()

KeyedRule = Callable[
    [DataStoreGateway, ReportTrigger, OutbreakRulesConfig, Clock],
    Awaitable[AlertCandidate | None],
]


class OutbreakDetector:
    """Runs the outbreak rules after a submission and writes any resulting alerts.

    Rules run one after another; a failing rule is logged and the next rule
    still runs. Nothing is raised to the caller.
    """

    def __init__(
        self,
        gateway: DataStoreGateway,
        rules: OutbreakRulesConfig,
        clock: Clock | None = None,
        synthesizer: AlertSynthesizer | None = None,
        enabled: bool = True,
    ) -> None:
        self._gateway = gateway
        self._rules = rules
        self._clock = clock or SystemClock()
        self._synthesizer = synthesizer or AlertSynthesizer(gateway, rules)
        self._enabled = enabled
        self._tasks: set[asyncio.Task] = set()

    async def run(self, trigger: ReportTrigger | None = None) -> None:
        if not self._enabled:
            return

        # Sensor data is scanned on every run, whatever triggered it.
        await self._run_step("water_quality", self._check_water_quality)

        if trigger is None:
            return

        await self._run_step(
            "disease_cluster", lambda: self._check_keyed(check_disease_cluster, trigger)
        )
        await self._run_step(
            "seasonal", lambda: self._check_keyed(check_seasonal, trigger)
        )

    def schedule(self, trigger: ReportTrigger | None = None) -> asyncio.Task | None:
        """Start `run` in the background and return immediately."""
        if not self._enabled:
            return None
        task = asyncio.create_task(self.run(trigger))
        # The loop only keeps weak references to tasks.
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for scheduled runs to finish (shutdown and tests)."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run_step(self, name: str, step: Callable[[], Awaitable[None]]) -> None:
        try:
            await step()
        except Exception:
            log.exception("outbreak_rule_failed", rule=name)

    async def _check_water_quality(self) -> None:
        async for candidate in check_water_quality(self._gateway, self._rules, self._clock):
            await self._synthesizer.emit(candidate)

    async def _check_keyed(self, rule: KeyedRule, trigger: ReportTrigger) -> None:
        candidate = await rule(self._gateway, trigger, self._rules, self._clock)
        if candidate is not None:
            await self._synthesizer.emit(candidate)
