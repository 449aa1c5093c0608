"""
Scripted Site Driver

Deterministic stand-in for the portal. Outcomes and failures are set up
front, every call is recorded, and nothing touches the network.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from config import Config
from src.interfaces.site_driver import SiteDriver, SubmissionOutcome


class ScriptedSiteDriver(SiteDriver):
    """
    Site driver that plays back a fixed script.

    Args:
        outcome: Result of submit() when no per-zone outcome is given
        zone_outcomes: Result of submit() per zone name
        default_zone_has_space: False makes resolve_zone_availability()
            switch to the fallback zone
        failures: Exception to raise per step ("login", "select_date",
            "resolve_zone_availability", "submit")

    Example:
        driver = ScriptedSiteDriver(
            default_zone_has_space=False,
            zone_outcomes={"Shared": SubmissionOutcome.NO_SPACE, "Paid": SubmissionOutcome.BOOKED},
        )
    """

    def __init__(
        self,
        outcome: SubmissionOutcome = SubmissionOutcome.BOOKED,
        zone_outcomes: Optional[Dict[str, SubmissionOutcome]] = None,
        default_zone_has_space: bool = True,
        failures: Optional[Dict[str, Exception]] = None,
        default_zone: str = Config.DEFAULT_ZONE,
        fallback_zone: str = Config.FALLBACK_ZONE,
    ):
        super().__init__()
        self.outcome = outcome
        self.zone_outcomes = zone_outcomes or {}
        self.default_zone_has_space = default_zone_has_space
        self.failures = failures or {}
        self.default_zone = default_zone
        self.fallback_zone = fallback_zone

        self.calls: List[Tuple[str, tuple]] = []
        self.opened = False
        self.closed = False

    async def __aenter__(self) -> "ScriptedSiteDriver":
        self.opened = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.closed = True

    def _step(self, name: str, *args):
        self.calls.append((name, args))
        if name in self.failures:
            raise self.failures[name]

    @property
    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    async def _login(self, credentials) -> None:
        self._step("login", credentials.username)

    async def _select_date(self, date: datetime) -> None:
        self._step("select_date", date)

    async def _resolve_zone_availability(self) -> str:
        self._step("resolve_zone_availability")
        if self.default_zone_has_space:
            return self.default_zone
        return self.fallback_zone

    async def _submit(self) -> SubmissionOutcome:
        self._step("submit", self.zone)
        return self.zone_outcomes.get(self.zone, self.outcome)
