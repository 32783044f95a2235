"""Scan orchestrator for SlackGuard."""

import asyncio
import time
from typing import Iterable, List, Optional, Tuple

import anyio

from ..adapters.fetcher import ResourceFetcher
from ..adapters.slack_client import SlackWebClient
from ..checks import Check, ScanContext, default_checks
from ..config import Settings, get_settings
from ..errors import ScanTimeoutError
from ..logging import get_logger, log_check_result, log_scan_event
from ..models.findings import Finding
from ..models.scan import ScanResult
from ..models.workspace import Member, TeamInfo
from .reporting import build_scan_result

logger = get_logger(__name__)


class SlackSecurityScanner:
    """Runs every registered check against one Slack workspace.

    ``scan`` fetches team info and the member list one after the other, then
    runs all checks concurrently and waits for every one of them. Failing to
    fetch a required resource aborts the scan. A check that raises or runs
    past the deadline contributes no findings and never affects the others.
    """

    def __init__(
        self,
        access_token: str,
        team_id: str,
        *,
        client: Optional[SlackWebClient] = None,
        checks: Optional[Iterable[Check]] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the scanner for a workspace."""
        self.settings = settings or get_settings()
        self.team_id = team_id
        self.client = client or SlackWebClient(
            access_token,
            base_url=self.settings.slack_api_base_url,
            timeout=self.settings.http_timeout,
        )
        self.fetcher = ResourceFetcher(self.client, self.settings)
        self.checks: List[Check] = list(checks) if checks is not None else default_checks()

    async def scan(self) -> ScanResult:
        """Scan the workspace and build the report."""
        start_time = time.monotonic()
        timeout = self.settings.scan_timeout
        deadline = start_time + timeout if timeout else None

        log_scan_event(logger, self.team_id, "started", checks=[c.name for c in self.checks])

        try:
            team, users = await self._fetch_required(deadline)
        except Exception as e:
            log_scan_event(
                logger,
                self.team_id,
                "failed",
                error=str(e),
                error_type=type(e).__name__
            )
            raise

        context = ScanContext(
            team_id=self.team_id,
            team_name=team.name,
            team=team,
            users=users,
            fetcher=self.fetcher,
        )

        log_scan_event(logger, self.team_id, "checks", team_name=team.name, members=len(users))
        findings = await self._run_checks(context, deadline)

        result = build_scan_result(self.team_id, team.name, findings)

        duration = time.monotonic() - start_time
        log_scan_event(
            logger,
            self.team_id,
            "completed",
            team_name=team.name,
            findings=result.summary.total,
            duration_ms=int(duration * 1000)
        )

        return result

    async def _fetch_required(self, deadline: Optional[float]) -> Tuple[TeamInfo, List[Member]]:
        """Fetch team info, then users. Both are fatal on failure."""
        log_scan_event(logger, self.team_id, "fetch")

        try:
            with anyio.fail_after(self._remaining(deadline)):
                team = await self.fetcher.fetch_team_info()
                users = await self.fetcher.fetch_users()
        except (TimeoutError, asyncio.TimeoutError) as e:
            raise ScanTimeoutError(self.settings.scan_timeout) from e

        return team, users

    async def _run_checks(self, context: ScanContext, deadline: Optional[float]) -> List[Finding]:
        """Run every check concurrently and merge findings in registration order."""
        results = await asyncio.gather(
            *[self._run_check(check, context, deadline) for check in self.checks],
            return_exceptions=True
        )

        findings: List[Finding] = []
        for check, result in zip(self.checks, results):
            if isinstance(result, BaseException):
                log_check_result(logger, check.name, "error", error=str(result))
                continue
            findings.extend(result)

        return findings

    async def _run_check(
        self,
        check: Check,
        context: ScanContext,
        deadline: Optional[float],
    ) -> List[Finding]:
        """Run one check, degrading any failure to no findings."""
        start_time = time.monotonic()

        try:
            findings = await asyncio.wait_for(
                check.evaluate(context),
                timeout=self._remaining(deadline)
            )
        except asyncio.TimeoutError:
            log_check_result(
                logger,
                check.name,
                "timeout",
                duration_ms=int((time.monotonic() - start_time) * 1000)
            )
            return []
        except Exception as e:
            log_check_result(
                logger,
                check.name,
                "error",
                duration_ms=int((time.monotonic() - start_time) * 1000),
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True
            )
            return []

        findings = list(findings or [])
        log_check_result(
            logger,
            check.name,
            "ok",
            duration_ms=int((time.monotonic() - start_time) * 1000),
            findings=len(findings)
        )
        return findings

    @staticmethod
    def _remaining(deadline: Optional[float]) -> Optional[float]:
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())
