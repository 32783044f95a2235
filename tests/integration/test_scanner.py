"""Integration tests for the SlackGuard scanner."""

import asyncio
from typing import List

import pytest

from slackguard.checks import Check, ScanContext
from slackguard.config import Settings
from slackguard.errors import AuthError, ScanTimeoutError
from slackguard.models.findings import Finding
from slackguard.orchestrator.reporting import FRAMEWORKS
from slackguard.orchestrator.scanner import SlackSecurityScanner


def _finding(title: str, context: ScanContext) -> Finding:
    return Finding.create(
        title=title,
        description="",
        severity="low",
        category="configuration",
        resource_id=context.team_id,
        resource_name=context.team_name,
        remediation="",
    )


class EmitCheck(Check):
    name = "emit"

    def __init__(self, title: str, delay: float = 0):
        self.title = title
        self.delay = delay

    async def evaluate(self, context: ScanContext) -> List[Finding]:
        await asyncio.sleep(self.delay)
        return [_finding(self.title, context)]


class BrokenCheck(Check):
    name = "broken"

    async def evaluate(self, context: ScanContext) -> List[Finding]:
        raise RuntimeError("rule exploded")


class SyncBrokenCheck(Check):
    """Raises while being called, before any coroutine exists."""

    name = "sync_broken"

    def evaluate(self, context: ScanContext) -> List[Finding]:
        raise KeyError("profile")


@pytest.fixture
def clean_workspace(fake_client_cls, team_response, member):
    """A fully authorized, well configured workspace."""
    return fake_client_cls({
        "team.info": team_response(),
        "users.list": {"ok": True, "members": [member(f"U{i}") for i in range(4)]},
        "apps.permissions.scopes.list": {"ok": True, "scopes": []},
        "conversations.list": {"ok": True, "channels": [{"id": "C1", "name": "general", "num_members": 4}]},
        "team.preferences.list": {"ok": True, "allow_message_deletion": True},
    })


@pytest.fixture
def risky_workspace(fake_client_cls, team_response, member, stale_timestamp):
    """Twelve stale members, six of them without 2FA, and an unauthorized app listing."""
    members = [
        member(f"U{i}", has_2fa=i >= 6, updated=stale_timestamp)
        for i in range(12)
    ]
    members.append(member("B1", is_bot=True, has_2fa=False))
    return fake_client_cls({
        "team.info": team_response(two_factor_auth_required=False, email_domain=""),
        "users.list": {"ok": True, "members": members},
        "apps.permissions.scopes.list": {"ok": False, "error": "missing_scope"},
        "conversations.list": {"ok": False, "error": "missing_scope"},
        "team.preferences.list": {"ok": False, "error": "not_allowed_token_type"},
    })


class TestScanner:
    """Integration tests for the scan orchestrator."""

    @pytest.mark.asyncio
    async def test_clean_workspace(self, clean_workspace, settings):
        scanner = SlackSecurityScanner("xoxp-token", "T0001", client=clean_workspace, settings=settings)

        result = await scanner.scan()

        assert result.team_id == "T0001"
        assert result.team_name == "Acme"
        assert result.findings == []
        assert result.summary.total == 0
        assert [s.score for s in result.compliance] == [100] * len(FRAMEWORKS)

    @pytest.mark.asyncio
    async def test_empty_team_id_still_reports_findings(self, risky_workspace, settings):
        scanner = SlackSecurityScanner("xoxp-token", "", client=risky_workspace, settings=settings)

        result = await scanner.scan()

        assert result.team_id == ""
        assert result.summary.total == 4
        assert all(f.resource_id == "" for f in result.findings)
        assert any(s.failed and s.score == 0 for s in result.compliance)

    @pytest.mark.asyncio
    async def test_end_to_end_risky_workspace(self, risky_workspace, settings):
        scanner = SlackSecurityScanner("xoxp-token", "T0001", client=risky_workspace, settings=settings)

        result = await scanner.scan()

        assert [(f.title, f.severity) for f in result.findings] == [
            ("2FA Not Enforced", "high"),
            ("No Email Domain Restrictions", "medium"),
            ("6 Users Without 2FA", "high"),
            ("12 Inactive User Accounts", "high"),
        ]
        assert result.summary.total == 4
        assert result.summary.high == 3
        assert result.summary.medium == 1
        assert result.summary.critical == result.summary.low == result.summary.info == 0
        assert not any("Apps" in f.title for f in result.findings)

        for score in result.compliance:
            assert score.total == score.failed
            mapped = any(f.maps_to(score.framework) for f in result.findings)
            assert score.score == (0 if mapped else 100)

    @pytest.mark.asyncio
    async def test_optional_fetches_are_attempted(self, risky_workspace, settings):
        scanner = SlackSecurityScanner("xoxp-token", "T0001", client=risky_workspace, settings=settings)

        await scanner.scan()

        assert risky_workspace.calls[:2] == ["team.info", "users.list"]
        assert set(risky_workspace.calls[2:]) == {
            "apps.permissions.scopes.list",
            "conversations.list",
            "team.preferences.list",
        }

    @pytest.mark.asyncio
    async def test_team_info_failure_is_fatal(self, fake_client_cls, settings):
        client = fake_client_cls({"team.info": {"ok": False, "error": "invalid_auth"}})
        scanner = SlackSecurityScanner("xoxp-token", "T0001", client=client, settings=settings)

        with pytest.raises(AuthError, match="invalid_auth"):
            await scanner.scan()

        assert client.calls == ["team.info"]

    @pytest.mark.asyncio
    async def test_users_failure_is_fatal(self, fake_client_cls, team_response, settings):
        client = fake_client_cls({
            "team.info": team_response(),
            "users.list": {"ok": False, "error": "ratelimited"},
        })
        scanner = SlackSecurityScanner("xoxp-token", "T0001", client=client, settings=settings)

        with pytest.raises(AuthError, match="ratelimited"):
            await scanner.scan()

    @pytest.mark.asyncio
    async def test_repeat_scans_match_except_ids(self, risky_workspace, settings):
        scanner = SlackSecurityScanner("xoxp-token", "T0001", client=risky_workspace, settings=settings)

        first = await scanner.scan()
        second = await scanner.scan()

        assert [f.signature() for f in first.findings] == [f.signature() for f in second.findings]
        assert {f.id for f in first.findings}.isdisjoint(f.id for f in second.findings)


class TestCheckIsolation:

    @pytest.mark.asyncio
    async def test_failing_checks_contribute_nothing(self, clean_workspace, settings):
        checks = [EmitCheck("first"), BrokenCheck(), SyncBrokenCheck(), EmitCheck("last")]
        scanner = SlackSecurityScanner("xoxp-token", "T0001", client=clean_workspace, checks=checks, settings=settings)

        result = await scanner.scan()

        assert [f.title for f in result.findings] == ["first", "last"]
        assert result.summary.total == 2

    @pytest.mark.asyncio
    async def test_registration_order_wins_over_completion_order(self, clean_workspace, settings):
        checks = [EmitCheck("slow", delay=0.05), EmitCheck("fast")]
        scanner = SlackSecurityScanner("xoxp-token", "T0001", client=clean_workspace, checks=checks, settings=settings)

        result = await scanner.scan()

        assert [f.title for f in result.findings] == ["slow", "fast"]

    @pytest.mark.asyncio
    async def test_check_past_deadline_degrades(self, clean_workspace):
        settings = Settings(scan_timeout=0.2)
        checks = [EmitCheck("stuck", delay=5), EmitCheck("quick")]
        scanner = SlackSecurityScanner("xoxp-token", "T0001", client=clean_workspace, checks=checks, settings=settings)

        result = await scanner.scan()

        assert [f.title for f in result.findings] == ["quick"]

    @pytest.mark.asyncio
    async def test_fetch_past_deadline_is_fatal(self, fake_client_cls, team_response):
        client = fake_client_cls({"team.info": team_response()}, delays={"team.info": 5})
        settings = Settings(scan_timeout=0.1)
        scanner = SlackSecurityScanner("xoxp-token", "T0001", client=client, settings=settings)

        with pytest.raises(ScanTimeoutError):
            await scanner.scan()


def test_scanner_defaults(settings):
    scanner = SlackSecurityScanner("xoxp-token", "T0001", settings=settings)

    assert scanner.team_id == "T0001"
    assert [c.name for c in scanner.checks][0] == "workspace_security"
    assert scanner.fetcher.client is scanner.client
