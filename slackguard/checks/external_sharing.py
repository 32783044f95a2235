"""External sharing and data exposure."""

import asyncio
from typing import Iterable, List

from ..models.findings import ComplianceMapping, Finding
from ..models.workspace import Channel, SharingPrefs
from .base import Check, ScanContext

# Matched against lowercased names of public channels
SENSITIVE_CHANNEL_KEYWORDS = (
    'secret',
    'confidential',
    'private',
    'internal',
    'password',
    'api-key',
    'credentials',
)
LARGE_CHANNEL_MEMBERS = 100
LARGE_CHANNEL_COUNT_THRESHOLD = 10


def has_sensitive_name(channel: Channel) -> bool:
    name = channel.name.lower()
    return any(keyword in name for keyword in SENSITIVE_CHANNEL_KEYWORDS)


def assess_channels(team_id: str, team_name: str, channels: Iterable[Channel]) -> List[Finding]:
    """Flag shared channels, sensitive public channels and many large public channels."""
    findings: List[Finding] = []
    channels = list(channels)

    external = [ch for ch in channels if ch.is_externally_shared]
    if external:
        count = len(external)
        findings.append(Finding.create(
            title=f"{count} Externally Shared Channels",
            description=(
                f"Found {count} channels shared with external organizations via Slack Connect. "
                "Ensure these are properly reviewed and necessary."
            ),
            severity='medium',
            category='data_protection',
            resource_id=team_id,
            resource_name=team_name,
            remediation=(
                "Review externally shared channels and ensure only necessary channels are "
                "shared. Monitor what data is shared with external parties."
            ),
            compliance=[
                ComplianceMapping('GDPR', 'Article 28', 'Processor obligations'),
                ComplianceMapping('SOC2', 'CC6.7', 'Transmission of data'),
                ComplianceMapping('ISO27001', 'A.13.2.1', 'Information transfer policies'),
            ],
        ))

    public_channels = [ch for ch in channels if ch.is_public]

    sensitive = [ch for ch in public_channels if has_sensitive_name(ch)]
    if sensitive:
        count = len(sensitive)
        names = ", ".join(f"#{ch.name}" for ch in sensitive)
        findings.append(Finding.create(
            title=f"{count} Public Channels with Sensitive Names",
            description=(
                f"Found {count} public channels with names suggesting sensitive content "
                f"({names}). These should likely be private."
            ),
            severity='high',
            category='data_protection',
            resource_id=team_id,
            resource_name=team_name,
            remediation="Convert these channels to private or rename them to avoid exposing sensitive information.",
            compliance=[
                ComplianceMapping('GDPR', 'Article 32', 'Security of processing'),
                ComplianceMapping('SOC2', 'CC6.1', 'Logical and physical access controls'),
            ],
        ))

    large = [
        ch for ch in public_channels
        if ch.num_members is not None and ch.num_members > LARGE_CHANNEL_MEMBERS
    ]
    if len(large) > LARGE_CHANNEL_COUNT_THRESHOLD:
        count = len(large)
        findings.append(Finding.create(
            title=f"{count} Large Public Channels",
            description=(
                f"Found {count} public channels with over {LARGE_CHANNEL_MEMBERS} members. "
                "Consider if all these channels need to be public or if some should be restricted."
            ),
            severity='info',
            category='configuration',
            resource_id=team_id,
            resource_name=team_name,
            remediation=(
                "Review large public channels and ensure they don't contain sensitive "
                "information that should be restricted."
            ),
            compliance=[
                ComplianceMapping('SOC2', 'CC6.1', 'Logical and physical access controls'),
            ],
        ))

    return findings


def assess_sharing_prefs(team_id: str, team_name: str, prefs: SharingPrefs) -> List[Finding]:
    """Report disabled message deletion as an informational trade-off."""
    if not prefs.message_deletion_disabled:
        return []

    return [Finding.create(
        title="Message Deletion Disabled",
        description=(
            "Users cannot delete their own messages. While this helps with compliance and "
            "audit trails, it may prevent users from removing accidentally shared sensitive "
            "information."
        ),
        severity='info',
        category='configuration',
        resource_id=team_id,
        resource_name=team_name,
        remediation=(
            "Consider if this policy is appropriate for your security requirements. "
            "Balance between audit trails and user privacy."
        ),
        compliance=[
            ComplianceMapping('SOC2', 'CC7.2', 'System monitoring'),
        ],
    )]


class ExternalSharingCheck(Check):
    """Channel exposure and message retention preferences."""

    name = "external_sharing"
    description = "Shared channels, sensitive public channels and message deletion policy"

    async def evaluate(self, context: ScanContext) -> List[Finding]:
        channels, prefs = await asyncio.gather(
            context.fetcher.fetch_channels(),
            context.fetcher.fetch_sharing_prefs(),
        )
        return (
            assess_channels(context.team_id, context.team_name, channels)
            + assess_sharing_prefs(context.team_id, context.team_name, prefs)
        )
