"""Data models for SlackGuard."""

from .findings import (
    SEVERITIES,
    SEVERITY_RANK,
    Category,
    ComplianceMapping,
    Finding,
    ResourceType,
    Severity,
)
from .scan import ComplianceScore, ScanResult, ScanSummary
from .workspace import Channel, InstalledApp, Member, MemberProfile, SharingPrefs, TeamInfo

__all__ = [
    "SEVERITIES",
    "SEVERITY_RANK",
    "Category",
    "Channel",
    "ComplianceMapping",
    "ComplianceScore",
    "Finding",
    "InstalledApp",
    "Member",
    "MemberProfile",
    "ResourceType",
    "ScanResult",
    "ScanSummary",
    "Severity",
    "SharingPrefs",
    "TeamInfo",
]
