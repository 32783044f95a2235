"""Scan report data models for SlackGuard."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dataclasses_json import DataClassJsonMixin

from .findings import Finding


@dataclass(frozen=True, slots=True)
class ScanSummary(DataClassJsonMixin):
    """Finding counts per severity."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    info: int = 0
    total: int = 0

    def count(self, severity: str) -> int:
        return getattr(self, severity)


@dataclass(frozen=True, slots=True)
class ComplianceScore(DataClassJsonMixin):
    """Score for one compliance framework."""

    framework: str
    passed: int
    failed: int
    total: int
    score: int


@dataclass(frozen=True, slots=True)
class ScanResult(DataClassJsonMixin):
    """The report produced by one scan of a workspace."""

    team_id: str
    team_name: str
    findings: List[Finding]
    summary: ScanSummary
    compliance: List[ComplianceScore]
    scanned_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self, encode_json: bool = False) -> Dict[str, Any]:
        """Convert the report to a JSON friendly dictionary."""
        return {
            'team_id': self.team_id,
            'team_name': self.team_name,
            'scanned_at': self.scanned_at.isoformat(),
            'findings': [finding.to_dict() for finding in self.findings],
            'summary': self.summary.to_dict(),
            'compliance': [score.to_dict() for score in self.compliance],
        }

    def compliance_for(self, framework: str) -> Optional[ComplianceScore]:
        """Get the score of a framework, if it is one of the scored ones."""
        for score in self.compliance:
            if score.framework == framework:
                return score
        return None

    def findings_by_severity(self, severity: str) -> List[Finding]:
        return [finding for finding in self.findings if finding.severity == severity]
