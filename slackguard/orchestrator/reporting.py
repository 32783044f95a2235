"""Report reduction: severity summary and compliance scores."""

import math
from datetime import datetime
from typing import Iterable, List, Optional

from ..models.findings import SEVERITIES, Finding
from ..models.scan import ComplianceScore, ScanResult, ScanSummary

FRAMEWORKS = ('GDPR', 'SOC2', 'ISO27001', 'HIPAA', 'OWASP')


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def summarize(findings: Iterable[Finding]) -> ScanSummary:
    """Count findings per severity. Unseen severities count as 0."""
    counts = dict.fromkeys(SEVERITIES, 0)
    total = 0
    for finding in findings:
        counts[finding.severity] += 1
        total += 1
    return ScanSummary(total=total, **counts)


def score_compliance(findings: Iterable[Finding]) -> List[ComplianceScore]:
    """Score each framework in ``FRAMEWORKS``.

    Only violations are modelled, so ``passed`` is always 0 and any finding
    mapped to a framework brings its score to 0.
    """
    findings = list(findings)
    scores = []

    for framework in FRAMEWORKS:
        failed = sum(1 for finding in findings if finding.maps_to(framework))
        passed = 0
        total = passed + failed
        scores.append(ComplianceScore(
            framework=framework,
            passed=passed,
            failed=failed,
            total=total,
            score=100 if total == 0 else round_half_up(passed / total * 100),
        ))

    return scores


def build_scan_result(
    team_id: str,
    team_name: str,
    findings: List[Finding],
    scanned_at: Optional[datetime] = None,
) -> ScanResult:
    """Assemble the final report from the merged findings."""
    findings = list(findings)
    kwargs = {}
    if scanned_at is not None:
        kwargs['scanned_at'] = scanned_at

    return ScanResult(
        team_id=team_id,
        team_name=team_name,
        findings=findings,
        summary=summarize(findings),
        compliance=score_compliance(findings),
        **kwargs,
    )
