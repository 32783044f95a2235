"""Scan orchestration and report reduction."""

from .reporting import FRAMEWORKS, build_scan_result, score_compliance, summarize
from .scanner import SlackSecurityScanner

__all__ = [
    "FRAMEWORKS",
    "SlackSecurityScanner",
    "build_scan_result",
    "score_compliance",
    "summarize",
]
