"""Unit tests for findings models."""

import dataclasses

import pytest

from slackguard.models.findings import SEVERITIES, SEVERITY_RANK, ComplianceMapping, Finding


def _finding(**overrides):
    data = dict(
        title="2FA Not Enforced",
        description="Two-factor authentication is not required",
        severity="high",
        category="authentication",
        resource_id="T0001",
        resource_name="Acme",
        remediation="Require 2FA",
        compliance=[ComplianceMapping("SOC2", "CC6.1", "Logical and physical access controls")],
    )
    data.update(overrides)
    return Finding.create(**data)


class TestFinding:
    """Test cases for Finding model."""

    def test_finding_creation(self):
        """Test creating a finding with valid data."""
        finding = _finding()

        assert finding.id
        assert finding.severity == "high"
        assert finding.resource_type == "workspace"
        assert finding.compliance == (
            ComplianceMapping("SOC2", "CC6.1", "Logical and physical access controls"),
        )

    def test_ids_are_unique(self):
        assert _finding().id != _finding().id

    def test_finding_is_immutable(self):
        finding = _finding()

        with pytest.raises(dataclasses.FrozenInstanceError):
            finding.severity = "low"

    def test_finding_validation(self):
        """Test finding validation with invalid data."""
        with pytest.raises(ValueError, match="Title cannot be empty"):
            _finding(title="")

        with pytest.raises(ValueError, match="Unknown severity"):
            _finding(severity="urgent")

        with pytest.raises(ValueError, match="Unknown category"):
            _finding(category="network")

    def test_empty_resource_id_allowed(self):
        finding = _finding(resource_id="")

        assert finding.resource_id == ""

    def test_framework_helpers(self):
        finding = _finding(compliance=[
            ComplianceMapping("SOC2", "CC6.1", "Logical and physical access controls"),
            ComplianceMapping("SOC2", "CC6.3", "User access reviews"),
            ComplianceMapping("GDPR", "Article 32", "Security of processing"),
        ])

        assert finding.frameworks == ("SOC2", "GDPR")
        assert finding.maps_to("GDPR") is True
        assert finding.maps_to("HIPAA") is False
        assert finding.is_high_or_critical is True

    def test_signature_ignores_id(self):
        assert _finding().signature() == _finding().signature()
        assert _finding().signature() != _finding(severity="medium").signature()

    def test_finding_serialization(self):
        """Test finding serialization to/from dict."""
        finding = _finding()

        finding_dict = finding.to_dict()
        assert finding_dict["title"] == "2FA Not Enforced"
        assert finding_dict["compliance"] == [
            {"framework": "SOC2", "control": "CC6.1", "requirement": "Logical and physical access controls"}
        ]

        restored = Finding.from_dict(finding_dict)
        assert restored == finding


def test_severity_order():
    assert SEVERITIES == ("critical", "high", "medium", "low", "info")
    assert SEVERITY_RANK["critical"] < SEVERITY_RANK["info"]
