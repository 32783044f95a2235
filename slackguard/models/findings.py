"""Finding data models for SlackGuard."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Literal, Tuple, get_args

from dataclasses_json import DataClassJsonMixin

# Type aliases for better type safety
Severity = Literal['critical', 'high', 'medium', 'low', 'info']
Category = Literal[
    'access_control',
    'authentication',
    'data_protection',
    'configuration',
    'compliance',
]
ResourceType = Literal['workspace', 'channel', 'user', 'app', 'settings']

# Most to least severe
SEVERITIES: Tuple[str, ...] = get_args(Severity)
SEVERITY_RANK: Dict[str, int] = {severity: rank for rank, severity in enumerate(SEVERITIES)}
CATEGORIES: Tuple[str, ...] = get_args(Category)
RESOURCE_TYPES: Tuple[str, ...] = get_args(ResourceType)


@dataclass(frozen=True, slots=True)
class ComplianceMapping(DataClassJsonMixin):
    """A compliance control a finding violates."""

    framework: str
    control: str
    requirement: str


@dataclass(frozen=True, slots=True)
class Finding(DataClassJsonMixin):
    """A security finding produced by a check. Never modified after creation."""

    id: str
    title: str
    description: str
    severity: Severity
    category: Category
    resource_type: ResourceType
    resource_id: str
    resource_name: str
    remediation: str
    compliance: Tuple[ComplianceMapping, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate finding data after initialization."""
        if not self.id:
            raise ValueError("Finding ID cannot be empty")
        if not self.title:
            raise ValueError("Title cannot be empty")
        if self.severity not in SEVERITY_RANK:
            raise ValueError(f"Unknown severity: {self.severity}")
        if self.category not in CATEGORIES:
            raise ValueError(f"Unknown category: {self.category}")
        if self.resource_type not in RESOURCE_TYPES:
            raise ValueError(f"Unknown resource type: {self.resource_type}")
        if not isinstance(self.compliance, tuple):
            object.__setattr__(self, 'compliance', tuple(self.compliance))

    @classmethod
    def create(
        cls,
        *,
        title: str,
        description: str,
        severity: Severity,
        category: Category,
        resource_id: str,
        resource_name: str,
        remediation: str,
        compliance: Iterable[ComplianceMapping] = (),
        resource_type: ResourceType = 'workspace',
    ) -> Finding:
        """Create a finding with a freshly generated ID."""
        return cls(
            id=uuid.uuid4().hex,
            title=title,
            description=description,
            severity=severity,
            category=category,
            resource_type=resource_type,
            resource_id=resource_id,
            resource_name=resource_name,
            remediation=remediation,
            compliance=tuple(compliance),
        )

    def to_dict(self, encode_json: bool = False) -> Dict[str, Any]:
        """Convert finding to a JSON friendly dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'severity': self.severity,
            'category': self.category,
            'resource_type': self.resource_type,
            'resource_id': self.resource_id,
            'resource_name': self.resource_name,
            'remediation': self.remediation,
            'compliance': [
                {
                    'framework': mapping.framework,
                    'control': mapping.control,
                    'requirement': mapping.requirement,
                }
                for mapping in self.compliance
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, infer_missing: bool = False) -> Finding:
        """Create finding from dictionary."""
        data = dict(data)
        data['compliance'] = tuple(
            mapping if isinstance(mapping, ComplianceMapping) else ComplianceMapping(**mapping)
            for mapping in data.get('compliance', ())
        )
        return cls(**data)

    @property
    def frameworks(self) -> Tuple[str, ...]:
        """Frameworks this finding is mapped to, in annotation order."""
        return tuple(dict.fromkeys(mapping.framework for mapping in self.compliance))

    def maps_to(self, framework: str) -> bool:
        """Check if the finding carries a control of the given framework."""
        return any(mapping.framework == framework for mapping in self.compliance)

    @property
    def is_high_or_critical(self) -> bool:
        """Check if finding is high or critical severity."""
        return self.severity in ('high', 'critical')

    def signature(self) -> Tuple[Any, ...]:
        """Everything but the ID, for comparing findings across scans."""
        return (
            self.title,
            self.description,
            self.severity,
            self.category,
            self.resource_type,
            self.resource_id,
            self.resource_name,
            self.remediation,
            self.compliance,
        )
