"""Base class and shared state for security checks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..adapters.fetcher import ResourceFetcher
from ..models.findings import Finding
from ..models.workspace import Member, TeamInfo


@dataclass(frozen=True)
class ScanContext:
    """Workspace state handed to every check of a scan."""

    team_id: str
    team_name: str
    team: TeamInfo
    users: Tuple[Member, ...] = field(default_factory=tuple)
    fetcher: Optional[ResourceFetcher] = None

    def __post_init__(self) -> None:
        if not isinstance(self.users, tuple):
            object.__setattr__(self, 'users', tuple(self.users))


class Check(ABC):
    """A security check.

    Subclasses implement ``evaluate``. A check reads the context, may fetch
    optional resources through ``context.fetcher``, and returns its findings.
    It must not depend on any other check.
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    async def evaluate(self, context: ScanContext) -> List[Finding]:
        """Return the findings for one workspace."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
