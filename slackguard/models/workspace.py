"""Typed views of the Slack Web API payloads a scan reads.

Each model is built with ``from_api`` from the raw JSON object Slack returns.
Every optional field is resolved explicitly so that an absent value, an
explicit ``False`` and a zero timestamp stay distinguishable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


def _opt_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    return bool(value)


def _opt_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class TeamInfo:
    """The ``team`` object of ``team.info``."""

    id: str
    name: str
    domain: str = ""
    email_domain: str = ""
    # None when Slack did not report it
    two_factor_auth_required: Optional[bool] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> TeamInfo:
        return cls(
            id=str(data.get('id') or ''),
            name=str(data.get('name') or ''),
            domain=str(data.get('domain') or ''),
            email_domain=str(data.get('email_domain') or ''),
            two_factor_auth_required=_opt_bool(data.get('two_factor_auth_required')),
        )

    @property
    def enforces_two_factor(self) -> bool:
        """Only an explicit ``True`` from Slack counts as enforced."""
        return self.two_factor_auth_required is True

    @property
    def has_email_domain_restriction(self) -> bool:
        return bool(self.email_domain.strip())


@dataclass(frozen=True)
class MemberProfile:
    """The ``profile`` object of a member."""

    real_name: str = ""
    email: Optional[str] = None
    image_72: Optional[str] = None
    updated: Optional[int] = None

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> MemberProfile:
        data = data or {}
        return cls(
            real_name=str(data.get('real_name') or ''),
            email=data.get('email') or None,
            image_72=data.get('image_72') or None,
            updated=_opt_int(data.get('updated')),
        )


@dataclass(frozen=True)
class Member:
    """A member entry of ``users.list``."""

    id: str
    name: str = ""
    deleted: bool = False
    is_bot: bool = False
    is_restricted: bool = False
    is_ultra_restricted: bool = False
    has_2fa: Optional[bool] = None
    updated: Optional[int] = None
    profile: MemberProfile = field(default_factory=MemberProfile)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> Member:
        return cls(
            id=str(data.get('id') or ''),
            name=str(data.get('name') or ''),
            deleted=bool(data.get('deleted', False)),
            is_bot=bool(data.get('is_bot', False)),
            is_restricted=bool(data.get('is_restricted', False)),
            is_ultra_restricted=bool(data.get('is_ultra_restricted', False)),
            has_2fa=_opt_bool(data.get('has_2fa')),
            updated=_opt_int(data.get('updated')),
            profile=MemberProfile.from_api(data.get('profile')),
        )

    @property
    def is_active(self) -> bool:
        """A human account that has not been deactivated."""
        return not self.deleted and not self.is_bot

    @property
    def is_guest(self) -> bool:
        """Single- or multi-channel guest."""
        return self.is_restricted or self.is_ultra_restricted

    @property
    def has_two_factor(self) -> bool:
        """Only an explicit ``True`` counts; absent means not enrolled."""
        return self.has_2fa is True

    @property
    def last_updated(self) -> int:
        """Last profile update as a unix timestamp.

        Falls back from the member's ``updated`` to ``profile.updated``.
        ``0`` means no timestamp was recorded; it is never read as the epoch.
        """
        if self.updated:
            return self.updated
        if self.profile.updated:
            return self.profile.updated
        return 0

    @property
    def has_profile_photo(self) -> bool:
        """Gravatar placeholders do not count as a photo."""
        image = self.profile.image_72
        return bool(image) and 'gravatar' not in image


@dataclass(frozen=True)
class InstalledApp:
    """An entry of ``apps.permissions.scopes.list``."""

    id: str
    name: str = ""
    user_scopes: Tuple[str, ...] = ()
    bot_scopes: Tuple[str, ...] = ()

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> InstalledApp:
        scopes = data.get('scopes') or {}
        if not isinstance(scopes, dict):
            scopes = {}
        return cls(
            id=str(data.get('app_id') or data.get('id') or ''),
            name=str(data.get('name') or data.get('app_name') or ''),
            user_scopes=tuple(str(s) for s in scopes.get('user') or ()),
            bot_scopes=tuple(str(s) for s in scopes.get('bot') or ()),
        )

    @property
    def scopes(self) -> Tuple[str, ...]:
        return self.user_scopes + self.bot_scopes


@dataclass(frozen=True)
class Channel:
    """A conversation entry of ``conversations.list``."""

    id: str
    name: str = ""
    is_private: bool = False
    is_shared: bool = False
    is_ext_shared: bool = False
    is_org_shared: bool = False
    num_members: Optional[int] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> Channel:
        return cls(
            id=str(data.get('id') or ''),
            name=str(data.get('name') or ''),
            is_private=bool(data.get('is_private', False)),
            is_shared=bool(data.get('is_shared', False)),
            is_ext_shared=bool(data.get('is_ext_shared', False)),
            is_org_shared=bool(data.get('is_org_shared', False)),
            num_members=_opt_int(data.get('num_members')),
        )

    @property
    def is_public(self) -> bool:
        return not self.is_private

    @property
    def is_externally_shared(self) -> bool:
        """Shared with another organization or workspace."""
        return self.is_ext_shared or self.is_shared


@dataclass(frozen=True)
class SharingPrefs:
    """Workspace preferences from ``team.preferences.list``."""

    # None when the preference was not returned
    allow_message_deletion: Optional[bool] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> SharingPrefs:
        raw = {key: value for key, value in data.items() if key not in ('ok', 'warning', 'response_metadata')}
        return cls(
            allow_message_deletion=_opt_bool(raw.get('allow_message_deletion')),
            raw=raw,
        )

    @property
    def message_deletion_disabled(self) -> bool:
        return self.allow_message_deletion is False


# Convenience aliases for the fetcher's return types
UserList = List[Member]
AppPermissionList = List[InstalledApp]
ChannelList = List[Channel]
