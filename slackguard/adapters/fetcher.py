"""Resource fetcher: turns Slack API responses into typed workspace state."""

import asyncio
from typing import List, Optional

import aiohttp

from ..config import Settings, get_settings
from ..errors import AuthError, ResourceFetchError, SlackAPIError
from ..logging import get_logger
from ..models.workspace import Channel, InstalledApp, Member, SharingPrefs, TeamInfo
from .slack_client import SlackWebClient

logger = get_logger(__name__)

# Failures a fetch can run into, whatever the client
FETCH_ERRORS = (SlackAPIError, aiohttp.ClientError, asyncio.TimeoutError)


class ResourceFetcher:
    """Fetches the workspace resources checks evaluate.

    Team info and the member list are required: failing to fetch either one
    raises. App permissions, channels and preferences often need scopes the
    token was not granted, so those fetches log and return an empty result.
    """

    def __init__(self, client: SlackWebClient, settings: Optional[Settings] = None):
        """Initialize the fetcher around a Slack client."""
        self.client = client
        self.settings = settings or get_settings()

    async def fetch_team_info(self) -> TeamInfo:
        """Fetch workspace metadata. Fatal on failure."""
        try:
            data = await self.client.call("team.info")
        except SlackAPIError as e:
            raise AuthError("team info", e.error) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ResourceFetchError("team info", str(e) or type(e).__name__) from e

        team = data.get("team")
        if not isinstance(team, dict):
            raise ResourceFetchError("team info", "response has no team object")

        return TeamInfo.from_api(team)

    async def fetch_users(self) -> List[Member]:
        """Fetch every workspace member. Fatal on failure."""
        try:
            members = await self.client.paginate(
                "users.list",
                "members",
                limit=self.settings.users_page_size,
            )
        except SlackAPIError as e:
            raise AuthError("users", e.error) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ResourceFetchError("users", str(e) or type(e).__name__) from e

        return [Member.from_api(member) for member in members if isinstance(member, dict)]

    async def fetch_app_permissions(self) -> List[InstalledApp]:
        """Fetch installed apps and their scopes, or [] if unavailable."""
        try:
            data = await self.client.call("apps.permissions.scopes.list")
        except FETCH_ERRORS as e:
            self._log_skipped("app permissions", e)
            return []

        return [InstalledApp.from_api(app) for app in data.get("scopes") or [] if isinstance(app, dict)]

    async def fetch_channels(self) -> List[Channel]:
        """Fetch public and private channels, or [] if unavailable."""
        try:
            channels = await self.client.paginate(
                "conversations.list",
                "channels",
                limit=self.settings.channels_page_size,
                types="public_channel,private_channel",
            )
        except FETCH_ERRORS as e:
            self._log_skipped("channels", e)
            return []

        return [Channel.from_api(channel) for channel in channels if isinstance(channel, dict)]

    async def fetch_sharing_prefs(self) -> SharingPrefs:
        """Fetch workspace preferences, or empty preferences if unavailable."""
        try:
            data = await self.client.call("team.preferences.list")
        except FETCH_ERRORS as e:
            self._log_skipped("sharing preferences", e)
            return SharingPrefs()

        return SharingPrefs.from_api(data)

    def _log_skipped(self, resource: str, error: Exception) -> None:
        logger.info(
            "Optional resource unavailable, dependent checks will be skipped",
            resource=resource,
            error=getattr(error, "error", None) or str(error),
            error_type=type(error).__name__
        )
