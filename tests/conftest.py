"""Shared fixtures: a fake Slack client and payload builders."""

import asyncio
import time
from typing import Any, Dict, List, Optional

import pytest

from slackguard.config import Settings
from slackguard.errors import SlackAPIError

DAY = 24 * 60 * 60
PHOTO = "https://avatars.slack-edge.com/2023-01-01/photo_72.png"


class FakeSlackClient:
    """Serves canned Web API responses.

    ``responses`` maps a method name to a response body or to an exception
    to raise. Bodies with ``ok: false`` raise ``SlackAPIError`` like the real
    client does; unknown methods answer ``unknown_method``.
    """

    def __init__(self, responses: Dict[str, Any], delays: Optional[Dict[str, float]] = None):
        self.responses = responses
        self.delays = delays or {}
        self.calls: List[str] = []

    async def call(self, method: str, **params: Any) -> Dict[str, Any]:
        self.calls.append(method)
        if method in self.delays:
            await asyncio.sleep(self.delays[method])

        response = self.responses.get(method, {"ok": False, "error": "unknown_method"})
        if isinstance(response, Exception):
            raise response
        if not response.get("ok"):
            raise SlackAPIError(method, response.get("error"))
        return response

    async def paginate(self, method: str, key: str, *, limit: Optional[int] = None, **params: Any):
        data = await self.call(method, limit=limit, **params)
        return list(data.get(key) or [])


def _member(
    user_id: str,
    *,
    has_2fa: Optional[bool] = True,
    updated: Optional[float] = None,
    deleted: bool = False,
    is_bot: bool = False,
    is_restricted: bool = False,
    photo: Optional[str] = PHOTO,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": user_id,
        "name": user_id.lower(),
        "deleted": deleted,
        "is_bot": is_bot,
        "is_restricted": is_restricted,
        "updated": int(updated if updated is not None else time.time() - 10 * DAY),
        "profile": {"real_name": user_id, "image_72": photo},
    }
    if has_2fa is not None:
        data["has_2fa"] = has_2fa
    return data


def _team(**overrides: Any) -> Dict[str, Any]:
    team = {
        "id": "T0001",
        "name": "Acme",
        "domain": "acme",
        "email_domain": "acme.com",
        "two_factor_auth_required": True,
    }
    team.update(overrides)
    return {"ok": True, "team": team}


@pytest.fixture
def fake_client_cls():
    return FakeSlackClient


@pytest.fixture
def member():
    """Build a ``users.list`` member payload."""
    return _member


@pytest.fixture
def team_response():
    """Build a ``team.info`` response."""
    return _team


@pytest.fixture
def stale_timestamp():
    """A profile update timestamp well over a year old."""
    return int(time.time() - 400 * DAY)


@pytest.fixture
def settings():
    return Settings(scan_timeout=None, log_format="console")
