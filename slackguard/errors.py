"""Exception types raised by SlackGuard."""

from typing import Optional


class SlackGuardError(Exception):
    """Base class for SlackGuard errors."""


class SlackAPIError(SlackGuardError):
    """The Slack Web API answered with ``ok: false``."""

    def __init__(self, method: str, error: Optional[str] = None):
        self.method = method
        self.error = error or "unknown_error"
        super().__init__(f"{method} failed: {self.error}")


class ResourceFetchError(SlackGuardError):
    """A resource required by every scan could not be fetched."""

    def __init__(self, resource: str, error: str):
        self.resource = resource
        self.error = error
        super().__init__(f"Failed to fetch {resource}: {error}")


class AuthError(ResourceFetchError):
    """The Slack Web API rejected a request for a required resource."""


class ScanTimeoutError(SlackGuardError):
    """The scan deadline expired before the required resources were fetched."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Scan timed out after {timeout:g}s")
