"""Adapters for the Slack Web API."""

from .fetcher import ResourceFetcher
from .slack_client import SlackWebClient

__all__ = [
    "ResourceFetcher",
    "SlackWebClient",
]
