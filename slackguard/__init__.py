"""
SlackGuard: security posture audits for Slack workspaces

SlackGuard reads a workspace through the Slack Web API and reports
misconfigurations:
- Authentication posture (2FA enforcement, email domain restrictions)
- Stale, deactivated and incomplete accounts
- Third-party apps holding sensitive scopes
- Externally shared and sensitively named public channels

Usage:
    from slackguard import SlackSecurityScanner

    result = await SlackSecurityScanner(token, team_id).scan()

    # Or use CLI:
    $ slackguard scan --team-id T0123456
"""

__version__ = "0.3.0"

# Core functionality
from .config import get_settings
from .logging import get_logger

# Main scanner class for programmatic use
from .orchestrator.scanner import SlackSecurityScanner

__all__ = ["SlackSecurityScanner", "get_settings", "get_logger", "__version__"]
