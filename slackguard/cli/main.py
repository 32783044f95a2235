"""Main CLI application for SlackGuard."""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..adapters.slack_client import SlackWebClient
from ..checks import default_checks
from ..config import get_settings
from ..errors import SlackGuardError
from ..logging import get_logger, set_log_level
from ..models.findings import SEVERITY_RANK
from ..models.scan import ScanResult
from ..orchestrator.scanner import SlackSecurityScanner

app = typer.Typer(
    name="slackguard",
    help="Security posture audits for Slack workspaces",
    add_completion=False
)

console = Console()
logger = get_logger(__name__)

SEVERITY_COLORS = {
    'critical': 'bold red',
    'high': 'red',
    'medium': 'yellow',
    'low': 'blue',
    'info': 'dim',
}


@app.command()
def scan(
    token: Optional[str] = typer.Option(
        None, "--token", "-t", envvar="SLACK_TOKEN", help="Slack bearer token"
    ),
    team_id: Optional[str] = typer.Option(
        None, "--team-id", envvar="SLACK_TEAM_ID", help="Workspace ID to scan"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write the JSON report to this file"
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print the JSON report instead of tables"
    ),
    fail_on: Optional[str] = typer.Option(
        None, "--fail-on", help="Exit with code 2 if a finding of this severity or worse exists"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
) -> None:
    """Scan a workspace and report security findings."""
    settings = get_settings()

    if verbose:
        set_log_level("DEBUG")

    token = token or settings.slack_token
    team_id = team_id or settings.slack_team_id
    if not token:
        console.print("[red]No Slack token given (use --token or SLACK_TOKEN)[/red]")
        raise typer.Exit(1)
    if not team_id:
        console.print("[red]No workspace ID given (use --team-id or SLACK_TEAM_ID)[/red]")
        raise typer.Exit(1)
    if fail_on is not None and fail_on not in SEVERITY_RANK:
        console.print(f"[red]Unknown severity for --fail-on: {fail_on}[/red]")
        raise typer.Exit(1)

    if not as_json:
        console.print("[bold blue]SlackGuard[/bold blue] - Workspace Security Scan")
        console.print(f"Workspace: {team_id}")
        console.print()

    result = asyncio.run(_run_scan(token, team_id))

    if output:
        with open(output, 'w') as f:
            json.dump(result.to_dict(), f, indent=2)

    if as_json:
        console.print_json(data=result.to_dict())
    else:
        _display_scan_result(result)
        if output:
            console.print(f"Report saved to: {output}")

    if fail_on is not None and any(
        SEVERITY_RANK[finding.severity] <= SEVERITY_RANK[fail_on]
        for finding in result.findings
    ):
        raise typer.Exit(2)


@app.command()
def checks() -> None:
    """List the registered security checks."""
    table = Table(title="Registered Checks")
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")

    for position, check in enumerate(default_checks(), start=1):
        table.add_row(str(position), check.name, check.description)

    console.print(table)


@app.command()
def health(
    token: Optional[str] = typer.Option(
        None, "--token", "-t", envvar="SLACK_TOKEN", help="Slack bearer token"
    ),
) -> None:
    """Check that the Slack API accepts the token."""
    token = token or get_settings().slack_token
    if not token:
        console.print("[red]No Slack token given (use --token or SLACK_TOKEN)[/red]")
        raise typer.Exit(1)

    asyncio.run(_check_health(token))


async def _run_scan(token: str, team_id: str) -> ScanResult:
    """Run a scan, turning fatal errors into a non-zero exit."""
    try:
        return await SlackSecurityScanner(token, team_id).scan()
    except SlackGuardError as e:
        console.print(f"[red]Scan failed: {e}[/red]")
        logger.error("Scan failed", error=str(e))
        raise typer.Exit(1)


async def _check_health(token: str) -> None:
    """Call auth.test with the token."""
    try:
        data = await SlackWebClient(token).call("auth.test")
    except Exception as e:
        console.print(f"❌ Slack API: [red]FAILED[/red] ({e})")
        raise typer.Exit(1)

    console.print("✅ Slack API: [green]OK[/green]")
    console.print(f"Workspace: {data.get('team', '')} ({data.get('team_id', '')})")
    console.print(f"User: {data.get('user', '')}")


def _display_scan_result(result: ScanResult) -> None:
    """Display a scan result as tables."""
    console.print(f"[bold green]Scan Results for {result.team_name}[/bold green]")
    console.print(f"Scanned at: {result.scanned_at.isoformat()}")
    console.print()

    # Summary table
    summary = Table(title="Summary")
    summary.add_column("Severity", style="cyan")
    summary.add_column("Findings", style="green")
    for severity in SEVERITY_COLORS:
        summary.add_row(severity, str(result.summary.count(severity)))
    summary.add_row("total", str(result.summary.total))
    console.print(summary)

    # Findings table
    if result.findings:
        findings_table = Table(title="Findings")
        findings_table.add_column("Severity", style="red")
        findings_table.add_column("Title", style="white")
        findings_table.add_column("Category", style="cyan")
        findings_table.add_column("Frameworks", style="magenta")

        for finding in result.findings:
            color = SEVERITY_COLORS.get(finding.severity, 'white')
            findings_table.add_row(
                f"[{color}]{finding.severity}[/{color}]",
                finding.title,
                finding.category,
                ", ".join(finding.frameworks),
            )

        console.print(findings_table)

    # Compliance table
    compliance = Table(title="Compliance")
    compliance.add_column("Framework", style="cyan")
    compliance.add_column("Failed", style="red")
    compliance.add_column("Score", style="green")
    for score in result.compliance:
        compliance.add_row(score.framework, str(score.failed), f"{score.score}%")
    console.print(compliance)


if __name__ == "__main__":
    app()
