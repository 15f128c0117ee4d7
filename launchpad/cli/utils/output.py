"""Output formatting utilities"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...constants import (
    EMOJI_ERROR,
    EMOJI_SUCCESS,
    EMOJI_WARNING,
    FAILURE_OUTPUT_TAIL,
    MSG_DEPLOY_SUCCESS,
    MSG_TAG_CREATED,
    MSG_TAG_PUSHED,
)
from ...models import DeployFailure, DeployOutcome, DeploySuccess, PreflightReport

console = Console()


def format_check_report(report: PreflightReport, title: Optional[str] = None) -> Table:
    """Build a table with one row per check

    Args:
        report: Preflight report
        title: Optional table title

    Returns:
        Rich Table object
    """
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Check", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Details")

    for check in report.checks:
        status = f"[green]{EMOJI_SUCCESS} PASS[/green]" if check.passed else f"[red]{EMOJI_ERROR} FAIL[/red]"
        detail = escape(check.detail or "")
        if not check.passed and check.hint:
            detail += f"\n[dim]{escape(check.hint)}[/dim]"
        table.add_row(check.name, status, detail)

    return table


def format_success(outcome: DeploySuccess, remote: Optional[str] = None) -> None:
    """Format and display a successful deploy"""
    lines = [
        f"[green]{MSG_DEPLOY_SUCCESS.format(version=outcome.version)}[/green]",
        "",
        f"[bold]Version:[/bold] {outcome.version.marketing}",
        f"[bold]Build:[/bold] {outcome.version.build}",
    ]

    if outcome.uploaded_version:
        lines.append(f"[bold]Reported by fastlane:[/bold] {outcome.uploaded_version}")

    if outcome.tag_created:
        lines.append(MSG_TAG_CREATED.format(tag=outcome.tag_name))
        if outcome.tag_pushed:
            lines.append(MSG_TAG_PUSHED.format(tag=outcome.tag_name, remote=remote or "remote"))
    else:
        lines.append("[dim]No release tag created[/dim]")

    if outcome.removed_artifacts:
        lines.append(f"[bold]Cleaned up:[/bold] {len(outcome.removed_artifacts)} artifact(s)")

    if outcome.warnings:
        lines.append("")
        for warning in outcome.warnings:
            lines.append(f"[yellow]{EMOJI_WARNING} {escape(warning)}[/yellow]")

    console.print(Panel(
        "\n".join(lines),
        title="Deploy Result",
        border_style="yellow" if outcome.warnings else "green"
    ))


def format_failure(outcome: DeployFailure, verbose: bool = False) -> None:
    """Format and display a failed deploy

    The captured fastlane output was already streamed; only its tail is
    repeated unless ``verbose`` is set.
    """
    if outcome.checks:
        console.print(format_check_report(PreflightReport(outcome.checks), title="Preflight checks"))

    lines = [
        f"[red]{EMOJI_ERROR} Deploy failed during {outcome.stage.value}[/red]",
        "",
        escape(outcome.reason),
    ]

    if outcome.error_code:
        lines.append(f"[dim]Error code: {outcome.error_code}[/dim]")

    if outcome.version is not None:
        lines.append("")
        lines.append(
            f"[yellow]{EMOJI_WARNING} Project version was already set to {outcome.version} "
            f"and has not been reverted[/yellow]"
        )

    if outcome.output:
        output_lines = outcome.output.splitlines()
        if not verbose:
            output_lines = output_lines[-FAILURE_OUTPUT_TAIL:]
        lines.append("")
        lines.append("[bold]fastlane output:[/bold]")
        lines.extend(f"[dim]{escape(line)}[/dim]" for line in output_lines)

    if outcome.hint:
        lines.append("")
        lines.append(f"[bold]Next step:[/bold] {escape(outcome.hint)}")

    console.print(Panel(
        "\n".join(lines),
        title="Deploy Error",
        border_style="red"
    ))


def format_deploy_outcome(outcome: DeployOutcome,
                          verbose: bool = False,
                          remote: Optional[str] = None) -> None:
    """Format and display a deploy outcome"""
    if outcome.success:
        format_success(outcome, remote)
    else:
        format_failure(outcome, verbose)


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Print error message"""
    if error:
        console.print(f"[red]Error:[/red] {message}: {str(error)}")
    else:
        console.print(f"[red]Error:[/red] {message}")


def print_warning(message: str) -> None:
    """Print warning message"""
    console.print(f"[yellow]Warning:[/yellow] {message}")
