"""Command-line interface for Magic Guard."""

from __future__ import annotations

import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from magic_guard import MagicConfig, MagicGuard, ReasonTrace
from magic_guard.danger.analyzer import DangerLevel

console = Console()

LEVEL_STYLES = {
    DangerLevel.NONE: "green",
    DangerLevel.LOW: "blue",
    DangerLevel.MEDIUM: "yellow",
    DangerLevel.HIGH: "red",
    DangerLevel.CRITICAL: "bold red",
}


def _flag(value: bool | None) -> str:
    if value is None:
        return "[dim]?[/dim]"
    return "[red]yes[/red]" if value else "no"


@click.group()
@click.option("--config", "-c", type=click.Path(), help="Configuration file path")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """Magic Guard - typo recovery and danger detection."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True))],
        )

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["guard"] = MagicGuard(MagicConfig.load(config))


@cli.command()
@click.argument("first")
@click.argument("second")
@click.pass_context
def similarity(ctx: click.Context, first: str, second: str) -> None:
    """Show similarity metrics between two strings."""
    guard: MagicGuard = ctx.obj["guard"]

    table = Table(title="Similarity")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Edit distance", str(guard.edit_distance(first, second)))
    table.add_row("Token overlap", f"{guard.token_overlap(first, second)}%")
    table.add_row("Similarity", f"{guard.similarity(first, second):.3f}")

    console.print(table)


@cli.command()
@click.argument("command")
@click.argument("candidates", nargs=-1, required=True)
@click.pass_context
def suggest(ctx: click.Context, command: str, candidates: tuple[str, ...]) -> None:
    """Suggest the closest known command for a mistyped one."""
    guard: MagicGuard = ctx.obj["guard"]
    trace = ReasonTrace()

    match = guard.suggest_command(command, list(candidates), trace)

    if match:
        console.print(f"[green]Did you mean:[/green] {match}")
    else:
        console.print(f"[yellow]No confident suggestion for:[/yellow] {command}")

    if ctx.obj.get("verbose") and trace.suggested is not None:
        console.print(f"\nBest candidate: {trace.suggested}")
        console.print(f"Reason: {trace.reason}")
        console.print(
            f"Score: {trace.confidence_score:.3f}, distance: {trace.edit_distance}, "
            f"overlap: {trace.jaccard_index}%"
        )


@cli.command()
@click.option("--base-dir", "-d", default=".", type=click.Path(), help="Directory to search")
@click.argument("bad_path")
@click.pass_context
def paths(ctx: click.Context, base_dir: str, bad_path: str) -> None:
    """Suggest existing paths resembling a mistyped one."""
    guard: MagicGuard = ctx.obj["guard"]

    result = guard.suggest_paths(bad_path, base_dir)

    if not result.count:
        console.print("[yellow]No similar paths found.[/yellow]")
        return

    table = Table(title=f"Suggestions for {bad_path}")
    table.add_column("Path", style="cyan")
    table.add_column("Score", style="green")
    table.add_column("Exists")

    for suggestion in result:
        table.add_row(
            suggestion.candidate_path,
            f"{suggestion.similarity_score:.3f}",
            "yes" if suggestion.exists else "[red]no[/red]",
        )

    console.print(table)

    if result.truncated or result.scan_truncated:
        console.print(
            f"[dim]{result.dropped} more match(es) dropped; "
            f"{result.scanned} entries scanned[/dim]"
        )


@cli.command()
@click.argument("token")
@click.argument("candidates", nargs=-1, required=True)
@click.pass_context
def recover(ctx: click.Context, token: str, candidates: tuple[str, ...]) -> None:
    """Recover a misspelled token from a list of candidates."""
    guard: MagicGuard = ctx.obj["guard"]

    result = guard.recover_token(token, list(candidates))

    if not result.first_best_token:
        console.print(f"[yellow]No replacement found for:[/yellow] {token}")
        return

    status = "[green]auto-applied[/green]" if result.applied else "[yellow]needs review[/yellow]"
    console.print(
        f"{token} -> [bold]{result.recovered_token}[/bold] "
        f"(confidence: {result.confidence:.0%}, {status})"
    )
    if result.second_best_token:
        console.print(
            f"  [dim]runner-up: {result.second_best_token} "
            f"({result.second_best_confidence:.0%})[/dim]"
        )


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.argument("targets", nargs=-1, required=True)
@click.pass_context
def danger(ctx: click.Context, as_json: bool, targets: tuple[str, ...]) -> None:
    """Estimate the danger of operating on the given paths."""
    guard: MagicGuard = ctx.obj["guard"]

    report = guard.report_danger(list(targets))

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        table = Table(title="Danger Report")
        table.add_column("Path", style="cyan")
        table.add_column("Level")
        table.add_column("Code")
        table.add_column("Secrets")
        table.add_column("Large")
        table.add_column("World-writable")
        table.add_column("Suspicious")

        for item in report.items:
            style = LEVEL_STYLES[item.level]
            table.add_row(
                item.target_path,
                f"[{style}]{item.level.name}[/{style}]",
                _flag(item.contains_code),
                _flag(item.contains_secrets),
                _flag(item.large_size),
                _flag(item.world_writable),
                _flag(item.suspicious_extension or item.contains_suspicious_files),
            )

        console.print(table)

        border = "red" if report.block_recommended else "yellow" if report.warning_required else "green"
        console.print(Panel(report.summary(), border_style=border))

    if report.block_recommended:
        sys.exit(2)


@cli.command()
@click.option("--base-dir", "-d", default=".", type=click.Path(), help="Directory relative paths resolve against")
@click.argument("tokens", nargs=-1, required=True)
@click.pass_context
def check_line(ctx: click.Context, base_dir: str, tokens: tuple[str, ...]) -> None:
    """Suggest corrections for every missing path in a command line."""
    guard: MagicGuard = ctx.obj["guard"]

    report = guard.suggest_command_line(list(tokens), base_dir)

    if not report.set_count:
        console.print("[green]All path arguments exist.[/green]")
        return

    for token, suggestions in report.sets:
        best = suggestions.best
        if best is None:
            console.print(f"[red]✗[/red] {token}: no similar path")
        else:
            console.print(
                f"[yellow]?[/yellow] {token}: did you mean {best.candidate_path} "
                f"({best.similarity_score:.0%})"
            )

    if report.truncated:
        console.print("[dim]More missing paths were not checked.[/dim]")


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
