import json

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from league_bot.commands.replies import CommandResult, Embed
from league_bot.domain.league import LeagueSnapshot, snapshot_to_dict

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

# Embed colours are discord.Colour names; map them to rich colour names.
_RICH_COLOURS = {"blue": "blue", "green": "green", "gold": "yellow", "orange": "dark_orange", "red": "red"}


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {escape(message)}")


def print_embed(embed: Embed) -> None:
    colour = _RICH_COLOURS.get(embed.color, "white")
    console.print(f"[bold {colour}]{escape(embed.title)}[/bold {colour}]")
    if embed.description:
        console.print(escape(embed.description))
    if embed.fields:
        table = Table(show_header=False, box=None)
        table.add_column("Field", style="bold")
        table.add_column("Value", justify="right")
        for field in embed.fields:
            table.add_row(escape(field.name), escape(field.value))
        console.print(table)
    if embed.timestamp is not None:
        console.print(f"[dim]{embed.timestamp.isoformat()}[/dim]")


def print_command_result(result: CommandResult | None) -> None:
    if result is None:
        print_error("Not a command (missing prefix)")
        return
    if result.reply.embed is not None:
        print_embed(result.reply.embed)
    elif result.reply.text is not None:
        console.print(escape(result.reply.text))
    if result.audit is not None:
        console.print("[dim]Audit notice:[/dim]")
        print_embed(result.audit.to_embed())


def print_ingest_result(applied: int, ignored: int) -> None:
    console.print(f"[bold green]Applied[/bold green] {applied} updates")
    if ignored:
        console.print(f"[yellow]Ignored[/yellow] {ignored} malformed updates")


def print_snapshot(snapshot: LeagueSnapshot) -> None:
    console.print_json(json.dumps(snapshot_to_dict(snapshot)))
