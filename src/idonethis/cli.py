"""iDoneThis CLI - read and submit done items."""

import json
import logging
import os
import sys
from dataclasses import asdict
from datetime import date

import click

from .client import IdonethisClient
from .config import load_config
from .core.entries import Entry
from .core.memories import memory_dates
from .errors import IdonethisError


def _parse_date(ctx, param, value: str | None) -> date | None:
    """click callback turning YYYY-MM-DD into a date."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date") from None


def _show_entries(entries: list[Entry], as_json: bool, empty_msg: str = "Nothing done.") -> None:
    """Shared entry display logic."""
    if as_json:
        click.echo(json.dumps([asdict(e) for e in entries], indent=2))
        return

    if not entries:
        click.echo(empty_msg)
        return

    for entry in entries:
        click.echo(f"* {entry.text or ''}")


def _client(ctx: click.Context) -> IdonethisClient:
    """Build the client from config and global options, prompting for a password only if login is needed."""
    opts = ctx.obj
    config = load_config()
    user = opts["user"] or config.user
    if not user:
        raise click.UsageError("No username given. Use --user or set 'user' in idonethis.conf")

    password = config.password or os.environ.get("IDONETHIS_PASSWORD")

    def ask_password() -> str:
        return click.prompt(f"idonethis password for {user}", hide_input=True)

    client = IdonethisClient(
        user=user,
        password=password or ask_password,
        calendar=opts["calendar"] or config.calendar or None,
        cache_dir=config.cache_path,
    )
    ctx.call_on_close(client.close)
    return client


@click.group()
@click.version_option(package_name="idonethis")
@click.option("--user", "-u", default=None, help="idonethis username")
@click.option("--calendar", "-c", default=None, help="Calendar short name, if not the username")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, user: str | None, calendar: str | None, debug: bool):
    """iDoneThis - read and submit done items."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    ctx.obj = {"user": user, "calendar": calendar}


@main.command()
@click.argument("text", nargs=-1, required=True)
@click.option("--date", "-d", "done_date", default=None, callback=_parse_date,
              help="Date the item was done (YYYY-MM-DD), defaults to today")
@click.pass_context
def done(ctx, text: tuple[str, ...], done_date: date | None):
    """Submit a done item."""
    try:
        client = _client(ctx)
        client.submit_entry(" ".join(text), done_date)
    except IdonethisError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo("Done!")


@main.command()
@click.option("--date", "-d", "day", default=None, callback=_parse_date,
              help="Day to show (YYYY-MM-DD), defaults to today")
@click.option("--start", default=None, callback=_parse_date, help="Start of range (YYYY-MM-DD)")
@click.option("--end", default=None, callback=_parse_date, help="End of range (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def get(ctx, day: date | None, start: date | None, end: date | None, as_json: bool):
    """List done items for a day or a range."""
    if day and (start or end):
        raise click.UsageError("Use either --date or --start/--end, not both")

    try:
        client = _client(ctx)
        if start or end:
            entries = client.get_range(start or end, end or start)
        elif day:
            entries = client.get_day(day)
        else:
            entries = client.get_today()
    except IdonethisError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _show_entries(entries, as_json)


@main.command()
@click.option("--years", "-y", default=1, type=click.IntRange(min=1), help="How many years to look back")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def memories(ctx, years: int, as_json: bool):
    """Show what was done on this day in previous years."""
    try:
        client = _client(ctx)
        found = {day: client.get_day(day) for day in memory_dates(date.today(), years)}
    except IdonethisError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(
            json.dumps(
                {day.isoformat(): [asdict(e) for e in entries] for day, entries in found.items()},
                indent=2,
            )
        )
        return

    for day, entries in found.items():
        if not entries:
            continue
        click.echo(f"### {day.strftime('%A, %B %d %Y')}")
        _show_entries(entries, as_json=False)
        click.echo()

    if not any(found.values()):
        click.echo("Nothing done on this day in previous years.")
