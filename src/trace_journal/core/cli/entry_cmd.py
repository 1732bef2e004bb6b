"""trace-journal new / show / today: work with a single day's entry."""

from __future__ import annotations

from datetime import date

import click

from .common import DATE, get_store, run_async


@click.command()
@click.argument("day", type=DATE)
@click.option("--force", is_flag=True, help="Overwrite an existing entry with an empty one.")
@click.pass_context
def new(ctx: click.Context, day: date, force: bool) -> None:
    """Create an empty entry for DAY (YYYY-MM-DD or 'today')."""
    from trace_journal.journal.session import JournalSession

    store = get_store(ctx)
    if store.entry_exists(day) and not force:
        raise click.ClickException(f"An entry for {day.isoformat()} already exists at {store.entry_path(day)}")

    run_async(JournalSession(store, day).create())
    click.echo(str(store.entry_path(day)))


@click.command()
@click.argument("day", type=DATE)
@click.option("--raw", is_flag=True, help="Print the markdown instead of rendering it.")
@click.pass_context
def show(ctx: click.Context, day: date, raw: bool) -> None:
    """Show the entry for DAY."""
    store = get_store(ctx)
    entry = run_async(store.load_entry(day))
    markdown = store.codec.to_markdown(entry)

    if raw:
        click.echo(markdown, nl=False)
        return

    try:
        from rich.console import Console
        from rich.markdown import Markdown
    except ImportError:
        raise click.ClickException("Install rich: pip install rich")

    console = Console()
    console.rule(entry.title)
    console.print(Markdown(markdown))


@click.command()
@click.pass_context
def today(ctx: click.Context) -> None:
    """Print the path of today's entry, creating it if needed."""
    from trace_journal.journal.session import JournalSession

    store = get_store(ctx)
    day = date.today()
    if not store.entry_exists(day):
        run_async(JournalSession(store, day).create())
        click.echo(f"Created {store.entry_path(day)}", err=True)
    click.echo(str(store.entry_path(day)))
