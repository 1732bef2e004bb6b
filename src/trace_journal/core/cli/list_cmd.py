"""trace-journal list: show which days have entries."""

from __future__ import annotations

import click

from .common import get_store, run_async


@click.command(name="list")
@click.option("--year", type=int, default=None, help="Only entries from this year.")
@click.option("--month", type=click.IntRange(1, 12), default=None, help="Only entries from this month.")
@click.pass_context
def list_cmd(ctx: click.Context, year: int | None, month: int | None) -> None:
    """List the dates of all journal entries."""
    store = get_store(ctx)
    dates = run_async(store.list_entry_dates())

    if year is not None:
        dates = [d for d in dates if d.year == year]
    if month is not None:
        dates = [d for d in dates if d.month == month]

    for day in dates:
        click.echo(day.isoformat())
