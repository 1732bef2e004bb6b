"""Shared setup logic for CLI commands."""

from __future__ import annotations

import asyncio
from datetime import date, datetime
from pathlib import Path

import click

from trace_journal.core.exceptions import TraceJournalError

APP_DIR = Path.home() / ".trace-journal"
CONFIG_PATH = APP_DIR / "config.yaml"


def load_config(config_file: str | None = None):
    """Load config from ``config_file`` or ~/.trace-journal/config.yaml."""
    from trace_journal.core.config import Config

    return Config(config_file=config_file or str(CONFIG_PATH))


def get_store(ctx: click.Context):
    """Build the journal store for the current invocation."""
    from trace_journal.journal.file_store import FileJournalStore

    return FileJournalStore.from_config(ctx.obj["config"])


def run_async(coro):
    """Run a store coroutine, turning library errors into clean CLI errors."""
    try:
        return asyncio.run(coro)
    except TraceJournalError as e:
        raise click.ClickException(str(e)) from e


class DateParamType(click.ParamType):
    """Accepts ``YYYY-MM-DD``, ``today`` or ``yesterday``."""

    name = "date"

    def convert(self, value, param, ctx):
        if isinstance(value, date):
            return value
        text = str(value).strip().lower()
        if text == "today":
            return date.today()
        if text == "yesterday":
            return date.fromordinal(date.today().toordinal() - 1)
        try:
            return datetime.strptime(text, "%Y-%m-%d").date()
        except ValueError:
            self.fail(f"'{value}' is not a date. Use YYYY-MM-DD or 'today'.", param, ctx)


DATE = DateParamType()


def infer_entry_date(path: Path, markdown: str) -> date | None:
    """Work out which day a markdown file belongs to.

    Tries the ``YYYY/MM/DD.md`` path layout first, then the title line.
    """
    try:
        return date(int(path.parent.parent.name), int(path.parent.name), int(path.stem))
    except ValueError:
        pass

    from trace_journal.journal.codec import DATE_FORMAT, TITLE_PREFIX

    for line in markdown.splitlines():
        line = line.strip()
        if not line:
            continue
        if line.startswith(TITLE_PREFIX):
            try:
                return datetime.strptime(line[len(TITLE_PREFIX) :].strip(), DATE_FORMAT).date()
            except ValueError:
                return None
        return None
    return None
