"""trace-journal CLI: entry point for init, new, show, today, list, check and format."""

import click

from trace_journal import __version__


@click.group()
@click.version_option(version=__version__, package_name="trace-journal")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (defaults to ~/.trace-journal/config.yaml).",
)
@click.option("--log-level", default=None, help="Override logging.level (DEBUG, INFO, WARNING, ERROR).")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, log_level: str | None) -> None:
    """trace-journal: daily journal entries as markdown files."""
    from trace_journal.core.cli.common import load_config
    from trace_journal.core.utils.logging import setup_logging

    config = load_config(config_file)
    setup_logging(
        level=log_level or config.get("logging.level", "WARNING"),
        log_file=config.get("logging.file") or None,
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["config_file"] = config_file


# Register subcommands (lazy imports keep startup fast)
from .check_cmd import check, format_cmd
from .entry_cmd import new, show, today
from .init_cmd import init
from .list_cmd import list_cmd

main.add_command(init)
main.add_command(new)
main.add_command(show)
main.add_command(today)
main.add_command(list_cmd)
main.add_command(check)
main.add_command(format_cmd)
