"""trace-journal check / format: validate and normalise entry files."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import click

from trace_journal.core.exceptions import JournalParseError

from .common import DATE, infer_entry_date


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Cannot read {path}: {e}") from e


def _resolve_date(path: Path, markdown: str, day: date | None) -> date:
    day = day or infer_entry_date(path, markdown)
    if day is None:
        raise click.ClickException(f"Cannot tell which day {path} belongs to. Pass --date YYYY-MM-DD.")
    return day


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--date", "day", type=DATE, default=None, help="Entry date (inferred from path or title).")
@click.option("--strict", is_flag=True, help="Exit with status 1 if anything was skipped or defaulted.")
def check(file: Path, day: date | None, strict: bool) -> None:
    """Report sections, subsections and values FILE's parser would skip."""
    from trace_journal.journal.codec import JournalEntryCodec

    markdown = _read(file)
    day = _resolve_date(file, markdown, day)
    _, report = JournalEntryCodec().parse_with_report(markdown, day)

    if not report.has_issues:
        click.echo(f"{file}: ok")
        return

    for issue in report.issues():
        click.echo(f"{file}: {issue}")
    if strict:
        sys.exit(1)


@click.command(name="format")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--date", "day", type=DATE, default=None, help="Entry date (inferred from path or title).")
@click.option("--check", "check_only", is_flag=True, help="Don't write; exit 1 if any file would change.")
@click.option("--force", is_flag=True, help="Rewrite even when text the parser skips would be lost.")
@click.pass_context
def format_cmd(ctx: click.Context, files: tuple[Path, ...], day: date | None, check_only: bool, force: bool) -> None:
    """Rewrite FILES in canonical entry layout.

    A file with unknown sections, unrecognised record lines or other text the
    parser does not keep is left alone unless --force is given.
    """
    from trace_journal.journal.codec import JournalEntryCodec
    from trace_journal.journal.config import CodecConfig

    codec = JournalEntryCodec(CodecConfig(policy=ctx.obj["config"].get("codec.policy", "lenient")))
    changed = []
    refused = []

    for path in files:
        markdown = _read(path)
        entry_date = _resolve_date(path, markdown, day)
        try:
            entry, report = codec.parse_with_report(markdown, entry_date)
        except JournalParseError as e:
            raise click.ClickException(f"{path}: {e}") from e

        canonical = codec.to_markdown(entry)
        if canonical == markdown:
            continue
        for issue in report.issues():
            click.echo(f"{path}: {issue}")

        if check_only:
            changed.append(path)
            click.echo(f"would reformat {path}")
        elif report.has_issues and not force:
            refused.append(path)
            click.echo(f"not reformatting {path}: text would be lost (use --force)")
        else:
            path.write_text(canonical, encoding="utf-8")
            click.echo(f"reformatted {path}")

    if refused or (check_only and changed):
        sys.exit(1)
