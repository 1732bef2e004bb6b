"""trace-journal init: choose the journal folder and parse policy."""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from .common import CONFIG_PATH

POLICIES = ["lenient", "warn", "strict"]


def _load_existing_config(path: Path) -> dict:
    """Load existing config if present."""
    if path.exists():
        with open(path) as f:
            return yaml.safe_load(f) or {}
    return {}


def _prompt_choice(prompt: str, choices: list[str], default: str = "") -> str:
    """Prompt for a choice from a numbered list."""
    click.echo(f"\n{prompt}")
    for i, c in enumerate(choices, 1):
        marker = " (default)" if c == default else ""
        click.echo(f"  {i}. {c}{marker}")

    while True:
        raw = click.prompt("  Choose", default=str(choices.index(default) + 1) if default in choices else "1")
        try:
            idx = int(raw) - 1
            if 0 <= idx < len(choices):
                return choices[idx]
        except ValueError:
            if raw in choices:
                return raw
        click.echo(f"  Please enter a number 1-{len(choices)}")


@click.command()
@click.option("--root", default=None, help="Journal folder (prompted if omitted).")
@click.option("--policy", type=click.Choice(POLICIES), default=None, help="Parse policy (prompted if omitted).")
@click.pass_context
def init(ctx: click.Context, root: str | None, policy: str | None) -> None:
    """Set up where your journal lives."""
    try:
        from rich.console import Console
        from rich.panel import Panel
    except ImportError:
        raise click.ClickException("Install rich: pip install rich")

    config_path = Path(ctx.obj.get("config_file") or CONFIG_PATH).expanduser()
    existing = _load_existing_config(config_path)
    journal_cfg = existing.get("journal", {}) or {}
    codec_cfg = existing.get("codec", {}) or {}

    console = Console()
    if root is None or policy is None:
        console.print(Panel("Entries are stored as <folder>/YYYY/MM/DD.md", title="Journal Setup"))

    if root is None:
        root = click.prompt("\nWhere should entries be stored?", default=journal_cfg.get("root") or "~/Journal")
    if policy is None:
        policy = _prompt_choice(
            "How should unrecognised markdown be handled?",
            POLICIES,
            default=codec_cfg.get("policy", "lenient"),
        )

    root_path = Path(root).expanduser()
    root_path.mkdir(parents=True, exist_ok=True)

    existing.setdefault("journal", {})["root"] = str(root_path)
    existing.setdefault("codec", {})["policy"] = policy

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(existing, f, default_flow_style=False, sort_keys=False)

    console.print(f"[green]Saved[/green] {config_path}")
