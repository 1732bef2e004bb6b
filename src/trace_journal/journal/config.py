"""Configuration dataclasses for the journal codec and store.

These are pure data containers with sensible defaults.
Override them from YAML config, env vars, or constructor args.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from trace_journal.core.exceptions import ConfigurationError


class ParsePolicy(Enum):
    """How the codec reacts to markdown it does not recognise."""

    LENIENT = "lenient"  # Skip unknown structure, default bad values, say nothing
    WARN = "warn"  # Same as lenient, but log every skip/fallback
    STRICT = "strict"  # Raise JournalParseError on the first problem

    @classmethod
    def parse(cls, value: str | ParsePolicy) -> ParsePolicy:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ConfigurationError(f"Unknown parse policy '{value}'. Expected one of: {choices}") from None


@dataclass
class CodecConfig:
    """Settings for markdown parsing.

    Attributes:
        policy: Reaction to unknown sections, unknown subsections, malformed
            energy levels and a missing title line.
    """

    policy: ParsePolicy = ParsePolicy.LENIENT

    def __post_init__(self):
        self.policy = ParsePolicy.parse(self.policy)


@dataclass
class StoreConfig:
    """Settings for the date-keyed file store.

    Attributes:
        extension: File suffix for entry files.
        encoding: Text encoding used for reads and writes.
    """

    extension: str = ".md"
    encoding: str = "utf-8"

    def __post_init__(self):
        if not self.extension.startswith("."):
            self.extension = f".{self.extension}"
