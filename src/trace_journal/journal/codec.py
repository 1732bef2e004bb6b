"""Markdown codec for journal entries.

Serializes a ``JournalEntry`` to a human-editable markdown document and
parses such a document back. The layout is::

    # Journal Entry: 2024-03-01

    ## Wellbeing

    ### Energy Level
    8/10

    ### Physical Activity
    Ran 5k

Sections (``## ``) and subsections (``### ``) come in a fixed order.
Repeated sub-records are written under their subsection as a ``#### `` header
holding the record's primary field, followed by indented ``Key: value`` lines.

Parsing is a heuristic line-prefix scan. Unknown sections and subsections are
skipped, unknown record lines are ignored and a malformed energy level falls
back to 5, so hand-edited files always load. Every skip is noted in a
``ParseReport``, and ``CodecConfig.policy`` decides whether it is silent,
logged, or raised as ``JournalParseError``.

Free text is written verbatim: a text line that itself starts with ``## ``,
``### `` or ``#### `` is read back as structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as Date
from datetime import datetime
from enum import Enum

from loguru import logger

from trace_journal.core.exceptions import JournalParseError

from .config import CodecConfig, ParsePolicy
from .models import (
    DEFAULT_ENERGY_LEVEL,
    CreativityLearning,
    DailyCheckIn,
    Interaction,
    JournalEntry,
    MediaItem,
    Meeting,
    PersonalGrowth,
    Social,
    Wellbeing,
    WorkCareer,
    WorkItem,
)

TITLE_PREFIX = "# Journal Entry: "
DATE_FORMAT = "%Y-%m-%d"

SECTION_MARKER = "## "
SUBSECTION_MARKER = "### "
RECORD_MARKER = "#### "
RECORD_INDENT = "    "
HEADER_SEPARATOR = " - "
ENERGY_SUFFIX = "/10"
ENERGY_RANGE = range(1, 11)


# ── Layout tables ───────────────────────────────────────────────────


class FieldKind(Enum):
    TEXT = "text"
    ENERGY = "energy"
    RECORDS = "records"


@dataclass(frozen=True)
class RecordLayout:
    """How one sub-record type is laid out under its subsection.

    Attributes:
        record_type: Dataclass to build for each ``#### `` header.
        header_fields: Attributes carried by the header, in order. More than
            one means the header is split on `` - ``.
        keyed_fields: ``(key, attribute)`` pairs written as ``Key: value``.
        bare_field: Attribute that takes an unprefixed line, if any.
    """

    record_type: type
    header_fields: tuple[str, ...]
    keyed_fields: tuple[tuple[str, str], ...]
    bare_field: str | None = None


@dataclass(frozen=True)
class SubsectionLayout:
    title: str
    attr: str
    kind: FieldKind = FieldKind.TEXT
    records: RecordLayout | None = None


@dataclass(frozen=True)
class SectionLayout:
    title: str
    attr: str
    section_type: type
    subsections: tuple[SubsectionLayout, ...]

    def subsection(self, title: str) -> SubsectionLayout | None:
        for sub in self.subsections:
            if sub.title == title:
                return sub
        return None


MEDIA_ITEM_LAYOUT = RecordLayout(
    record_type=MediaItem,
    header_fields=("title",),
    keyed_fields=(("Creator", "creator"), ("Status", "status"), ("Notes", "notes")),
)

INTERACTION_LAYOUT = RecordLayout(
    record_type=Interaction,
    header_fields=("person",),
    keyed_fields=(("Notes", "notes"),),
)

# Older files carry the description as a bare indented line
WORK_ITEM_LAYOUT = RecordLayout(
    record_type=WorkItem,
    header_fields=("title", "status", "priority"),
    keyed_fields=(("Description", "description"),),
    bare_field="description",
)

MEETING_LAYOUT = RecordLayout(
    record_type=Meeting,
    header_fields=("title",),
    keyed_fields=(("Attendees", "attendees"), ("Notes", "notes"), ("Action Items", "action_items")),
)

SECTIONS: tuple[SectionLayout, ...] = (
    SectionLayout(
        "Daily Check-in",
        "daily_check_in",
        DailyCheckIn,
        (
            SubsectionLayout("Mood", "mood"),
            SubsectionLayout("Today's Highlight", "highlight"),
            SubsectionLayout("Daily Overview", "overview"),
        ),
    ),
    SectionLayout(
        "Personal Growth",
        "personal_growth",
        PersonalGrowth,
        (
            SubsectionLayout("Reflections", "reflections"),
            SubsectionLayout("Achievements", "achievements"),
            SubsectionLayout("Challenges", "challenges"),
            SubsectionLayout("Goals", "goals"),
        ),
    ),
    SectionLayout(
        "Wellbeing",
        "wellbeing",
        Wellbeing,
        (
            SubsectionLayout("Energy Level", "energy_level", FieldKind.ENERGY),
            SubsectionLayout("Physical Activity", "physical_activity"),
            SubsectionLayout("Mental Health", "mental_health"),
        ),
    ),
    SectionLayout(
        "Creativity & Learning",
        "creativity_learning",
        CreativityLearning,
        (
            SubsectionLayout("Ideas", "ideas"),
            SubsectionLayout("Learning Log", "learning_log"),
            SubsectionLayout("Books & Media", "books_media", FieldKind.RECORDS, MEDIA_ITEM_LAYOUT),
            SubsectionLayout("Projects", "projects"),
        ),
    ),
    SectionLayout(
        "Social",
        "social",
        Social,
        (
            SubsectionLayout(
                "Meaningful Interactions", "meaningful_interactions", FieldKind.RECORDS, INTERACTION_LAYOUT
            ),
            SubsectionLayout("Relationship Updates", "relationship_updates"),
            SubsectionLayout("Social Events", "social_events"),
        ),
    ),
    SectionLayout(
        "Work & Career",
        "work_career",
        WorkCareer,
        (
            SubsectionLayout("Work Items", "work_items", FieldKind.RECORDS, WORK_ITEM_LAYOUT),
            SubsectionLayout("Meetings", "meetings", FieldKind.RECORDS, MEETING_LAYOUT),
            SubsectionLayout("Challenges", "challenges"),
            SubsectionLayout("Wins", "wins"),
            SubsectionLayout("Work Ideas", "work_ideas"),
        ),
    ),
)

SECTION_TITLES: tuple[str, ...] = tuple(s.title for s in SECTIONS)
_SECTIONS_BY_TITLE = {s.title: s for s in SECTIONS}


# ── Parse report ────────────────────────────────────────────────────


@dataclass
class ParseReport:
    """Everything the parser skipped or defaulted while decoding a document.

    Attributes:
        missing_title: No ``# Journal Entry: `` line before the first section.
        title_date: Date found in the title line, if it parsed.
        unknown_sections: ``## `` titles that matched no known section.
        unknown_subsections: ``Section / Subsection`` pairs that were skipped.
        invalid_values: Human-readable notes on values that fell back to defaults.
        ignored_lines: Notes on text inside known sections that was not kept.
    """

    missing_title: bool = False
    title_date: Date | None = None
    unknown_sections: list[str] = field(default_factory=list)
    unknown_subsections: list[str] = field(default_factory=list)
    invalid_values: list[str] = field(default_factory=list)
    ignored_lines: list[str] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(
            self.missing_title
            or self.unknown_sections
            or self.unknown_subsections
            or self.invalid_values
            or self.ignored_lines
        )

    def issues(self) -> list[str]:
        messages = []
        if self.missing_title:
            messages.append("missing '# Journal Entry: YYYY-MM-DD' title line")
        messages.extend(f"unknown section: {title}" for title in self.unknown_sections)
        messages.extend(f"unknown subsection: {title}" for title in self.unknown_subsections)
        messages.extend(self.invalid_values)
        messages.extend(self.ignored_lines)
        return messages


class _ParseRun:
    """Per-call bookkeeping so the codec itself stays stateless."""

    def __init__(self, policy: ParsePolicy):
        self.policy = policy
        self.report = ParseReport()

    def flag(self, bucket: list[str], item: str, message: str) -> None:
        bucket.append(item)
        self.raise_or_log(message)

    def invalid(self, message: str) -> None:
        self.report.invalid_values.append(message)
        self.raise_or_log(message)

    def ignored(self, message: str) -> None:
        self.report.ignored_lines.append(message)
        self.raise_or_log(message)

    def raise_or_log(self, message: str) -> None:
        if self.policy is ParsePolicy.STRICT:
            raise JournalParseError(message)
        if self.policy is ParsePolicy.WARN:
            logger.warning(f"Journal markdown: {message}")


# ── Codec ───────────────────────────────────────────────────────────


class JournalEntryCodec:
    """Converts between ``JournalEntry`` objects and markdown text.

    Example::

        codec = JournalEntryCodec()
        text = codec.to_markdown(entry)
        same = codec.from_markdown(text, entry.date)
        assert same == entry
    """

    def __init__(self, config: CodecConfig | None = None):
        self.config = config or CodecConfig()

    @property
    def policy(self) -> ParsePolicy:
        return self.config.policy

    # -- serialize -----------------------------------------------------

    def to_markdown(self, entry: JournalEntry) -> str:
        """Render an entry as markdown. Deterministic; never fails."""
        parts = [f"{TITLE_PREFIX}{entry.date.strftime(DATE_FORMAT)}\n\n"]
        for layout in SECTIONS:
            section = getattr(entry, layout.attr)
            parts.append(f"{SECTION_MARKER}{layout.title}\n\n")
            for sub in layout.subsections:
                value = getattr(section, sub.attr)
                parts.append(f"{SUBSECTION_MARKER}{sub.title}\n")
                if sub.kind is FieldKind.RECORDS:
                    parts.extend(_record_to_markdown(record, sub.records) for record in value)
                    parts.append("\n")
                elif sub.kind is FieldKind.ENERGY:
                    parts.append(f"{value}{ENERGY_SUFFIX}\n\n")
                else:
                    parts.append(f"{value}\n\n")
        return "".join(parts)

    # -- parse ---------------------------------------------------------

    def from_markdown(self, markdown: str, date: Date) -> JournalEntry:
        """Parse markdown into an entry for ``date``.

        The date comes from the caller (usually the file path), not from the
        document title.

        Raises:
            JournalParseError: Only under ``ParsePolicy.STRICT``.
        """
        entry, _ = self.parse_with_report(markdown, date)
        return entry

    def parse_with_report(self, markdown: str, date: Date) -> tuple[JournalEntry, ParseReport]:
        """Parse markdown and also return what was skipped or defaulted.

        Raises:
            JournalParseError: Under ``ParsePolicy.STRICT``, on the first issue.
        """
        run = _ParseRun(self.policy)
        lines = markdown.splitlines()
        entry = JournalEntry.empty(date)

        preamble, sections = _split_blocks(lines, SECTION_MARKER)
        self._check_title(preamble, date, run)

        seen: dict[str, list[str]] = {}
        for title, body in sections:
            layout = _SECTIONS_BY_TITLE.get(title)
            if layout is None:
                run.flag(run.report.unknown_sections, title, f"unknown section '{title}'")
                continue
            if _has_text(seen.get(title)):
                run.ignored(f"section '{title}' appears again, its earlier text was not kept")
            seen[title] = body
            setattr(entry, layout.attr, self._parse_section(layout, body, run))

        return entry, run.report

    def _check_title(self, preamble: list[str], date: Date, run: _ParseRun) -> None:
        lines = [line.strip() for line in preamble if line.strip()]
        if not lines or not lines[0].startswith(TITLE_PREFIX):
            run.report.missing_title = True
            run.raise_or_log("missing '# Journal Entry: YYYY-MM-DD' title line")
            _ignore_text(lines, "before the first section", run)
            return
        _ignore_text(lines[1:], "before the first section", run)

        raw_date = lines[0][len(TITLE_PREFIX) :].strip()
        try:
            run.report.title_date = datetime.strptime(raw_date, DATE_FORMAT).date()
        except ValueError:
            run.invalid(f"unreadable title date '{raw_date}'")
            return
        if run.report.title_date != date:
            message = f"title date {raw_date} does not match entry date {date.strftime(DATE_FORMAT)}"
            run.invalid(message)

    def _parse_section(self, layout: SectionLayout, lines: list[str], run: _ParseRun):
        section = layout.section_type()
        preamble, subsections = _split_blocks(lines, SUBSECTION_MARKER)
        _ignore_text(preamble, f"under '{layout.title}' before its first subsection", run)

        seen: dict[str, list[str]] = {}
        for title, body in subsections:
            name = f"{layout.title} / {title}"
            sub = layout.subsection(title)
            if sub is None:
                run.flag(run.report.unknown_subsections, name, f"unknown subsection '{name}'")
                continue
            if _has_text(seen.get(title)):
                run.ignored(f"subsection '{name}' appears again, its earlier text was not kept")
            seen[title] = body

            if sub.kind is FieldKind.RECORDS:
                value = _parse_records(body, sub.records, run, name)
            elif sub.kind is FieldKind.ENERGY:
                value = _parse_energy_level("\n".join(body), run)
            else:
                value = "\n".join(body).strip()
            setattr(section, sub.attr, value)

        return section


# ── Helpers ─────────────────────────────────────────────────────────


def _split_blocks(lines: list[str], marker: str) -> tuple[list[str], list[tuple[str, list[str]]]]:
    """Split lines into blocks headed by ``marker``.

    Returns the lines before the first heading and ``(title, body_lines)``
    pairs in document order. A heading with no lines after it before the next
    heading (or the end) yields no block.
    """
    preamble: list[str] = []
    blocks: list[tuple[str, list[str]]] = []
    title: str | None = None
    body: list[str] = []

    for line in lines:
        if line.startswith(marker):
            if title is not None and body:
                blocks.append((title, body))
            title = line[len(marker) :].strip()
            body = []
        elif title is None:
            preamble.append(line)
        else:
            body.append(line)

    if title is not None and body:
        blocks.append((title, body))
    return preamble, blocks


def _has_text(lines: list[str] | None) -> bool:
    return bool(lines) and any(line.strip() for line in lines)


def _ignore_text(lines: list[str], where: str, run: _ParseRun) -> None:
    for line in lines:
        if line.strip():
            run.ignored(f"text {where} was not kept: '{line.strip()}'")


def _parse_energy_level(text: str, run: _ParseRun) -> int:
    raw = text.strip()
    number = raw[: -len(ENERGY_SUFFIX)] if raw.endswith(ENERGY_SUFFIX) else raw
    number = number.strip()
    try:
        # int() would also take "1_0" and non-ASCII digits
        if not number.isascii() or "_" in number:
            raise ValueError(number)
        level = int(number)
    except ValueError:
        run.invalid(f"energy level '{raw}' is not a number, using {DEFAULT_ENERGY_LEVEL}")
        return DEFAULT_ENERGY_LEVEL

    if level not in ENERGY_RANGE:
        run.invalid(f"energy level {level} is outside 1-10")
    return level


def _record_header(record, layout: RecordLayout) -> str:
    tokens = [getattr(record, name) for name in layout.header_fields]
    # Drop empty trailing tokens so the header never ends in a bare separator
    while len(tokens) > 1 and not tokens[-1]:
        tokens.pop()
    return HEADER_SEPARATOR.join(tokens)


def _record_to_markdown(record, layout: RecordLayout) -> str:
    lines = [f"{RECORD_MARKER}{_record_header(record, layout)}\n"]
    for key, attr in layout.keyed_fields:
        lines.append(f"{RECORD_INDENT}{key}: {getattr(record, attr)}\n")
    lines.append("\n")
    return "".join(lines)


def _is_record_header(line: str) -> bool:
    return line.startswith(RECORD_MARKER) or line == RECORD_MARKER.rstrip()


def _new_record(header: str, layout: RecordLayout):
    record = layout.record_type()
    if len(layout.header_fields) == 1:
        setattr(record, layout.header_fields[0], header.strip())
        return record

    tokens = header.split(HEADER_SEPARATOR, len(layout.header_fields) - 1)
    for name, token in zip(layout.header_fields, tokens):
        setattr(record, name, token.strip())
    return record


def _set_record_field(record, attr: str, value: str, run: _ParseRun, where: str) -> None:
    previous = getattr(record, attr)
    if previous and previous != value:
        run.ignored(f"{attr} '{previous}' under '{where}' was replaced by a later line")
    setattr(record, attr, value)


def _apply_record_line(record, line: str, layout: RecordLayout, run: _ParseRun, where: str) -> None:
    if not line:
        return
    for key, attr in layout.keyed_fields:
        prefix = f"{key}: "
        if line.startswith(prefix):
            _set_record_field(record, attr, line[len(prefix) :], run, where)
            return
    if any(line == f"{key}:" for key, _ in layout.keyed_fields):
        return
    if layout.bare_field:
        _set_record_field(record, layout.bare_field, line, run, where)
        return
    run.ignored(f"text under '{where}' was not kept: '{line}'")


def _parse_records(lines: list[str], layout: RecordLayout, run: _ParseRun, where: str) -> list:
    """Scan a subsection body for ``#### `` records.

    A record is appended when the next header starts or the body ends, so a
    trailing record is always kept. Lines before the first header and lines
    with no recognised ``Key: `` prefix are not kept and go to
    ``ParseReport.ignored_lines``.
    """
    records = []
    current = None

    for line in lines:
        lead = line.lstrip()
        if _is_record_header(lead):
            if current is not None:
                records.append(current)
            current = _new_record(lead[len(RECORD_MARKER) :].rstrip(), layout)
        elif current is not None:
            _apply_record_line(current, line.strip(), layout, run, where)
        elif lead.strip():
            run.ignored(f"text under '{where}' before its first record was not kept: '{lead.strip()}'")

    if current is not None:
        records.append(current)
    return records


# ── Module-level shortcuts ──────────────────────────────────────────

_default_codec = JournalEntryCodec()


def to_markdown(entry: JournalEntry) -> str:
    """Serialize with the default (lenient) codec."""
    return _default_codec.to_markdown(entry)


def from_markdown(markdown: str, date: Date) -> JournalEntry:
    """Parse with the default (lenient) codec."""
    return _default_codec.from_markdown(markdown, date)
