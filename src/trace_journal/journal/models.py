"""Core data models for journal entries.

One ``JournalEntry`` per calendar date, made of six fixed sections. Sections
hold free-text fields and, for some of them, ordered lists of flat
sub-records (media items, interactions, work items, meetings).

The models carry no markdown knowledge; see ``trace_journal.journal.codec``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date as Date
from typing import Any

DEFAULT_ENERGY_LEVEL = 5


# ── Sub-records ─────────────────────────────────────────────────────


@dataclass
class MediaItem:
    """A book, film, podcast or other piece of media."""

    title: str = ""
    creator: str = ""
    status: str = ""
    notes: str = ""


@dataclass
class Interaction:
    """A meaningful interaction with a person."""

    person: str = ""
    notes: str = ""


@dataclass
class WorkItem:
    title: str = ""
    status: str = ""
    priority: str = ""
    description: str = ""


@dataclass
class Meeting:
    title: str = ""
    attendees: str = ""
    notes: str = ""
    action_items: str = ""


# ── Sections ────────────────────────────────────────────────────────


@dataclass
class DailyCheckIn:
    mood: str = ""
    highlight: str = ""
    overview: str = ""


@dataclass
class PersonalGrowth:
    reflections: str = ""
    achievements: str = ""
    challenges: str = ""
    goals: str = ""


@dataclass
class Wellbeing:
    """Physical and mental state for the day.

    Attributes:
        energy_level: Self-rated energy, 1-10.
        physical_activity: Exercise, movement, sleep notes.
        mental_health: Free-form notes.
    """

    energy_level: int = DEFAULT_ENERGY_LEVEL
    physical_activity: str = ""
    mental_health: str = ""


@dataclass
class CreativityLearning:
    ideas: str = ""
    learning_log: str = ""
    books_media: list[MediaItem] = field(default_factory=list)
    projects: str = ""


@dataclass
class Social:
    meaningful_interactions: list[Interaction] = field(default_factory=list)
    relationship_updates: str = ""
    social_events: str = ""


@dataclass
class WorkCareer:
    work_items: list[WorkItem] = field(default_factory=list)
    meetings: list[Meeting] = field(default_factory=list)
    challenges: str = ""
    wins: str = ""
    work_ideas: str = ""


# ── Entry ───────────────────────────────────────────────────────────


@dataclass
class JournalEntry:
    """The full structured journal record for one calendar date.

    The date is the identity key: a store holds at most one entry per date.
    Equality compares the date and every section field, which is what callers
    use to decide whether a save is needed.
    """

    date: Date
    daily_check_in: DailyCheckIn = field(default_factory=DailyCheckIn)
    personal_growth: PersonalGrowth = field(default_factory=PersonalGrowth)
    wellbeing: Wellbeing = field(default_factory=Wellbeing)
    creativity_learning: CreativityLearning = field(default_factory=CreativityLearning)
    social: Social = field(default_factory=Social)
    work_career: WorkCareer = field(default_factory=WorkCareer)

    @classmethod
    def empty(cls, date: Date) -> JournalEntry:
        """Return an entry with every section at its defaults."""
        return cls(date=date)

    @property
    def title(self) -> str:
        """Long human-readable date, e.g. ``Friday, March 1, 2024``."""
        return f"{self.date:%A}, {self.date:%B} {self.date.day}, {self.date.year}"

    def is_empty(self) -> bool:
        return self == JournalEntry.empty(self.date)

    def remove_media_item(self, index: int) -> None:
        _remove_at(self.creativity_learning.books_media, index)

    def remove_interaction(self, index: int) -> None:
        _remove_at(self.social.meaningful_interactions, index)

    def remove_work_item(self, index: int) -> None:
        _remove_at(self.work_career.work_items, index)

    def remove_meeting(self, index: int) -> None:
        _remove_at(self.work_career.meetings, index)


def _remove_at(items: list, index: int) -> None:
    # Out-of-range (including negative) indices are ignored
    if 0 <= index < len(items):
        del items[index]


def diff_entries(old: JournalEntry, new: JournalEntry) -> list[str]:
    """Return dotted paths of every field that differs between two entries.

    List fields of different length are reported once by their own path;
    lists of equal length are compared item by item, e.g.
    ``work_career.meetings[1].notes``.

    Returns:
        Paths in field declaration order. Empty when the entries are equal.
    """
    changes: list[str] = []
    _diff_values(old, new, "", changes)
    return changes


def _diff_values(old: Any, new: Any, path: str, changes: list[str]) -> None:
    if is_dataclass(old) and type(old) is type(new):
        for f in fields(old):
            child = f"{path}.{f.name}" if path else f.name
            _diff_values(getattr(old, f.name), getattr(new, f.name), child, changes)
    elif isinstance(old, list) and isinstance(new, list):
        if len(old) != len(new):
            changes.append(path)
            return
        for i, (a, b) in enumerate(zip(old, new)):
            _diff_values(a, b, f"{path}[{i}]", changes)
    elif old != new:
        changes.append(path)
