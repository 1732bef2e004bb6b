"""Editing session for a single day's entry.

Separates "the user is editing" from "the document is serialized": the entry
can be mutated freely and nothing touches disk until ``save()`` is called.
Dirtiness is judged on the serialized form, so edits that round-trip to the
same markdown do not trigger a write.
"""

from __future__ import annotations

import copy
from datetime import date

from loguru import logger

from .models import JournalEntry, diff_entries
from .store import JournalStore


class JournalSession:
    """Holds the working copy of one entry plus its last saved text.

    Example::

        session = JournalSession(store, date.today())
        await session.open()
        session.entry.daily_check_in.mood = "calm"
        if session.is_dirty:
            await session.save()
    """

    def __init__(self, store: JournalStore, day: date):
        self.store = store
        self.date = day
        self.entry = JournalEntry.empty(day)
        self.saved_markdown = ""
        self._saved_entry: JournalEntry | None = None

    @property
    def codec(self):
        return self.store.codec

    @property
    def exists_on_disk(self) -> bool:
        return self._saved_entry is not None

    async def open(self) -> JournalEntry:
        """Load the stored entry, or start an empty unsaved one if none exists."""
        if self.store.entry_exists(self.date):
            self.entry = await self.store.load_entry(self.date)
            self._mark_saved()
            logger.debug(f"Opened existing entry {self.date.isoformat()}")
        else:
            self.entry = JournalEntry.empty(self.date)
            self.saved_markdown = ""
            self._saved_entry = None
            logger.debug(f"Started new entry {self.date.isoformat()}")
        return self.entry

    async def create(self) -> JournalEntry:
        """Write an empty entry for the session date right away."""
        self.entry = JournalEntry.empty(self.date)
        await self.store.save_entry(self.entry)
        self._mark_saved()
        return self.entry

    @property
    def markdown(self) -> str:
        """The working copy rendered as markdown."""
        return self.codec.to_markdown(self.entry)

    @property
    def is_dirty(self) -> bool:
        # A new entry nobody has typed into yet is not worth a file
        if not self.exists_on_disk:
            return not self.entry.is_empty()
        return self.markdown != self.saved_markdown

    def changes(self) -> list[str]:
        """Field paths edited since the last save (everything non-default for a new entry)."""
        baseline = self._saved_entry or JournalEntry.empty(self.date)
        return diff_entries(baseline, self.entry)

    def apply_markdown(self, markdown: str) -> JournalEntry:
        """Replace the working copy with a parse of ``markdown``.

        Used for raw-text edits and externally generated entries.

        Raises:
            JournalParseError: If the store's codec runs with a strict policy.
        """
        self.entry = self.codec.from_markdown(markdown, self.date)
        return self.entry

    async def save(self) -> bool:
        """Persist the working copy if it changed. Returns whether a write happened."""
        if not self.is_dirty:
            return False
        await self.store.save_entry(self.entry)
        self._mark_saved()
        return True

    def discard(self) -> None:
        """Throw away unsaved edits."""
        if self._saved_entry is None:
            self.entry = JournalEntry.empty(self.date)
        else:
            self.entry = copy.deepcopy(self._saved_entry)

    def _mark_saved(self) -> None:
        self._saved_entry = copy.deepcopy(self.entry)
        self.saved_markdown = self.codec.to_markdown(self.entry)
