"""JournalStore protocol: the contract for journal persistence backends.

Any system that keeps one markdown entry per date (a folder tree of
``YYYY/MM/DD.md`` files, a sync service, an in-memory fake for tests) can
implement this protocol and plug into ``JournalSession`` and the CLI.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Protocol, runtime_checkable

from .codec import JournalEntryCodec
from .models import JournalEntry


@runtime_checkable
class JournalStore(Protocol):
    """Protocol for loading and saving journal entries keyed by date.

    Implementations own the date -> text mapping and call the codec
    themselves; callers only ever see ``JournalEntry`` objects.
    """

    codec: JournalEntryCodec

    def entry_path(self, day: date) -> Path:
        """Return where the entry for ``day`` lives (whether or not it exists).

        Raises:
            FolderNotSelectedError: No journal root is configured.
        """
        ...

    def entry_exists(self, day: date) -> bool:
        """Whether an entry is stored for ``day``. False when no root is configured."""
        ...

    async def load_entry(self, day: date) -> JournalEntry:
        """Load and parse the entry for ``day``.

        Raises:
            FolderNotSelectedError: No journal root is configured.
            EntryNotFoundError: Nothing is stored for ``day``.
            AccessDeniedError: The file cannot be read.
            LoadFailedError: The content could not be turned into an entry.
        """
        ...

    async def load_markdown(self, day: date) -> str:
        """Return the raw stored text for ``day`` (same errors as ``load_entry``)."""
        ...

    async def save_entry(self, entry: JournalEntry) -> Path:
        """Serialize and write ``entry`` under its date, returning the path.

        Raises:
            FolderNotSelectedError: No journal root is configured.
            AccessDeniedError: The file cannot be written.
            SaveFailedError: Any other write failure.
        """
        ...

    async def delete_entry(self, day: date) -> bool:
        """Delete the entry for ``day``. Returns False if there was none."""
        ...

    async def list_entry_dates(self) -> list[date]:
        """Return the dates of all stored entries, sorted chronologically."""
        ...
