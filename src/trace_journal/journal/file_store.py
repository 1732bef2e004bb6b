"""
Filesystem journal store.

Keeps one markdown file per day under an explicit journal root::

    <root>/2024/03/01.md

File reads and writes go through aiofiles so the store can sit behind an
async UI or bot loop without blocking it.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import aiofiles
import aiofiles.os
from loguru import logger

from trace_journal.core.config import Config
from trace_journal.core.exceptions import (
    AccessDeniedError,
    EntryNotFoundError,
    FolderNotSelectedError,
    JournalParseError,
    LoadFailedError,
    SaveFailedError,
)

from .codec import JournalEntryCodec
from .config import CodecConfig, StoreConfig
from .models import JournalEntry


class FileJournalStore:
    """Date-keyed journal store backed by a ``YYYY/MM/DD.md`` folder tree.

    ``root=None`` models a journal whose folder has not been chosen yet:
    every path-based operation raises ``FolderNotSelectedError``.

    Example::

        store = FileJournalStore("~/Journal")
        entry = await store.load_entry(date(2024, 3, 1))
        entry.wellbeing.energy_level = 7
        await store.save_entry(entry)
    """

    def __init__(
        self,
        root: str | Path | None,
        codec: JournalEntryCodec | None = None,
        config: StoreConfig | None = None,
    ):
        self.root = Path(root).expanduser().resolve() if root else None
        self.codec = codec or JournalEntryCodec()
        self.config = config or StoreConfig()

    @classmethod
    def from_config(cls, config: Config) -> FileJournalStore:
        """Build a store from the ``journal.*`` and ``codec.*`` config keys."""
        codec = JournalEntryCodec(CodecConfig(policy=config.get("codec.policy", "lenient")))
        store_config = StoreConfig(extension=config.get("journal.extension", ".md") or ".md")
        return cls(config.get_journal_root(), codec=codec, config=store_config)

    def _require_root(self) -> Path:
        if self.root is None:
            raise FolderNotSelectedError("No journal folder selected. Set journal.root first.")
        return self.root

    def entry_path(self, day: date) -> Path:
        root = self._require_root()
        return root / f"{day.year:04d}" / f"{day.month:02d}" / f"{day.day:02d}{self.config.extension}"

    def entry_exists(self, day: date) -> bool:
        if self.root is None:
            return False
        return self.entry_path(day).is_file()

    async def load_markdown(self, day: date) -> str:
        path = self.entry_path(day)
        try:
            async with aiofiles.open(path, encoding=self.config.encoding) as f:
                return await f.read()
        except FileNotFoundError:
            raise EntryNotFoundError(f"No journal entry for {day.isoformat()} at {path}") from None
        except PermissionError as e:
            raise AccessDeniedError(f"Cannot read {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise LoadFailedError(f"{path} is not valid {self.config.encoding} text: {e}") from e
        except OSError as e:
            raise LoadFailedError(f"Cannot read {path}: {e}") from e

    async def load_entry(self, day: date) -> JournalEntry:
        markdown = await self.load_markdown(day)
        try:
            entry = self.codec.from_markdown(markdown, day)
        except JournalParseError as e:
            raise LoadFailedError(f"Could not load entry for {day.isoformat()}: {e}") from e
        logger.debug(f"Loaded journal entry {day.isoformat()}")
        return entry

    async def save_entry(self, entry: JournalEntry) -> Path:
        path = self.entry_path(entry.date)
        markdown = self.codec.to_markdown(entry)
        # Temp file beside the entry, renamed over it once fully written
        tmp_path = path.with_name(f".{path.name}.tmp")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding=self.config.encoding) as f:
                await f.write(markdown)
            await aiofiles.os.replace(tmp_path, path)
        except PermissionError as e:
            raise AccessDeniedError(f"Cannot write to {path}: {e}") from e
        except OSError as e:
            raise SaveFailedError(f"Failed to save entry for {entry.date.isoformat()}: {e}") from e
        finally:
            tmp_path.unlink(missing_ok=True)

        logger.info(f"Saved journal entry {entry.date.isoformat()} -> {path}")
        return path

    async def delete_entry(self, day: date) -> bool:
        path = self.entry_path(day)
        if not path.is_file():
            return False
        try:
            await aiofiles.os.remove(path)
        except PermissionError as e:
            raise AccessDeniedError(f"Cannot delete {path}: {e}") from e
        logger.info(f"Deleted journal entry {day.isoformat()}")
        return True

    async def list_entry_dates(self) -> list[date]:
        root = self._require_root()
        if not root.is_dir():
            return []

        dates: list[date] = []
        try:
            for year_dir in root.iterdir():
                if not (year_dir.is_dir() and _is_year_name(year_dir.name)):
                    continue
                for month_dir in year_dir.iterdir():
                    if not (month_dir.is_dir() and _is_month_name(month_dir.name)):
                        continue
                    for day_file in month_dir.iterdir():
                        day = self._date_from_file(day_file)
                        if day is not None:
                            dates.append(day)
        except PermissionError as e:
            raise AccessDeniedError(f"Cannot read journal folder {root}: {e}") from e

        return sorted(dates)

    def _date_from_file(self, path: Path) -> date | None:
        if not path.is_file() or path.suffix != self.config.extension:
            return None
        stem = path.stem
        if not (len(stem) == 2 and stem.isascii() and stem.isdigit()):
            return None
        try:
            return date(int(path.parent.parent.name), int(path.parent.name), int(stem))
        except ValueError:
            logger.debug(f"Skipping {path}: not a calendar date")
            return None


def _is_year_name(name: str) -> bool:
    return len(name) == 4 and name.isascii() and name.isdigit()


def _is_month_name(name: str) -> bool:
    return len(name) == 2 and name.isascii() and name.isdigit() and 1 <= int(name) <= 12
