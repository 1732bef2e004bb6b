"""Tests for trace_journal.journal.file_store."""

import errno
import os
from contextlib import asynccontextmanager
from datetime import date

import aiofiles
import pytest

from trace_journal.core.config import Config
from trace_journal.core.exceptions import (
    EntryNotFoundError,
    FolderNotSelectedError,
    JournalStoreError,
    LoadFailedError,
    SaveFailedError,
)
from trace_journal.journal.codec import JournalEntryCodec
from trace_journal.journal.config import CodecConfig, ParsePolicy
from trace_journal.journal.file_store import FileJournalStore
from trace_journal.journal.models import JournalEntry
from trace_journal.journal.store import JournalStore

DAY = date(2024, 3, 1)


@pytest.fixture
def store(tmp_path):
    return FileJournalStore(tmp_path / "journal")


class TestPaths:
    def test_layout(self, store, tmp_path):
        assert store.entry_path(date(2024, 3, 1)) == (tmp_path / "journal" / "2024" / "03" / "01.md").resolve()

    def test_custom_extension(self, tmp_path):
        from trace_journal.journal.config import StoreConfig

        store = FileJournalStore(tmp_path, config=StoreConfig(extension=".markdown"))
        assert store.entry_path(DAY).name == "01.markdown"

    def test_satisfies_protocol(self, store):
        assert isinstance(store, JournalStore)

    def test_from_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TRACE_JOURNAL_JOURNAL__ROOT", str(tmp_path / "j"))
        monkeypatch.setenv("TRACE_JOURNAL_CODEC__POLICY", "strict")
        store = FileJournalStore.from_config(Config())
        assert store.root == (tmp_path / "j").resolve()
        assert store.codec.policy is ParsePolicy.STRICT


class TestSaveLoad:
    @pytest.mark.asyncio
    async def test_save_and_load(self, store, sample_entry):
        path = await store.save_entry(sample_entry)
        assert path.is_file()
        assert store.entry_exists(sample_entry.date)

        loaded = await store.load_entry(sample_entry.date)
        assert loaded == sample_entry

    @pytest.mark.asyncio
    async def test_saved_file_is_markdown(self, store, sample_entry):
        path = await store.save_entry(sample_entry)
        text = path.read_text(encoding="utf-8")
        assert text == JournalEntryCodec().to_markdown(sample_entry)

    @pytest.mark.asyncio
    async def test_save_overwrites(self, store, sample_entry):
        await store.save_entry(sample_entry)
        sample_entry.wellbeing.energy_level = 2
        await store.save_entry(sample_entry)
        assert (await store.load_entry(DAY)).wellbeing.energy_level == 2

    @pytest.mark.asyncio
    async def test_load_missing_raises(self, store):
        assert not store.entry_exists(DAY)
        with pytest.raises(EntryNotFoundError, match="2024-03-01"):
            await store.load_entry(DAY)

    @pytest.mark.asyncio
    async def test_load_markdown(self, store):
        path = store.entry_path(DAY)
        path.parent.mkdir(parents=True)
        path.write_text("hand written", encoding="utf-8")
        assert await store.load_markdown(DAY) == "hand written"

    @pytest.mark.asyncio
    async def test_load_hand_written_file(self, store):
        path = store.entry_path(DAY)
        path.parent.mkdir(parents=True)
        path.write_text("## Wellbeing\n\n### Energy Level\n9/10\n", encoding="utf-8")
        entry = await store.load_entry(DAY)
        assert entry.wellbeing.energy_level == 9
        assert entry.date == DAY

    @pytest.mark.asyncio
    async def test_strict_parse_failure_becomes_load_failed(self, tmp_path):
        codec = JournalEntryCodec(CodecConfig(policy=ParsePolicy.STRICT))
        store = FileJournalStore(tmp_path, codec=codec)
        path = store.entry_path(DAY)
        path.parent.mkdir(parents=True)
        path.write_text("no title here\n", encoding="utf-8")
        with pytest.raises(LoadFailedError):
            await store.load_entry(DAY)

    @pytest.mark.asyncio
    async def test_undecodable_file(self, store):
        path = store.entry_path(DAY)
        path.parent.mkdir(parents=True)
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(LoadFailedError):
            await store.load_entry(DAY)

    @pytest.mark.asyncio
    async def test_entry_path_is_a_directory(self, store):
        store.entry_path(DAY).mkdir(parents=True)
        with pytest.raises(LoadFailedError):
            await store.load_entry(DAY)

    @pytest.mark.asyncio
    async def test_failed_write_keeps_previous_entry(self, store, sample_entry, monkeypatch):
        sample_entry.daily_check_in.mood = "precious old text"
        path = await store.save_entry(sample_entry)
        before = path.read_text(encoding="utf-8")
        real_open = aiofiles.open

        class _DiskFull:
            def __init__(self, f):
                self._f = f

            async def write(self, text):
                await self._f.write(text[:10])
                raise OSError(errno.ENOSPC, "No space left on device")

        @asynccontextmanager
        async def failing_open(file, mode="r", **kwargs):
            async with real_open(file, mode, **kwargs) as f:
                yield _DiskFull(f) if "w" in mode else f

        monkeypatch.setattr(aiofiles, "open", failing_open)
        sample_entry.daily_check_in.mood = "new text"
        with pytest.raises(SaveFailedError):
            await store.save_entry(sample_entry)

        assert path.read_text(encoding="utf-8") == before
        assert list(path.parent.iterdir()) == [path]

    @pytest.mark.asyncio
    async def test_save_leaves_no_temp_file(self, store, sample_entry):
        path = await store.save_entry(sample_entry)
        assert [p.name for p in path.parent.iterdir()] == ["01.md"]

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.save_entry(JournalEntry.empty(DAY))
        assert await store.delete_entry(DAY)
        assert not store.entry_exists(DAY)
        assert not await store.delete_entry(DAY)


class TestListing:
    @pytest.mark.asyncio
    async def test_lists_sorted_dates(self, store):
        for day in [date(2024, 3, 2), date(2023, 12, 31), date(2024, 3, 1)]:
            await store.save_entry(JournalEntry.empty(day))
        assert await store.list_entry_dates() == [date(2023, 12, 31), date(2024, 3, 1), date(2024, 3, 2)]

    @pytest.mark.asyncio
    async def test_skips_non_entries(self, store):
        await store.save_entry(JournalEntry.empty(DAY))
        root = store.root
        os.makedirs(root / "notes")
        os.makedirs(root / "2024" / "13")
        (root / "2024" / "13" / "01.md").write_text("x")
        (root / "2024" / "03" / "todo.md").write_text("x")
        (root / "2024" / "03" / "31.txt").write_text("x")
        (root / "2024" / "02").mkdir()
        (root / "2024" / "02" / "30.md").write_text("x")
        (root / "README.md").write_text("x")
        assert await store.list_entry_dates() == [DAY]

    @pytest.mark.asyncio
    async def test_missing_root_lists_nothing(self, store):
        assert await store.list_entry_dates() == []


class TestNoFolderSelected:
    @pytest.fixture
    def store(self):
        return FileJournalStore(None)

    def test_entry_exists_is_false(self, store):
        assert store.entry_exists(DAY) is False

    def test_entry_path_raises(self, store):
        with pytest.raises(FolderNotSelectedError):
            store.entry_path(DAY)

    @pytest.mark.asyncio
    async def test_load_raises(self, store):
        with pytest.raises(FolderNotSelectedError):
            await store.load_entry(DAY)

    @pytest.mark.asyncio
    async def test_save_raises(self, store):
        with pytest.raises(JournalStoreError):
            await store.save_entry(JournalEntry.empty(DAY))

    @pytest.mark.asyncio
    async def test_list_raises(self, store):
        with pytest.raises(FolderNotSelectedError):
            await store.list_entry_dates()

    def test_from_config_without_root(self, tmp_path):
        store = FileJournalStore.from_config(Config(env_prefix=""))
        assert store.root is None
