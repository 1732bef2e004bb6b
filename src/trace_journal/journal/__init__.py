"""Journal entries and their markdown representation.

Provides the entry data model, the markdown codec, a JournalStore protocol
with a folder-tree implementation, and an editing session with an explicit
save boundary.
"""

from .codec import SECTION_TITLES, JournalEntryCodec, ParseReport, from_markdown, to_markdown
from .config import CodecConfig, ParsePolicy, StoreConfig
from .file_store import FileJournalStore
from .models import (
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
    diff_entries,
)
from .session import JournalSession
from .store import JournalStore

__all__ = [
    "SECTION_TITLES",
    "CodecConfig",
    "CreativityLearning",
    "DailyCheckIn",
    "FileJournalStore",
    "Interaction",
    "JournalEntry",
    "JournalEntryCodec",
    "JournalSession",
    "JournalStore",
    "MediaItem",
    "Meeting",
    "ParsePolicy",
    "ParseReport",
    "PersonalGrowth",
    "Social",
    "StoreConfig",
    "Wellbeing",
    "WorkCareer",
    "WorkItem",
    "diff_entries",
    "from_markdown",
    "to_markdown",
]
