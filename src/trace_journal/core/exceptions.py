"""
trace_journal exception hierarchy.

All trace_journal exceptions inherit from TraceJournalError, making it easy for
consumers to catch library-level errors while still distinguishing specific
failure modes.
"""


class TraceJournalError(Exception):
    """Base exception class for all trace_journal errors."""


class ConfigurationError(TraceJournalError):
    """Raised for configuration errors (missing keys, invalid values)."""


class FileIOError(TraceJournalError):
    """Raised for file I/O errors."""


class JournalParseError(TraceJournalError):
    """Raised when markdown cannot be decoded into a journal entry."""


class JournalStoreError(TraceJournalError):
    """Base class for journal persistence errors."""


class FolderNotSelectedError(JournalStoreError):
    """Raised when no journal root folder has been configured."""


class EntryNotFoundError(JournalStoreError, KeyError):
    """Raised when no entry file exists for the requested date."""

    def __str__(self) -> str:
        # KeyError quotes its message; keep it readable
        return Exception.__str__(self)


class AccessDeniedError(JournalStoreError):
    """Raised when the journal folder or an entry file is not accessible."""


class SaveFailedError(JournalStoreError):
    """Raised when an entry cannot be written."""


class LoadFailedError(JournalStoreError):
    """Raised when an entry file exists but cannot be turned into an entry."""
