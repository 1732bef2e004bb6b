"""trace_journal: markdown-backed daily journal entries."""

__version__ = "0.1.0"
