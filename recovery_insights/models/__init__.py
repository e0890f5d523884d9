from .journal_entry import JournalRecord

__all__ = [
    "JournalRecord",
]
