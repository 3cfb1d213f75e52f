"""
Daily notes: Markdown files with YAML frontmatter under memory/daily/.
"""

from dashdeck.core.notes.models import BlockType, DailyNote, NoteItem, TimeBlock
from dashdeck.core.notes.parser import DailyNotesReader, parse_note

__all__ = [
    "BlockType",
    "DailyNote",
    "DailyNotesReader",
    "NoteItem",
    "TimeBlock",
    "parse_note",
]
