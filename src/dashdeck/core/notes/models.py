"""
Daily note models.

Daily notes are Markdown files with optional YAML frontmatter, one per
day, named ``YYYY-MM-DD.md``. They are read-only: dashdeck extracts
checklist items, time blocks and tags for display and never rewrites
them.
"""

from datetime import date, datetime, time
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dashdeck.core.workspace.models import Priority


class BlockType(str, Enum):
    """Kind of time block, inferred from its title."""

    DEEP_WORK = "deep_work"
    MEETING = "meeting"
    ADMIN = "admin"
    BREAK = "break"
    PERSONAL = "personal"


class NoteItem(BaseModel):
    """
    A checklist line in a daily note.

    Example:
        ``- [ ] Draft launch post #high #project/website #due/2024-05-01``
        becomes text "Draft launch post", priority high, project "website".
    """

    text: str
    done: bool = False
    line: int = Field(..., ge=0, description="Zero-based line in the note body")
    priority: Priority = Priority.MEDIUM
    project_id: str | None = Field(default=None, alias="projectId")
    due_date: date | None = Field(default=None, alias="dueDate")
    tags: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class TimeBlock(BaseModel):
    """A ``HH:MM-HH:MM title`` entry in a daily note."""

    title: str
    start: time
    end: time
    type: BlockType = BlockType.PERSONAL

    @property
    def minutes(self) -> int:
        start = self.start.hour * 60 + self.start.minute
        end = self.end.hour * 60 + self.end.minute
        return max(end - start, 0)


class DailyNote(BaseModel):
    """A parsed daily note."""

    note_date: date = Field(..., alias="date")
    path: str
    frontmatter: dict[str, Any] = Field(default_factory=dict)
    content: str = ""
    items: list[NoteItem] = Field(default_factory=list)
    blocks: list[TimeBlock] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    modified_at: datetime | None = Field(default=None, alias="modifiedAt")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def focus_minutes(self) -> int:
        """Minutes scheduled as deep work."""
        return sum(b.minutes for b in self.blocks if b.type == BlockType.DEEP_WORK)
