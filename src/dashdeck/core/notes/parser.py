"""
Daily note parser.

Reads ``memory/daily/*.md`` and extracts:
- Checklist items (``- [ ] text`` / ``- [x] text``) with inline tags
  ``#urgent|#high|#medium|#low``, ``#project/<id>`` and ``#due/YYYY-MM-DD``
- Time blocks (``09:00-10:30 Focus on report``) with a type inferred from
  the title
- Every ``#tag`` in the body

Uses python-frontmatter for the YAML header. Invalid YAML falls back to an
empty header so the body is still usable.
"""

import logging
import re
from datetime import date, datetime, time, timezone
from pathlib import Path

import frontmatter  # type: ignore[import-untyped]
import yaml

from dashdeck.core.notes.models import BlockType, DailyNote, NoteItem, TimeBlock
from dashdeck.core.workspace.layout import WorkspaceLayout
from dashdeck.core.workspace.loader import list_files
from dashdeck.core.workspace.models import Priority

logger = logging.getLogger(__name__)

CHECKLIST_RE = re.compile(r"^\s*[-*] \[([ xX])\] (.+)$")
TIME_BLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})\s*-\s*(\d{1,2}):(\d{2})\s+(.+)")
TAG_RE = re.compile(r"(?<![\w&])#([\w][\w/-]*)")
PRIORITY_TAG_RE = re.compile(r"#(urgent|high|medium|low)\b")
PROJECT_TAG_RE = re.compile(r"#project/([\w-]+)")
DUE_TAG_RE = re.compile(r"#due/(\d{4}-\d{2}-\d{2})")

# Checked in order; first keyword hit wins.
BLOCK_KEYWORDS: list[tuple[BlockType, tuple[str, ...]]] = [
    (BlockType.MEETING, ("meeting", "call", "sync")),
    (BlockType.DEEP_WORK, ("focus", "deep", "work")),
    (BlockType.BREAK, ("break", "lunch")),
    (BlockType.ADMIN, ("admin", "email")),
]


def extract_tags(text: str) -> list[str]:
    """All ``#tags`` in order of first appearance, without duplicates."""
    return list(dict.fromkeys(TAG_RE.findall(text)))


def infer_block_type(title: str) -> BlockType:
    lower = title.lower()
    for block_type, keywords in BLOCK_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return block_type
    return BlockType.PERSONAL


def _parse_due(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def extract_items(content: str) -> list[NoteItem]:
    """Parse checklist lines into NoteItems."""
    items: list[NoteItem] = []
    for index, line in enumerate(content.splitlines()):
        match = CHECKLIST_RE.match(line)
        if not match:
            continue

        raw = match.group(2).strip()
        priority_match = PRIORITY_TAG_RE.search(raw)
        project_match = PROJECT_TAG_RE.search(raw)
        due_match = DUE_TAG_RE.search(raw)

        items.append(
            NoteItem(
                text=" ".join(TAG_RE.sub("", raw).split()),
                done=match.group(1).lower() == "x",
                line=index,
                priority=Priority(priority_match.group(1)) if priority_match else Priority.MEDIUM,
                project_id=project_match.group(1) if project_match else None,
                due_date=_parse_due(due_match.group(1)) if due_match else None,
                tags=extract_tags(raw),
            )
        )
    return items


def extract_blocks(content: str) -> list[TimeBlock]:
    """Parse ``HH:MM-HH:MM title`` entries into TimeBlocks."""
    blocks: list[TimeBlock] = []
    for line in content.splitlines():
        match = TIME_BLOCK_RE.search(line)
        if not match:
            continue

        start_h, start_m, end_h, end_m = (int(g) for g in match.groups()[:4])
        try:
            start = time(start_h, start_m)
            end = time(end_h, end_m)
        except ValueError:
            logger.debug("Skipping invalid time block: %s", line.strip())
            continue

        title = match.group(5).strip()
        blocks.append(
            TimeBlock(title=title, start=start, end=end, type=infer_block_type(title))
        )
    return blocks


def _note_date(path: Path, metadata: dict) -> date | None:
    try:
        return date.fromisoformat(path.stem)
    except ValueError:
        pass

    value = metadata.get("date")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return _parse_due(value)
    return None


def parse_note(path: Path) -> DailyNote | None:
    """
    Parse a single daily note.

    Returns:
        DailyNote, or None if the file is missing, unreadable, or has no
        date in its name or frontmatter
    """
    if not path.is_file():
        return None

    try:
        raw = path.read_text(encoding="utf-8")
        modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read note %s: %s", path, e)
        return None

    try:
        post = frontmatter.loads(raw)
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML frontmatter in %s: %s. Using defaults.", path, e)
        post = frontmatter.Post(content=raw)

    metadata = dict(post.metadata)
    note_date = _note_date(path, metadata)
    if note_date is None:
        logger.warning("Skipping note without a date: %s", path)
        return None

    content = post.content
    return DailyNote(
        note_date=note_date,
        path=str(path),
        frontmatter=metadata,
        content=content,
        items=extract_items(content),
        blocks=extract_blocks(content),
        tags=extract_tags(content),
        modified_at=modified,
    )


class DailyNotesReader:
    """
    Reads daily notes from a workspace.

    Example:
        >>> reader = DailyNotesReader(layout)
        >>> note = reader.get_note(date(2024, 5, 1))
        >>> [item.text for item in note.items if not item.done]
        ['Draft launch post']
    """

    def __init__(self, layout: WorkspaceLayout) -> None:
        self.layout = layout

    def list_notes(self) -> list[DailyNote]:
        """All daily notes, newest date first."""
        notes: list[DailyNote] = []
        for name in list_files(self.layout.daily_dir, ".md"):
            note = parse_note(self.layout.daily_dir / name)
            if note is not None:
                notes.append(note)

        notes.sort(key=lambda n: n.note_date, reverse=True)
        return notes

    def get_note(self, day: date) -> DailyNote | None:
        """The note for a given day, or None if there is none."""
        return parse_note(self.layout.daily_dir / f"{day.isoformat()}.md")
