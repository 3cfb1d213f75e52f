"""
Daily notes API routes for the dashboard.

- GET /api/notes - All daily notes, newest first
- GET /api/notes/{day} - The note for one day (YYYY-MM-DD)
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from dashdeck.core.dashboard.api.deps import get_layout
from dashdeck.core.notes import DailyNote, DailyNotesReader
from dashdeck.core.workspace.layout import WorkspaceLayout

router = APIRouter()


@router.get("/notes", response_model=list[DailyNote])
def list_notes(layout: WorkspaceLayout = Depends(get_layout)) -> list[DailyNote]:
    """
    List parsed daily notes.

    Notes that cannot be read or carry no date are skipped.
    """
    return DailyNotesReader(layout).list_notes()


@router.get("/notes/{day}", response_model=DailyNote)
def get_note(day: date, layout: WorkspaceLayout = Depends(get_layout)) -> DailyNote:
    """
    Get the daily note for one day.

    Raises:
        HTTPException: 404 if there is no note for that day
    """
    note = DailyNotesReader(layout).get_note(day)
    if note is None:
        raise HTTPException(status_code=404, detail=f"Note not found: {day.isoformat()}")
    return note
