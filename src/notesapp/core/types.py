"""Shared types and data structures for the notes client."""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Any, Protocol

from pydantic import BaseModel, field_validator

NoteId = int | str
"""Server-assigned note identifier. Opaque to the client."""


class _NoteFields(BaseModel, frozen=True):
    """Fields shared by full notes and list summaries."""

    title: str = ""
    content: str = ""

    @field_validator("title", "content", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Note(_NoteFields, frozen=True):
    """A persisted note, or an unsaved draft when id is None."""

    id: NoteId | None = None


class NoteSummary(_NoteFields, frozen=True):
    """List-view projection of a note."""

    id: NoteId


class Phase(Enum):
    """Phase of the selection and edit state machine."""

    IDLE = "idle"
    LOADING_SELECTION = "loading_selection"
    VIEWING = "viewing"
    EDITING = "editing"
    SAVING = "saving"


class ErrorMessage(StrEnum):
    """User-facing failure messages, one per operation."""

    LOAD_NOTES = "Could not load notes."
    LOAD_NOTE = "Could not load note."
    CREATE_NOTE = "Could not create note."
    SAVE_NOTE = "Could not save note."
    DELETE_NOTE = "Could not delete note."


UNTITLED = "Untitled"


class ConfirmDelete(Protocol):
    """Callback asking the user to confirm a delete. May be sync or async."""

    def __call__(self, note_id: NoteId) -> bool | Awaitable[bool]:
        pass


class OnCollectionChanged(Protocol):
    """Callback fired once after a note is created, updated or deleted."""

    def __call__(self) -> Awaitable[Any]:
        pass


class OnStateChange(Protocol):
    """Callback fired after the workspace applies a state transition."""

    def __call__(self) -> None:
        pass


@dataclass(frozen=True)
class WorkspaceCallbacks:
    """Callbacks for presentation integration. None = feature disabled."""

    confirm_delete: ConfirmDelete | None = None
    """Asked before every delete. Without it deletes are refused."""

    on_state_change: OnStateChange | None = None
    """Called after each intent completes, e.g. to re-render. Sync."""


__all__ = [
    "ConfirmDelete",
    "ErrorMessage",
    "Note",
    "NoteId",
    "NoteSummary",
    "OnCollectionChanged",
    "OnStateChange",
    "Phase",
    "UNTITLED",
    "WorkspaceCallbacks",
]
