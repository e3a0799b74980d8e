"""Notes client core - API client, controllers and shared state."""

from typing import TYPE_CHECKING

from notesapp.core.types import (
    ErrorMessage,
    Note,
    NoteSummary,
    Phase,
    WorkspaceCallbacks,
)

if TYPE_CHECKING:
    from notesapp.core.factory import build_workspace
    from notesapp.core.workspace import NotesWorkspace

__all__ = [
    # Core classes
    "NotesWorkspace",
    "build_workspace",
    # Types
    "ErrorMessage",
    "Note",
    "NoteSummary",
    "Phase",
    "WorkspaceCallbacks",
]


def __getattr__(name: str):
    if name == "NotesWorkspace":
        from notesapp.core.workspace import NotesWorkspace

        return NotesWorkspace
    if name == "build_workspace":
        from notesapp.core.factory import build_workspace

        return build_workspace
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
