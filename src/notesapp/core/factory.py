"""Factory for building a NotesWorkspace with its dependencies wired.

Interfaces should call build_workspace() rather than constructing the API
client and controllers themselves.
"""

from notesapp.core.config import NOTES_API_BASE_URL
from notesapp.core.notes_api import NotesApiClient
from notesapp.core.types import WorkspaceCallbacks
from notesapp.core.workspace import NotesWorkspace


def build_workspace(
    base_url: str | None = None,
    callbacks: WorkspaceCallbacks | None = None,
) -> NotesWorkspace:
    """
    Build a fully configured NotesWorkspace.

    Args:
        base_url: Notes API root (defaults to NOTES_API_BASE_URL)
        callbacks: Presentation hooks

    Returns:
        Workspace with its own API client
    """
    api = NotesApiClient(base_url=base_url or NOTES_API_BASE_URL)
    return NotesWorkspace(api=api, callbacks=callbacks)
