"""The workspace - coordinating layer between the presentation and controllers."""

import logging

from notesapp.core.listing import ListController
from notesapp.core.notes_api import NotesApiClient, get_notes_api
from notesapp.core.selection import SelectionController
from notesapp.core.state import NotesState
from notesapp.core.types import ConfirmDelete, Note, NoteId, WorkspaceCallbacks

logger = logging.getLogger(__name__)


class NotesWorkspace:
    """Owns the UI state and routes user intents to the two controllers.

    The list controller and the selection controller share one NotesState.
    Mutations made through the selection controller re-sync the list by
    calling ListController.refresh exactly once.
    """

    def __init__(
        self,
        api: NotesApiClient | None = None,
        callbacks: WorkspaceCallbacks | None = None,
    ):
        """
        Initialize the workspace with optional dependency injection.

        Args:
            api: Notes API client (defaults to global)
            callbacks: Presentation hooks (delete confirmation, re-render)
        """
        self._api = api or get_notes_api()
        self._callbacks = callbacks or WorkspaceCallbacks()
        self._state = NotesState()
        self.listing = ListController(self._state, self._api)
        self.selection = SelectionController(
            self._state,
            self._api,
            on_collection_changed=self.listing.refresh,
        )

    @property
    def state(self) -> NotesState:
        """Current UI state. Read it, do not write it."""
        return self._state

    @property
    def api(self) -> NotesApiClient:
        return self._api

    def _changed(self) -> None:
        if self._callbacks.on_state_change is not None:
            self._callbacks.on_state_change()

    async def load(self) -> bool:
        """Initial list fetch for the current (empty) query."""
        applied = await self.listing.refresh()
        self._changed()
        return applied

    async def refresh(self) -> bool:
        applied = await self.listing.refresh()
        self._changed()
        return applied

    async def set_query(self, query: str) -> bool:
        applied = await self.listing.set_query(query)
        self._changed()
        return applied

    async def select_note(self, note_id: NoteId | None) -> bool:
        applied = await self.selection.select(note_id)
        self._changed()
        return applied

    async def deselect(self) -> None:
        await self.select_note(None)

    async def create_new(self) -> Note | None:
        note = await self.selection.create_new()
        self._changed()
        return note

    def begin_edit(self) -> None:
        self.selection.begin_edit()
        self._changed()

    def update_draft(self, title: str | None = None, content: str | None = None) -> None:
        self.selection.update_draft(title, content)
        self._changed()

    def cancel_edit(self) -> None:
        self.selection.cancel_edit()
        self._changed()

    async def save(
        self, title: str | None = None, content: str | None = None
    ) -> Note | None:
        note = await self.selection.save(title, content)
        self._changed()
        return note

    async def delete_note(
        self, note_id: NoteId, confirm: ConfirmDelete | None = None
    ) -> bool:
        """Delete a note, asking the confirmation callback first."""
        gate = confirm or self._callbacks.confirm_delete
        deleted = await self.selection.delete(note_id, gate)
        self._changed()
        return deleted

    async def aclose(self) -> None:
        await self._api.aclose()
