"""Selection and edit state machine.

Phases (see Phase):

    IDLE -> LOADING_SELECTION -> VIEWING -> EDITING -> SAVING -> VIEWING
    IDLE -> EDITING  (begin_edit with no selection starts a new draft)

Every transition that calls the API counts as in flight on the shared state
and clears the previous error first. Failures are turned into the fixed
ErrorMessage strings; TransportError never escapes this module.
"""

import inspect
import logging
from typing import Any

from notesapp.core.notes_api import NotesApiClient, TransportError
from notesapp.core.state import NotesState, RequestSequence
from notesapp.core.types import (
    UNTITLED,
    ConfirmDelete,
    ErrorMessage,
    Note,
    NoteId,
    OnCollectionChanged,
    Phase,
)

logger = logging.getLogger(__name__)


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class StateTransitionError(RuntimeError):
    """Raised when an intent is not valid in the current phase."""


class SelectionController:
    """Owns which note is active and its unsaved edit buffer."""

    def __init__(
        self,
        state: NotesState,
        api: NotesApiClient,
        on_collection_changed: OnCollectionChanged | None = None,
    ):
        """
        Initialize the controller.

        Args:
            state: Shared UI state (owned by the caller)
            api: Notes API client
            on_collection_changed: Awaited once after each successful
                create, update or delete, typically the list refresh
        """
        self._state = state
        self._api = api
        self._on_collection_changed = on_collection_changed
        self._requests = RequestSequence()

    def _require(self, *phases: Phase) -> None:
        phase = self._state.phase
        if phase not in phases:
            allowed = ", ".join(p.value for p in phases)
            raise StateTransitionError(
                f"Not allowed while {phase.value} (expected {allowed})"
            )

    async def _collection_changed(self) -> None:
        if self._on_collection_changed is not None:
            await self._on_collection_changed()

    async def select(self, note_id: NoteId | None) -> bool:
        """
        Select a note and load its full record, or deselect with None.

        A newer select (or deselect) supersedes any fetch still in flight.

        Returns:
            True if the note was loaded and applied
        """
        state = self._state
        if note_id is None:
            self._requests.invalidate()
            state.clear_selection()
            return False

        request_id = self._requests.issue()
        state.selected_id = note_id
        state.selected_note = None
        state.discard_draft()

        with state.remote_call():
            try:
                note = await self._api.get(note_id)
            except TransportError as exc:
                if not self._requests.is_current(request_id):
                    logger.debug(f"Ignoring stale get failure for {note_id}: {exc}")
                    return False
                logger.info(f"Could not load note {note_id}: {exc}")
                state.clear_selection()
                state.error_message = ErrorMessage.LOAD_NOTE
                return False

        if not self._requests.is_current(request_id):
            logger.debug(f"Discarding stale get response for {note_id}")
            return False

        state.show_note(note)
        return True

    def begin_edit(self) -> None:
        """Open the edit buffer from the viewed note, or empty for a new one."""
        self._require(Phase.VIEWING, Phase.IDLE)
        self._state.load_draft(self._state.selected_note)

    def update_draft(self, title: str | None = None, content: str | None = None) -> None:
        """Change fields of the live edit buffer."""
        self._require(Phase.EDITING)
        if title is not None:
            self._state.draft_title = title
        if content is not None:
            self._state.draft_content = content

    def cancel_edit(self) -> None:
        """Drop the edit buffer. Never touches the network."""
        self._require(Phase.EDITING)
        self._state.discard_draft()

    async def save(
        self, title: str | None = None, content: str | None = None
    ) -> Note | None:
        """
        Persist the edit buffer.

        Creates the note when the selection has no id, otherwise updates it.
        On failure the buffer is kept and the controller stays in EDITING.

        Args:
            title: Replaces the draft title before saving, if given
            content: Replaces the draft content before saving, if given

        Returns:
            The saved note, or None on failure
        """
        self.update_draft(title, content)
        state = self._state
        target = state.selected_note
        request_id = self._requests.issue()

        state.is_saving = True
        with state.remote_call():
            try:
                if target is None or target.id is None:
                    saved = await self._api.create(
                        state.draft_title, state.draft_content
                    )
                else:
                    saved = await self._api.update(
                        target.id, state.draft_title, state.draft_content
                    )
            except TransportError as exc:
                logger.info(f"Could not save note: {exc}")
                state.error_message = ErrorMessage.SAVE_NOTE
                return None
            finally:
                state.is_saving = False

        if self._requests.is_current(request_id):
            state.show_note(saved)
        else:
            logger.debug(f"Selection changed during save of {saved.id}")
        await self._collection_changed()
        return saved

    async def create_new(self) -> Note | None:
        """
        Create an empty note on the server right away and select it.

        Returns:
            The created note, or None on failure
        """
        state = self._state
        request_id = self._requests.issue()

        with state.remote_call():
            try:
                created = await self._api.create(UNTITLED, "")
            except TransportError as exc:
                logger.info(f"Could not create note: {exc}")
                state.error_message = ErrorMessage.CREATE_NOTE
                return None

        if self._requests.is_current(request_id):
            state.show_note(created)
        await self._collection_changed()
        return created

    async def delete(self, note_id: NoteId, confirm: ConfirmDelete | None) -> bool:
        """
        Delete a note after explicit confirmation.

        A refused or missing confirmation is a no-op. On success the
        selection is cleared; on failure it is left as it was.

        Returns:
            True if the note was deleted
        """
        if confirm is None or not await _maybe_await(confirm(note_id)):
            logger.debug(f"Delete of {note_id} not confirmed")
            return False

        state = self._state
        with state.remote_call():
            try:
                await self._api.remove(note_id)
            except TransportError as exc:
                logger.info(f"Could not delete note {note_id}: {exc}")
                state.error_message = ErrorMessage.DELETE_NOTE
                return False

        self._requests.invalidate()
        state.clear_selection()
        await self._collection_changed()
        return True
