"""List and search controller."""

import logging

from notesapp.core.notes_api import NotesApiClient, TransportError
from notesapp.core.state import NotesState, RequestSequence
from notesapp.core.types import ErrorMessage

logger = logging.getLogger(__name__)


class ListController:
    """Owns the search query and the note summaries shown in the list."""

    def __init__(self, state: NotesState, api: NotesApiClient):
        self._state = state
        self._api = api
        self._requests = RequestSequence()

    async def set_query(self, query: str) -> bool:
        """Replace the query and re-list. No debouncing."""
        self._state.query = query
        return await self.refresh()

    async def refresh(self) -> bool:
        """
        Re-issue the list call for the current query.

        Only the most recently issued list call may update the summaries.
        On failure the previous summaries are kept.

        Returns:
            True if this call's result was applied
        """
        state = self._state
        request_id = self._requests.issue()
        query = state.query

        with state.remote_call():
            try:
                summaries = await self._api.list(query)
            except TransportError as exc:
                if not self._requests.is_current(request_id):
                    logger.debug(f"Ignoring stale list failure #{request_id}: {exc}")
                    return False
                state.error_message = ErrorMessage.LOAD_NOTES
                return False

        if not self._requests.is_current(request_id):
            logger.debug(
                f"Discarding stale list response #{request_id} (query={query!r})"
            )
            return False

        state.summaries = summaries
        logger.debug(f"Listed {len(summaries)} notes for query={query!r}")
        return True
