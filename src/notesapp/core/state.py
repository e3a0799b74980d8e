"""Client-side UI state shared by the list and selection controllers."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from notesapp.core.types import Note, NoteId, NoteSummary, Phase


class RequestSequence:
    """Monotonic request ids for one controller.

    Each outstanding call is tagged with the id returned by issue(). A
    response is applied only while its id is still current; anything
    issued earlier is stale and must be discarded.
    """

    def __init__(self) -> None:
        self._latest = 0

    def issue(self) -> int:
        """Tag a new request. Every earlier id becomes stale."""
        self._latest += 1
        return self._latest

    def invalidate(self) -> None:
        """Make every outstanding request stale without issuing a new one."""
        self._latest += 1

    def is_current(self, request_id: int) -> bool:
        return request_id == self._latest


@dataclass
class NotesState:
    """UI state for a single notes window.

    Owned by one NotesWorkspace and passed by reference to its controllers.
    Nothing else writes to it.
    """

    query: str = ""
    summaries: list[NoteSummary] = field(default_factory=list)
    selected_id: NoteId | None = None
    selected_note: Note | None = None
    is_editing: bool = False
    is_saving: bool = False
    draft_title: str = ""
    draft_content: str = ""
    error_message: str | None = None
    _in_flight: int = field(default=0, repr=False)

    @property
    def is_loading(self) -> bool:
        """True while any remote call is outstanding."""
        return self._in_flight > 0

    @property
    def phase(self) -> Phase:
        if self.is_saving:
            return Phase.SAVING
        if self.is_editing:
            return Phase.EDITING
        if self.selected_note is not None:
            return Phase.VIEWING
        if self.selected_id is not None:
            return Phase.LOADING_SELECTION
        return Phase.IDLE

    @contextmanager
    def remote_call(self) -> Iterator[None]:
        """Mark a remote call in flight and clear the previous error."""
        self._in_flight += 1
        self.error_message = None
        try:
            yield
        finally:
            self._in_flight -= 1

    def load_draft(self, note: Note | None) -> None:
        """Start a fresh edit buffer from a note, or empty for a new note."""
        self.draft_title = note.title if note else ""
        self.draft_content = note.content if note else ""
        self.is_editing = True

    def discard_draft(self) -> None:
        self.draft_title = ""
        self.draft_content = ""
        self.is_editing = False

    def clear_selection(self) -> None:
        self.selected_id = None
        self.selected_note = None
        self.discard_draft()

    def show_note(self, note: Note) -> None:
        """Make a fully loaded note the viewed selection."""
        self.selected_id = note.id
        self.selected_note = note
        self.discard_draft()
