"""HTTP client for the remote notes service."""

import logging
from threading import Lock
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from notesapp.core.config import NOTES_API_BASE_URL
from notesapp.core.types import Note, NoteId, NoteSummary

logger = logging.getLogger(__name__)


class TransportError(RuntimeError):
    """Network failure or non-2xx response from the notes service."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(TransportError):
    """Raised when the service answers 404 for a note id."""


def _join_base(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def _note_path(note_id: NoteId) -> str:
    return f"/notes/{quote(str(note_id), safe='')}"


class NotesApiClient:
    """Translates note operations into requests against the notes service.

    Every call is a single round trip. There are no retries and no timeout
    beyond the transport default. Any failure surfaces as TransportError.
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Service root, e.g. http://localhost:5000/api
                (defaults to NOTES_API_BASE_URL)
            client: Pre-built httpx client (tests inject a MockTransport)
        """
        self.base_url = (base_url or NOTES_API_BASE_URL).rstrip("/")
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating one on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "NotesApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        failure: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        url = _join_base(self.base_url, path)
        logger.debug(f"{method} {url} params={params}")
        try:
            resp = await self.client.request(method, url, params=params, json=json)
        except httpx.HTTPError as exc:
            logger.warning(f"{method} {url} failed: {exc}")
            raise TransportError(failure) from exc

        if not resp.is_success:
            logger.warning(f"{method} {url} returned HTTP {resp.status_code}")
            error_cls = NotFoundError if resp.status_code == 404 else TransportError
            raise error_cls(failure, status_code=resp.status_code)
        return resp

    @staticmethod
    def _json(resp: httpx.Response, failure: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(failure, status_code=resp.status_code) from exc

    async def list(self, query: str | None = None) -> list[NoteSummary]:
        """
        List notes, optionally filtered by a search query.

        Args:
            query: Search text. Empty or None returns every note.

        Returns:
            Note summaries in server order
        """
        failure = "Error fetching notes."
        params = {"search": query} if query else None
        resp = await self._request("GET", "/notes", failure, params=params)
        data = self._json(resp, failure)
        if not isinstance(data, list):
            raise TransportError(failure, status_code=resp.status_code)
        try:
            return [NoteSummary.model_validate(item) for item in data]
        except ValidationError as exc:
            raise TransportError(failure, status_code=resp.status_code) from exc

    async def get(self, note_id: NoteId) -> Note:
        """Fetch one full note. Raises NotFoundError for unknown ids."""
        failure = "Error fetching note."
        resp = await self._request("GET", _note_path(note_id), failure)
        return self._parse_note(resp, failure)

    async def create(self, title: str, content: str) -> Note:
        """Create a note. Not idempotent: each call makes a new note."""
        failure = "Error creating note."
        resp = await self._request(
            "POST", "/notes", failure, json={"title": title, "content": content}
        )
        return self._parse_note(resp, failure)

    async def update(self, note_id: NoteId, title: str, content: str) -> Note:
        """Replace title and content of an existing note."""
        failure = "Error updating note."
        resp = await self._request(
            "PUT",
            _note_path(note_id),
            failure,
            json={"title": title, "content": content},
        )
        return self._parse_note(resp, failure)

    async def remove(self, note_id: NoteId) -> bool:
        """Delete a note. The response body is ignored."""
        await self._request("DELETE", _note_path(note_id), "Error deleting note.")
        return True

    def _parse_note(self, resp: httpx.Response, failure: str) -> Note:
        data = self._json(resp, failure)
        try:
            note = Note.model_validate(data)
        except ValidationError as exc:
            raise TransportError(failure, status_code=resp.status_code) from exc
        # A stored note always carries its server id.
        if note.id is None:
            raise TransportError(failure, status_code=resp.status_code)
        return note

    async def health_check(self) -> tuple[bool, str]:
        """
        Check connectivity to the notes service.

        Returns:
            (success, message)
        """
        try:
            notes = await self.list()
        except TransportError as e:
            reason = f"HTTP {e.status_code}" if e.status_code else str(e)
            return False, f"FAILED - {reason}"
        return True, f"OK ({len(notes)} notes)"


# Default instance
_notes_api: NotesApiClient | None = None
_notes_api_lock = Lock()


def get_notes_api() -> NotesApiClient:
    """Get or create the default API client instance."""
    global _notes_api
    if _notes_api is None:
        with _notes_api_lock:
            if _notes_api is None:
                _notes_api = NotesApiClient(base_url=NOTES_API_BASE_URL)
    return _notes_api


def set_notes_api(client: NotesApiClient | None) -> None:
    """Set the default API client instance (for testing)."""
    global _notes_api
    _notes_api = client
