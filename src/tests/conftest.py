"""Shared test fixtures and configuration."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from notesapp.core.notes_api import NotesApiClient
from notesapp.core.types import Note, NoteSummary, WorkspaceCallbacks
from notesapp.core.workspace import NotesWorkspace


@pytest.fixture
def mock_env(monkeypatch):
    """Set up mock environment variables."""
    env_vars = {
        "NOTES_API_BASE_URL": "http://notes.test/api",
        "NOTES_SNIPPET_CHARS": "40",
        "LOG_LEVEL": "DEBUG",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def sample_note():
    """A persisted note."""
    return Note(id=1, title="A", content="x")


@pytest.fixture
def sample_summaries():
    """List response for an empty query."""
    return [
        NoteSummary(id=1, title="A", content="x"),
        NoteSummary(id=2, title="Groceries", content="milk, eggs"),
    ]


@pytest.fixture
def mock_api(sample_note, sample_summaries):
    """Mock NotesApiClient with successful defaults."""
    api = MagicMock(spec=NotesApiClient)
    api.base_url = "http://notes.test/api"
    api.list = AsyncMock(return_value=sample_summaries)
    api.get = AsyncMock(return_value=sample_note)
    api.create = AsyncMock(return_value=Note(id=7, title="Untitled", content=""))
    api.update = AsyncMock(
        side_effect=lambda note_id, title, content: Note(
            id=note_id, title=title, content=content
        )
    )
    api.remove = AsyncMock(return_value=True)
    api.aclose = AsyncMock()
    api.health_check = AsyncMock(return_value=(True, "OK (2 notes)"))
    return api


@pytest.fixture
def make_workspace(mock_api):
    """Factory for workspaces wired to the mock API."""

    def _make_workspace(
        *, api=None, confirm_delete=None, on_state_change=None
    ) -> NotesWorkspace:
        return NotesWorkspace(
            api=api or mock_api,
            callbacks=WorkspaceCallbacks(
                confirm_delete=confirm_delete,
                on_state_change=on_state_change,
            ),
        )

    return _make_workspace


@pytest.fixture
def workspace(make_workspace):
    """Workspace that confirms every delete."""
    return make_workspace(confirm_delete=lambda _note_id: True)


class PendingCalls:
    """Hands out futures so a test decides when each API call returns."""

    def __init__(self):
        self.calls: list[tuple[tuple, asyncio.Future]] = []

    async def __call__(self, *args):
        future = asyncio.get_running_loop().create_future()
        self.calls.append((args, future))
        return await future

    def resolve(self, index: int, value):
        self.calls[index][1].set_result(value)

    def fail(self, index: int, exc: BaseException):
        self.calls[index][1].set_exception(exc)


@pytest.fixture
def pending():
    """Factory for PendingCalls instances."""
    return PendingCalls


@pytest.fixture
def settle():
    """Coroutine that lets scheduled tasks run until they block."""

    async def _settle():
        for _ in range(10):
            await asyncio.sleep(0)

    return _settle
