"""Rich renderables for the notes screen."""

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from notesapp.core.config import NOTES_SNIPPET_CHARS
from notesapp.core.state import NotesState
from notesapp.core.types import UNTITLED, Note, NoteSummary, Phase

BRAND = "NotesApp"


def display_title(title: str) -> str:
    return title or UNTITLED


def snippet(content: str, limit: int = NOTES_SNIPPET_CHARS) -> str:
    """Shorten note content for the list. Display only."""
    if len(content) > limit:
        return content[:limit] + "..."
    return content


def render_header(base_url: str) -> RenderableType:
    header = Text()
    header.append(BRAND, style="bold blue")
    header.append("  ")
    header.append(base_url, style="dim")
    return header


def render_sidebar(state: NotesState) -> RenderableType:
    """Search box and note list."""
    title = f"Notes (search: {state.query!r})" if state.query else "Notes"

    if state.is_loading and not state.summaries:
        return Panel(Text("Loading...", style="dim"), title=title)
    if not state.summaries:
        return Panel(Text("No notes found.", style="dim"), title=title)

    table = Table(show_header=True, header_style="bold cyan", expand=True)
    table.add_column("", width=1)
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Snippet", style="dim")

    for summary in state.summaries:
        table.add_row(*_summary_row(summary, state.selected_id))

    return Panel(table, title=title)


def _summary_row(summary: NoteSummary, selected_id) -> tuple[str, str, str, str]:
    marker = "[green]>[/green]" if summary.id == selected_id else ""
    return (
        marker,
        str(summary.id),
        display_title(summary.title),
        snippet(summary.content),
    )


def render_note(note: Note) -> RenderableType:
    """Read-only note view."""
    return Panel(
        Text(note.content or ""),
        title=f"[bold]{display_title(note.title)}[/bold]",
        subtitle=f"#{note.id}  /edit  /delete",
        border_style="green",
    )


def render_editor(state: NotesState) -> RenderableType:
    """Edit form showing the live draft."""
    table = Table.grid(padding=(0, 1))
    table.add_column(style="cyan")
    table.add_column()
    table.add_row("Title", state.draft_title or Text("(empty)", style="dim"))
    table.add_row("Content", state.draft_content or Text("(empty)", style="dim"))

    actions = ["/title", "/content", "/save", "/cancel"]
    note = state.selected_note
    if note is not None and note.id is not None:
        actions.append("/delete")
    label = "Saving..." if state.phase is Phase.SAVING else "Editing"
    return Panel(
        table,
        title=f"[bold yellow]{label}[/bold yellow]",
        subtitle="  ".join(actions),
        border_style="yellow",
    )


def render_main(state: NotesState) -> RenderableType:
    """Viewer, editor or the empty placeholder."""
    phase = state.phase
    if phase in (Phase.EDITING, Phase.SAVING):
        return render_editor(state)
    if phase is Phase.VIEWING and state.selected_note is not None:
        return render_note(state.selected_note)
    if phase is Phase.LOADING_SELECTION:
        return Text("Loading...", style="dim")
    return Text("Select or create a note to begin.", style="dim")


def render_error(state: NotesState) -> RenderableType | None:
    if not state.error_message:
        return None
    return Text(state.error_message, style="bold red")


def render_screen(state: NotesState, base_url: str) -> RenderableType:
    """Whole screen: header, list, error line, main area."""
    parts: list[RenderableType] = [render_header(base_url), render_sidebar(state)]
    error = render_error(state)
    if error is not None:
        parts.append(error)
    parts.append(render_main(state))
    return Group(*parts)
