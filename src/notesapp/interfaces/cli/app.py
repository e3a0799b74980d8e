"""CLI application for the notes client using Rich and Typer."""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from notesapp.core.config import (
    NOTES_API_BASE_URL,
    setup_logging,
    validate_core_environment,
)
from notesapp.core.factory import build_workspace
from notesapp.core.selection import StateTransitionError
from notesapp.core.state import NotesState
from notesapp.core.types import NoteId, WorkspaceCallbacks
from notesapp.core.workspace import NotesWorkspace
from notesapp.interfaces.cli.render import (
    BRAND,
    render_note,
    render_screen,
    render_sidebar,
)

app = typer.Typer(
    name="notesapp",
    help="NotesApp - list, search and edit notes on a notes API",
    no_args_is_help=False,
)

console = Console()

# Commands that do not change what the screen shows
_QUIET_COMMANDS = {"/help", "/quit", "/exit", "/q"}


def print_welcome(base_url: str):
    """Print welcome message."""
    console.print(
        Panel.fit(
            f"[bold blue]{BRAND}[/bold blue]\n"
            f"[dim]{base_url}[/dim]\n\n"
            "Commands: /search, /open, /new, /edit, /save, /delete, /help, /quit",
            title="Welcome",
            border_style="blue",
        )
    )


def print_help():
    """Print help message."""
    table = Table(title="Commands", show_header=True, header_style="bold cyan")
    table.add_column("Command", style="green")
    table.add_column("Description")

    commands = [
        ("/list", "Show the note list"),
        ("/search <text>", "Filter notes (empty text shows all)"),
        ("/refresh", "Reload the list from the server"),
        ("/open <id>", "View a note"),
        ("/close", "Close the current note"),
        ("/new", "Create an empty note and open it"),
        ("/draft", "Start a new note without saving it yet"),
        ("/edit", "Edit the open note"),
        ("/title <text>", "Set the draft title"),
        ("/content [text]", "Set the draft content (no text opens $EDITOR)"),
        ("/save", "Save the draft"),
        ("/cancel", "Discard the draft"),
        ("/delete [id]", "Delete a note (defaults to the open one)"),
        ("/help", "Show this help message"),
        ("/quit", "Exit the CLI"),
    ]

    for cmd, desc in commands:
        table.add_row(cmd, desc)

    console.print(table)


def confirm_delete(note_id: NoteId) -> bool:
    """Ask before deleting."""
    return Confirm.ask("Delete this note?", default=False, console=console)


def resolve_note_id(state: NotesState, raw: str) -> NoteId:
    """Map typed text to a note id, preferring ids already in the list."""
    raw = raw.strip()
    for summary in state.summaries:
        if str(summary.id) == raw:
            return summary.id
    if raw.isdigit():
        return int(raw)
    return raw


def show(workspace: NotesWorkspace):
    console.print(render_screen(workspace.state, workspace.api.base_url))


async def handle_command(workspace: NotesWorkspace, command: str) -> bool:
    """
    Handle a CLI command.

    Returns True if the REPL should continue, False to exit.
    """
    parts = command.strip().split(maxsplit=1)
    cmd = parts[0].lower()
    args = parts[1] if len(parts) > 1 else ""
    state = workspace.state

    if cmd in ("/quit", "/exit", "/q"):
        console.print("[dim]Goodbye![/dim]")
        return False

    elif cmd == "/help":
        print_help()

    elif cmd == "/list":
        pass

    elif cmd == "/search":
        with console.status("[bold blue]Loading...[/bold blue]"):
            await workspace.set_query(args)

    elif cmd == "/refresh":
        with console.status("[bold blue]Loading...[/bold blue]"):
            await workspace.refresh()

    elif cmd == "/open":
        if not args:
            console.print("[red]Usage: /open <id>[/red]")
            return True
        with console.status("[bold blue]Loading...[/bold blue]"):
            await workspace.select_note(resolve_note_id(state, args))

    elif cmd == "/close":
        await workspace.deselect()

    elif cmd == "/new":
        with console.status("[bold blue]Creating...[/bold blue]"):
            await workspace.create_new()

    elif cmd == "/draft":
        if state.selected_id is not None:
            await workspace.deselect()
        workspace.begin_edit()

    elif cmd == "/edit":
        workspace.begin_edit()

    elif cmd == "/title":
        workspace.update_draft(title=args)

    elif cmd == "/content":
        if args:
            content = args
        else:
            edited = typer.edit(state.draft_content)
            content = edited.rstrip("\n") if edited is not None else None
        workspace.update_draft(content=content)

    elif cmd == "/save":
        with console.status("[bold blue]Saving...[/bold blue]"):
            await workspace.save()

    elif cmd == "/cancel":
        workspace.cancel_edit()

    elif cmd == "/delete":
        if args:
            note_id = resolve_note_id(state, args)
        elif state.selected_note is not None and state.selected_note.id is not None:
            note_id = state.selected_note.id
        else:
            console.print("[red]Usage: /delete <id> (or open a note first)[/red]")
            return True
        await workspace.delete_note(note_id)

    else:
        console.print(f"[red]Unknown command: {cmd}[/red]")
        console.print("[dim]Type /help for available commands.[/dim]")
        return True

    if cmd not in _QUIET_COMMANDS:
        show(workspace)
    return True


async def repl(base_url: str):
    """Run the REPL (Read-Eval-Print Loop)."""
    is_valid, message = validate_core_environment(base_url)
    if not is_valid:
        console.print(f"[red]Error: {message}[/red]")
        return

    workspace = build_workspace(
        base_url=base_url,
        callbacks=WorkspaceCallbacks(confirm_delete=confirm_delete),
    )
    print_welcome(workspace.api.base_url)

    try:
        with console.status("[bold blue]Loading...[/bold blue]"):
            await workspace.load()
        show(workspace)

        while True:
            try:
                text = Prompt.ask("[bold blue]notes[/bold blue]", console=console)

                if not text.strip():
                    continue

                if text.startswith("/"):
                    should_continue = await handle_command(workspace, text)
                    if not should_continue:
                        break
                else:
                    console.print("[dim]Type /help for available commands.[/dim]")

            except StateTransitionError as e:
                console.print(f"[yellow]{e}[/yellow]")
            except KeyboardInterrupt:
                console.print("\n[dim]Use /quit to exit.[/dim]")
            except EOFError:
                break
    finally:
        await workspace.aclose()


def _configure_logging(debug: bool):
    if debug:
        setup_logging("DEBUG")
        console.print("[dim]Debug logging enabled[/dim]")
    else:
        setup_logging()


@app.command("repl")
def repl_command(
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Notes API root (default: $NOTES_API_BASE_URL)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """Start the interactive notes screen."""
    _configure_logging(debug)
    asyncio.run(repl(base_url or NOTES_API_BASE_URL))


@app.command("list")
def list_notes(
    search: str = typer.Option("", "--search", "-s", help="Search text"),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Notes API root",
    ),
):
    """Print the note list once."""

    async def _list() -> bool:
        workspace = build_workspace(base_url=base_url)
        try:
            await workspace.set_query(search)
        finally:
            await workspace.aclose()
        state = workspace.state
        console.print(render_sidebar(state))
        if state.error_message:
            console.print(f"[red]{state.error_message}[/red]")
            return False
        return True

    ok = asyncio.run(_list())
    raise typer.Exit(0 if ok else 1)


@app.command("show")
def show_note(
    note_id: str = typer.Argument(..., help="Note id"),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Notes API root",
    ),
):
    """Print one note."""

    async def _show() -> bool:
        workspace = build_workspace(base_url=base_url)
        try:
            await workspace.select_note(resolve_note_id(workspace.state, note_id))
        finally:
            await workspace.aclose()
        state = workspace.state
        if state.selected_note is None:
            console.print(f"[red]{state.error_message}[/red]")
            return False
        console.print(render_note(state.selected_note))
        return True

    ok = asyncio.run(_show())
    raise typer.Exit(0 if ok else 1)


@app.command()
def health(
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Notes API root",
    ),
):
    """Check the notes API is reachable."""
    url = base_url or NOTES_API_BASE_URL
    table = Table(title="Health Check", show_header=True)
    table.add_column("Component", style="cyan")
    table.add_column("Status")
    table.add_column("Message")

    is_valid, message = validate_core_environment(url)
    table.add_row(
        "Config",
        "[green]OK[/green]" if is_valid else "[red]FAILED[/red]",
        message or url,
    )

    healthy = False
    if is_valid:

        async def _check() -> tuple[bool, str]:
            workspace = build_workspace(base_url=url)
            try:
                return await workspace.api.health_check()
            finally:
                await workspace.aclose()

        healthy, detail = asyncio.run(_check())
        status = "[green]OK[/green]" if healthy else "[red]FAILED[/red]"
        table.add_row("Notes API", status, detail)

    console.print(table)
    raise typer.Exit(0 if healthy else 1)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """NotesApp - list, search and edit notes on a notes API."""
    if ctx.invoked_subcommand is None:
        # Default to the interactive screen
        repl_command(base_url=None, debug=False)


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
