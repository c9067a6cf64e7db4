"""CLI application for notejournal using Rich and Typer."""

from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from notejournal.core.config import resolve_journal_dir, setup_logging
from notejournal.core.errors import JournalError
from notejournal.core.journal import Journal
from notejournal.editor import open_in_editor
from notejournal.vault.daily import create_diary_entry

app = typer.Typer(
    name="journal",
    help="notejournal - DOING/TODO/LATER index for a markdown diary",
    no_args_is_help=False,
)

console = Console()

DirOption = typer.Option(
    None,
    "--dir",
    "-D",
    help="Journal directory (default: $JOURNAL_DIR or ~/journal)",
)


def _open(ctx: typer.Context, directory: Optional[str]) -> Journal:
    root = resolve_journal_dir(directory or ctx.obj)
    if not root.is_dir():
        console.print(f"[red]Journal directory not found: {root}[/red]")
        raise typer.Exit(1)
    return Journal.open(root)


def _fail(error: JournalError) -> NoReturn:
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


def _report(journal: Journal) -> None:
    counts = journal.state.counts()
    summary = ", ".join(f"{category.value.lower()}: {n}" for category, n in counts.items())
    console.print(f"[green]Updated {journal.index_path}[/green] [dim]({summary})[/dim]")


@app.command()
def sync(ctx: typer.Context, directory: Optional[str] = DirOption):
    """Rescan changed notes and rewrite the index."""
    try:
        journal = _open(ctx, directory)
        journal.sync()
    except JournalError as e:
        _fail(e)
    _report(journal)


@app.command(name="all")
def rescan_all(ctx: typer.Context, directory: Optional[str] = DirOption):
    """Rescan every note and rewrite the index."""
    try:
        journal = _open(ctx, directory)
        changes = journal.sync(full=True)
    except JournalError as e:
        _fail(e)
    console.print(f"[dim]Scanned {len(changes.notes)} notes[/dim]")
    _report(journal)


@app.command()
def index(ctx: typer.Context, directory: Optional[str] = DirOption):
    """Open the index in the editor, then rescan."""
    try:
        journal = _open(ctx, directory)
        journal.process_changes()
        journal.write()
        open_in_editor(journal.state.editor, journal.index_path)
        journal.sync()
    except JournalError as e:
        _fail(e)
    _report(journal)


@app.command()
def new(ctx: typer.Context, directory: Optional[str] = DirOption):
    """Open today's diary entry in the editor, then rescan."""
    try:
        journal = _open(ctx, directory)
        rel_path, created = create_diary_entry(journal.root)
        if created:
            console.print(f"[green]Created {rel_path}[/green]")
        open_in_editor(journal.state.editor, journal.root / rel_path)
        journal.sync()
    except JournalError as e:
        _fail(e)
    _report(journal)


@app.command()
def push(ctx: typer.Context, directory: Optional[str] = DirOption):
    """Commit the journal, pull with rebase, and push."""
    try:
        journal = _open(ctx, directory)
        journal.push()
    except JournalError as e:
        _fail(e)
    console.print("[green]Journal pushed[/green]")


@app.command()
def status(ctx: typer.Context, directory: Optional[str] = DirOption):
    """Show tag counts from the last pass without rescanning."""
    try:
        journal = _open(ctx, directory)
    except JournalError as e:
        _fail(e)

    table = Table(title=f"Journal {journal.root}", show_header=True)
    table.add_column("Category", style="cyan")
    table.add_column("Tags", justify="right")
    for category, count in journal.state.counts().items():
        table.add_row(category.value, str(count))
    table.add_row("Notes", str(len(journal.state.tracked_paths())), style="dim")
    table.add_row("Archived months", str(len(journal.state.diary)), style="dim")
    console.print(table)
    console.print(f"[dim]Last revision: {journal.state.hash or 'never synchronized'}[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    directory: Optional[str] = DirOption,
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """notejournal - DOING/TODO/LATER index for a markdown diary."""
    setup_logging("DEBUG" if debug else None)
    if debug:
        console.print("[dim]Debug logging enabled[/dim]")
    ctx.obj = directory
    if ctx.invoked_subcommand is None:
        # Default to sync
        sync(ctx, directory=None)


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
