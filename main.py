"""Library catalog shell.

Run with no arguments for the interactive menu. Passing a command (``list``,
``add``, ``issue``, ``return``, ``search``, ``find``, ``stats``) runs it once and
exits. ``--output`` and ``--data-file`` are optional and only override the
defaults from ``config.settings``.
"""
import logging
import sys
from functools import wraps
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from config import settings
from libcat import storage
from libcat.catalog import Catalog
from libcat.ui_helpers import print_list_result, print_stats_result, set_output_mode
from libcat.validators import IdValidator, TextValidator

APP_NAME = settings.app_name

console = Console()
err_console = Console(stderr=True)


def _configure_logging() -> None:
    level = getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


# Single catalog instance shared by every command in the process
class CatalogManager:
    _instance: Optional[Catalog] = None
    _data_file: Optional[str] = None
    _load_status: Optional[storage.LoadStatus] = None

    @classmethod
    def get_instance(cls) -> Catalog:
        """Load the catalog from the data file on first use."""
        current = settings.data_file
        if cls._instance is None or cls._data_file != current:
            # Data file changed (e.g. --data-file or a per-test file): reload
            result = storage.load(current)
            if result.status is storage.LoadStatus.CORRUPT:
                err_console.print(
                    f"[yellow]Could not load saved data ({escape(result.error or 'unknown error')}). "
                    "Starting with an empty library.[/]"
                )
            cls._instance = result.catalog
            cls._data_file = current
            cls._load_status = result.status
        return cls._instance

    @classmethod
    def load_status(cls) -> Optional[storage.LoadStatus]:
        return cls._load_status

    @classmethod
    def save(cls) -> bool:
        """Snapshot the catalog; warn and carry on if the write fails."""
        if cls._instance is None:
            return False
        try:
            storage.save(cls._instance, cls._data_file)
            return True
        except storage.StorageError as e:
            console.print(f"[bold yellow]Warning: could not save data: {escape(str(e))}[/]")
            return False

    @classmethod
    def reset(cls) -> None:
        cls._instance = None
        cls._data_file = None
        cls._load_status = None


def saves_catalog(func):
    """Persist the catalog after a command that reached it.

    Wrapped commands return False when input was rejected before the catalog
    was touched; anything else triggers a save.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        result = func(*args, **kwargs)
        if result is not False:
            CatalogManager.save()
        return result
    return wrapper


def _read_id(prompt: str) -> Optional[int]:
    book_id = IdValidator.parse_id(Prompt.ask(prompt, console=console))
    if book_id is None:
        console.print("[red]Invalid number.[/]")
    return book_id


# --- Typer CLI application ---
app = typer.Typer(help="Library catalog CLI")

@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    data_file: Optional[str] = typer.Option(
        None,
        "--data-file",
        "-d",
        help="Catalog snapshot file (default: LIBRARY_DATA_FILE or library.json)",
    ),
):
    """Global options for the CLI (output mode, data file)."""
    _configure_logging()
    set_output_mode(output or settings.output_mode)
    if data_file:
        settings.data_file = data_file

@app.command("list")
def cli_list():
    """List all books."""
    print_list_result(CatalogManager.get_instance().list())

@app.command("add")
@saves_catalog
def cli_add(title: str, author: str):
    """Add a book with the given title and author."""
    if not (TextValidator.validate_title(title) and TextValidator.validate_author(author)):
        print("Title and author cannot be empty.")
        return False
    book = CatalogManager.get_instance().add(title, author)
    print(f"Added: {book}")

@app.command("issue")
@saves_catalog
def cli_issue(book_id: int, person: str):
    """Issue a book to a person."""
    if not TextValidator.validate_person(person):
        print("Name cannot be empty.")
        return False
    if CatalogManager.get_instance().issue(book_id, person):
        print("Book issued.")
    else:
        print("Could not issue book.")

@app.command("return")
@saves_catalog
def cli_return(book_id: int):
    """Return an issued book."""
    if CatalogManager.get_instance().return_book(book_id):
        print("Book returned.")
    else:
        print("Cannot return (invalid id or not issued).")

@app.command("search")
def cli_search(query: str = typer.Argument(..., help="Substring of a title or author")):
    """Search books by title or author."""
    if not TextValidator.validate_query(query):
        print("Empty query.")
        return
    print_list_result(CatalogManager.get_instance().search(query), empty_message="No matches.")

@app.command("find")
def cli_find(book_id: int):
    """Show a single book by id."""
    book = CatalogManager.get_instance().find(book_id)
    if book:
        print_list_result([book])
    else:
        print(f"No book with id {book_id}")

@app.command("stats")
def cli_stats():
    """Show catalog statistics."""
    print_stats_result(CatalogManager.get_instance().stats())


# --- Interactive menu ---
def list_books():
    """Show every book in a table."""
    books = CatalogManager.get_instance().list()
    if not books:
        console.print("[yellow]No books in library.[/]")
        return

    table = Table(title="📚 Books in library", show_lines=True, header_style="bold cyan")
    table.add_column("ID", style="magenta", no_wrap=True, justify="right")
    table.add_column("Title", style="white")
    table.add_column("Author", style="white")
    table.add_column("Status", style="green")

    for book in books:
        status = f"Issued to: {book.holder}" if book.issued else "Available"
        table.add_row(str(book.id), escape(book.title), escape(book.author), escape(status))

    console.print(table)
    console.print(f"[dim]📊 {len(books)} books[/]")

@saves_catalog
def add_book():
    """Prompt for a title and author and add the book."""
    title = Prompt.ask("Title", console=console)
    author = Prompt.ask("Author", console=console)
    if not (TextValidator.validate_title(title) and TextValidator.validate_author(author)):
        console.print("[red]Title and author cannot be empty.[/]")
        return False
    book = CatalogManager.get_instance().add(title, author)
    console.print(Panel.fit(f"[green]Added:[/] {escape(str(book))}", title="✅ Success", border_style="green"))

@saves_catalog
def issue_book():
    """Prompt for an id, check availability, then prompt for the borrower."""
    lib = CatalogManager.get_instance()
    book_id = _read_id("Enter book id to issue")
    if book_id is None:
        return False
    book = lib.find(book_id)
    if book is None:
        console.print(f"[yellow]No book with id {book_id}[/]")
        return False
    if book.issued:
        console.print(f"[yellow]Book already issued to {escape(book.holder)}[/]")
        return False
    person = Prompt.ask("Issue to (person name)", console=console)
    if not TextValidator.validate_person(person):
        console.print("[red]Name cannot be empty.[/]")
        return False
    if lib.issue(book_id, person):
        console.print("[green]Book issued.[/]")
    else:
        console.print("[red]Could not issue book.[/]")

@saves_catalog
def return_book():
    book_id = _read_id("Enter book id to return")
    if book_id is None:
        return False
    if CatalogManager.get_instance().return_book(book_id):
        console.print("[green]Book returned.[/]")
    else:
        console.print("[yellow]Cannot return (invalid id or not issued).[/]")

def search_books():
    """Search by title or author substring."""
    query = Prompt.ask("Search by title or author (substring)", console=console)
    if not TextValidator.validate_query(query):
        console.print("[red]Empty query.[/]")
        return
    books = CatalogManager.get_instance().search(query)
    if not books:
        console.print("[yellow]No matches.[/]")
        return
    for book in books:
        console.print(f"  {escape(str(book))}")

def run_menu():
    """Simple interactive menu for the library catalog."""
    def render_menu() -> None:
        menu_items = [
            ("1", "Add book", "➕"),
            ("2", "List books", "📚"),
            ("3", "Issue book", "📤"),
            ("4", "Return book", "📥"),
            ("5", "Search books", "🔎"),
            ("0", "Exit", "🚪"),
        ]

        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon in menu_items:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")

        console.print(Panel(table, title=APP_NAME, border_style="cyan", box=box.HEAVY, padding=(1, 2)))

    CatalogManager.get_instance()
    if CatalogManager.load_status() is storage.LoadStatus.LOADED:
        console.print(f"[dim]Loaded library from {escape(settings.data_file)}.[/]")

    try:
        while True:
            render_menu()
            choice = Prompt.ask("Choose an option", console=console).strip()

            if choice == "1":
                add_book()
            elif choice == "2":
                list_books()
            elif choice == "3":
                issue_book()
            elif choice == "4":
                return_book()
            elif choice == "5":
                search_books()
            elif choice == "0":
                break
            else:
                console.print("[yellow]Unknown option.[/]")
            console.print()
    except (EOFError, KeyboardInterrupt):
        # Input closed or interrupted mid-prompt: leave as if "0" was chosen
        console.print()

    console.print("[green]Exiting. Saving data...[/]")
    CatalogManager.save()

if __name__ == "__main__":
    if len(sys.argv) > 1:
        app()
    else:
        _configure_logging()
        run_menu()
