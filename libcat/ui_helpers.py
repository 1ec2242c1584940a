import os
import json
from typing import List, Dict, Any
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from libcat.book import Book

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()

def _status(book: Book) -> str:
    return f"Issued to: {book.holder}" if book.issued else "Available"

def print_list_result(books: List[Book], empty_message: str = "No books in library.") -> None:
    """Print books according to the current output mode.
    - plain: one '[id] Title by Author (status)' line per book
    - json: JSON array of book records
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print(empty_message)
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True, justify="right")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Status", style="green")
        for b in books:
            table.add_row(str(b.id), escape(b.title), escape(b.author), escape(_status(b)))
        _console.print(table)
    else:
        for b in books:
            print(f"  {b}")

def print_stats_result(stats: Dict[str, Any]) -> None:
    """Print catalog statistics according to the current output mode."""
    mode = get_output_mode()

    total = stats.get("total_books", 0)
    issued = stats.get("issued_books", 0)
    available = stats.get("available_books", 0)
    authors = stats.get("unique_authors", 0)

    if mode == "json":
        print(json.dumps(stats, ensure_ascii=False))
    elif mode == "rich":
        content = (
            f"[bold]Total Books:[/] {total}\n"
            f"[bold]Issued:[/] {issued}\n"
            f"[bold]Available:[/] {available}\n"
            f"[bold]Unique Authors:[/] {authors}"
        )
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        print(f"Total Books: {total}")
        print(f"Issued: {issued}")
        print(f"Available: {available}")
        print(f"Unique Authors: {authors}")
