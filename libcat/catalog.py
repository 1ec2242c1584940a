import threading
from typing import Dict, Iterable, List, Optional, Tuple

from libcat.book import Book


class Catalog:
    """Manages the collection of books and identifier assignment.

    Every public method runs under a single lock covering both the mapping and
    the id counter. Records handed out are immutable values, so callers can
    never mutate catalog state behind the lock's back.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._books: Dict[int, Book] = {}
        self._next_id = 1

    # ------------------------- Core operations ------------------------- #
    def add(self, title: str, author: str) -> Book:
        """Store a new, available book under the next free id."""
        with self._lock:
            book = Book(id=self._next_id, title=title.strip(), author=author.strip())
            self._books[book.id] = book
            self._next_id += 1
            return book

    def list(self) -> List[Book]:
        """All books in insertion order."""
        with self._lock:
            return list(self._books.values())

    def find(self, book_id: int) -> Optional[Book]:
        with self._lock:
            return self._books.get(book_id)

    def issue(self, book_id: int, person: str) -> bool:
        """Mark a book as held by ``person``.

        Returns False without touching anything if the id is unknown or the
        book is already out.
        """
        with self._lock:
            book = self._books.get(book_id)
            if book is None or book.issued:
                return False
            self._books[book_id] = book.issued_to(person.strip())
            return True

    def return_book(self, book_id: int) -> bool:
        """Clear the issue status; False if unknown or not issued."""
        with self._lock:
            book = self._books.get(book_id)
            if book is None or not book.issued:
                return False
            self._books[book_id] = book.returned()
            return True

    def search(self, query: str) -> List[Book]:
        """Books whose title or author contains ``query``, ignoring case."""
        q = query.strip()
        with self._lock:
            return [b for b in self._books.values() if b.matches(q)]

    # ------------------------- Reporting ------------------------- #
    def stats(self) -> Dict[str, int]:
        with self._lock:
            books = list(self._books.values())
        issued = sum(1 for b in books if b.issued)
        return {
            "total_books": len(books),
            "issued_books": issued,
            "available_books": len(books) - issued,
            "unique_authors": len({b.author.lower() for b in books}),
        }

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)

    # ------------------------- Snapshots ------------------------- #
    def snapshot(self) -> Tuple[int, List[Book]]:
        """Consistent copy of the counter and all books, taken under the lock."""
        with self._lock:
            return self._next_id, list(self._books.values())

    @classmethod
    def from_snapshot(cls, next_id: int, books: Iterable[Book]) -> "Catalog":
        """Rebuild a catalog, rejecting data that breaks its invariants."""
        catalog = cls()
        for book in books:
            if book.id < 1:
                raise ValueError(f"Invalid book id {book.id}.")
            if book.id in catalog._books:
                raise ValueError(f"Duplicate book id {book.id}.")
            if book.issued != bool(book.holder):
                raise ValueError(f"Book {book.id} has inconsistent issue status.")
            catalog._books[book.id] = book
        if any(book_id >= next_id for book_id in catalog._books):
            raise ValueError(f"next_id {next_id} must exceed every book id.")
        if next_id < 1:
            raise ValueError(f"Invalid next_id {next_id}.")
        catalog._next_id = next_id
        return catalog
