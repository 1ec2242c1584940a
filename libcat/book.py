from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Book:
    """A single book in the catalog and its issue status."""

    id: int
    title: str
    author: str
    issued: bool = False
    holder: str | None = None

    def __str__(self) -> str:
        status = f"(Issued to: {self.holder})" if self.issued else "(Available)"
        return f"[{self.id}] {self.title} by {self.author} {status}"

    def issued_to(self, person: str) -> "Book":
        return replace(self, issued=True, holder=person)

    def returned(self) -> "Book":
        return replace(self, issued=False, holder=None)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over title or author."""
        q = query.lower()
        return q in self.title.lower() or q in self.author.lower()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "issued": self.issued,
            "holder": self.holder,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        # An empty holder string is treated the same as a missing one
        holder = data.get("holder") or None
        return Book(
            id=int(data["id"]),
            title=data["title"],
            author=data["author"],
            issued=bool(data.get("issued", False)),
            holder=holder,
        )
