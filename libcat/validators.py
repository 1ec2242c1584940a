import re
from typing import Optional

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


class TextValidator:
    """Blank-text checks applied before input reaches the catalog."""

    @staticmethod
    def is_blank(text: Optional[str]) -> bool:
        return text is None or not text.strip()

    @staticmethod
    def validate_title(title: Optional[str]) -> bool:
        return not TextValidator.is_blank(title)

    @staticmethod
    def validate_author(author: Optional[str]) -> bool:
        return not TextValidator.is_blank(author)

    @staticmethod
    def validate_person(person: Optional[str]) -> bool:
        return not TextValidator.is_blank(person)

    @staticmethod
    def validate_query(query: Optional[str]) -> bool:
        return not TextValidator.is_blank(query)


class IdValidator:
    """Parses book ids typed at the prompt."""

    @staticmethod
    def parse_id(raw: Optional[str]) -> Optional[int]:
        """Return the integer id, or None if ``raw`` is not a whole number."""
        if raw is None:
            return None
        text = raw.strip()
        # Optional sign, ASCII digits only
        if not _ID_PATTERN.fullmatch(text):
            return None
        return int(text)
