"""Snapshot persistence for the catalog.

The whole catalog is written as one JSON document and replaced atomically on
every save. Loading never raises for a missing or damaged file: the caller gets
an empty catalog back together with a status telling the two cases apart.
"""
from __future__ import annotations

import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import List, Literal, NamedTuple, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from libcat.book import Book
from libcat.catalog import Catalog

logger = logging.getLogger(__name__)

SNAPSHOT_FORMAT = "libcat-catalog"
SNAPSHOT_VERSION = 1

PathLike = Union[str, os.PathLike]


class StorageError(Exception):
    """Raised when a snapshot cannot be written."""


class BookModel(BaseModel):
    id: int = Field(ge=1)
    title: str
    author: str
    issued: bool = False
    holder: Optional[str] = None


class CatalogSnapshot(BaseModel):
    format: Literal["libcat-catalog"]
    version: Literal[1]
    next_id: int = Field(ge=1)
    books: List[BookModel] = Field(default_factory=list)


class LoadStatus(str, Enum):
    LOADED = "loaded"
    MISSING = "missing"
    CORRUPT = "corrupt"


class LoadResult(NamedTuple):
    catalog: Catalog
    status: LoadStatus
    error: Optional[str] = None


def to_snapshot(catalog: Catalog) -> CatalogSnapshot:
    next_id, books = catalog.snapshot()
    return CatalogSnapshot(
        format=SNAPSHOT_FORMAT,
        version=SNAPSHOT_VERSION,
        next_id=next_id,
        books=[BookModel(**b.to_dict()) for b in books],
    )


def from_snapshot(snapshot: CatalogSnapshot) -> Catalog:
    books = [Book.from_dict(m.model_dump()) for m in snapshot.books]
    return Catalog.from_snapshot(snapshot.next_id, books)


def save(catalog: Catalog, location: PathLike) -> None:
    """Write the catalog to ``location``, replacing any previous snapshot.

    The document goes to a temporary file in the same directory first and is
    then moved over the target, so readers see either the old or the new file.
    """
    path = Path(location)
    payload = to_snapshot(catalog).model_dump_json(indent=2)

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        logger.warning(f"Could not save catalog to {path}: {e}")
        raise StorageError(f"could not write {path}: {e}") from e
    finally:
        if tmp_name is not None:
            try:
                os.remove(tmp_name)
            except OSError:
                pass
    logger.info(f"Catalog saved to {path} ({len(catalog)} books)")


def load(location: PathLike) -> LoadResult:
    """Read a catalog from ``location``.

    - missing file: empty catalog, ``LoadStatus.MISSING``
    - unreadable or invalid snapshot: empty catalog, ``LoadStatus.CORRUPT``
    """
    path = Path(location)
    if not path.exists():
        logger.info(f"No snapshot at {path}, starting with an empty catalog")
        return LoadResult(Catalog(), LoadStatus.MISSING)

    try:
        raw = path.read_bytes()
        catalog = from_snapshot(CatalogSnapshot.model_validate_json(raw))
    except (OSError, ValidationError, ValueError) as e:
        logger.warning(f"Snapshot {path} could not be loaded: {e}")
        return LoadResult(Catalog(), LoadStatus.CORRUPT, str(e))

    logger.info(f"Catalog loaded from {path} ({len(catalog)} books)")
    return LoadResult(catalog, LoadStatus.LOADED)
