"""
Data model for lin-help.

An Entry is one saved (command, description) pair. A Collection is the
whole document persisted by a storage backend. Ids come from an
IdAllocator seeded from the highest id in the loaded Collection, so the
persisted Collection is the only source of truth for id continuity.
"""

import json
import logging
import threading
from typing import TYPE_CHECKING, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from linhelp.errors import DataFormatError, IdExhaustedError

if TYPE_CHECKING:
    from linhelp.storage import StorageBackend

logger = logging.getLogger(__name__)

FIRST_ID = 1
MAX_ID = 2**32 - 1


class IdAllocator:
    """Hands out the next unused entry id. Never goes backwards."""

    def __init__(self, start: int = FIRST_ID):
        self._next = start
        self._lock = threading.Lock()

    def seed(self, max_existing_id: int) -> None:
        """Continue numbering after the highest id already stored."""
        with self._lock:
            self._next = max(self._next, max_existing_id + 1)
        logger.debug(f"id allocator seeded from {max_existing_id}, next id {self.peek()}")

    def next(self) -> int:
        """Return the next id and advance the counter by one."""
        with self._lock:
            if self._next > MAX_ID:
                raise IdExhaustedError(f"no ids left (limit {MAX_ID})")
            value = self._next
            self._next += 1
            return value

    def peek(self) -> int:
        """Return the id the next call to next() would hand out."""
        with self._lock:
            return self._next


class Entry(BaseModel):
    """A saved shell command."""

    model_config = ConfigDict(strict=True)

    id: int = Field(ge=0, le=MAX_ID, description="Unique within a collection")
    command: str = Field(description="Shell command to remember")
    description: str = Field(description="Human-readable annotation, may be empty")

    @classmethod
    def create(cls, allocator: IdAllocator, command: str, description: str) -> "Entry":
        """Build a new entry with a freshly allocated id. Text is kept verbatim."""
        return cls(id=allocator.next(), command=command, description=description)


class Collection(BaseModel):
    """Ordered set of entries, in insertion order."""

    model_config = ConfigDict(strict=True)

    entries: list[Entry]

    @classmethod
    def empty(cls) -> "Collection":
        return cls(entries=[])

    @classmethod
    def parse(cls, raw: bytes) -> "Collection":
        """
        Parse a persisted entries document.

        Empty or whitespace-only content is an empty collection.
        Anything else must be a valid document with unique ids, otherwise
        DataFormatError is raised and nothing is salvaged.
        """
        if not raw.strip():
            return cls.empty()

        try:
            collection = cls.model_validate_json(raw, strict=True)
        except (UnicodeDecodeError, ValidationError) as e:
            raise DataFormatError(f"unable to read entries: {e}") from e

        seen: set[int] = set()
        for entry in collection.entries:
            if entry.id in seen:
                raise DataFormatError(f"unable to read entries: duplicate id {entry.id}")
            seen.add(entry.id)

        return collection

    @classmethod
    def load(cls, backend: "StorageBackend", allocator: IdAllocator) -> "Collection":
        """
        Load the collection from a backend and seed the allocator from it.

        Entries are sorted by id as part of loading.
        """
        collection = cls.parse(backend.load())
        collection.entries.sort(key=lambda entry: entry.id)

        if collection.entries:
            allocator.seed(collection.entries[-1].id)

        logger.info(f"loaded {len(collection.entries)} entries from {backend.describe()}")
        return collection

    def serialize(self) -> bytes:
        """Pretty-printed JSON document, UTF-8 encoded."""
        text = json.dumps(self.model_dump(), indent=2, ensure_ascii=False)
        return (text + "\n").encode("utf-8")

    def append(self, entry: Entry) -> None:
        self.entries.append(entry)

    def filter(self, predicate: Callable[[Entry], bool]) -> list[Entry]:
        """Entries for which predicate holds, in original order."""
        return [entry for entry in self.entries if predicate(entry)]

    def all(self) -> list[Entry]:
        return list(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def matches(entry: Entry, term: str) -> bool:
    """Case-sensitive substring match on command or description."""
    return term in entry.command or term in entry.description
