"""
Command service for lin-help.

Runs one verb per invocation: load the collection once, then add,
search or list. Only add persists, and it saves the whole document.
"""

import logging

from linhelp.errors import UsageError
from linhelp.model import Collection, Entry, IdAllocator, matches
from linhelp.storage import StorageBackend

logger = logging.getLogger(__name__)

# verb -> number of positional arguments
VERBS = {
    "add": 2,
    "search": 1,
    "list": 0,
}


class CommandService:
    """Owns the collection and id allocator for a single invocation."""

    def __init__(self, backend: StorageBackend, allocator: IdAllocator | None = None):
        self.backend = backend
        self.allocator = allocator or IdAllocator()
        self._collection: Collection | None = None

    @property
    def collection(self) -> Collection:
        return self.load()

    def load(self) -> Collection:
        """Load the collection from the backend. Happens at most once."""
        if self._collection is None:
            self._collection = Collection.load(self.backend, self.allocator)
        return self._collection

    def add(self, command: str, description: str) -> Entry:
        """Append a new entry and save the updated collection."""
        collection = self.load()
        entry = Entry.create(self.allocator, command, description)
        collection.append(entry)
        self.backend.save(collection.serialize())

        logger.info(f"successfully saved entry {entry.id}")
        return entry

    def search(self, term: str) -> list[Entry]:
        """Entries whose command or description contains term."""
        return self.load().filter(lambda entry: matches(entry, term))

    def list_entries(self) -> list[Entry]:
        return self.load().all()

    def execute(self, verb: str, args: list[str]) -> list[Entry]:
        """
        Dispatch a parsed verb.

        The verb and its arguments are checked before the backend is
        touched. Returns the entries to display; for add, the new entry.
        """
        if verb not in VERBS:
            raise UsageError(f"unable to recognize subcommand: {verb}")

        expected = VERBS[verb]
        if len(args) != expected:
            raise UsageError(f"{verb} takes {expected} argument(s), got {len(args)}")

        if verb == "add":
            return [self.add(args[0], args[1])]
        if verb == "search":
            return self.search(args[0])
        return self.list_entries()
