"""Entry store - the authoritative collection of diary entries."""

import logging
from datetime import datetime

from .core.entry import Entry
from .errors import CorruptStateError
from .ports.state_repo import StateRepository

logger = logging.getLogger(__name__)


class EntryStore:
    """
    The entry collection plus its id counter.

    Entries go in and come out as copies, so only the store changes them.

    Ids are assigned here and never reused. Every mutation writes a full
    snapshot through the repository before returning; if that write fails
    the StorageIOError propagates and the in-memory change stays applied.
    """

    def __init__(
        self,
        repository: StateRepository,
        entries: list[Entry] | None = None,
        next_id: int = 1,
    ):
        self.repository = repository
        self._entries: list[Entry] = [e.copy() for e in entries or []]
        self.next_id = next_id

    def __len__(self) -> int:
        return len(self._entries)

    def create(self, content: str, tags: list[str]) -> Entry:
        """Store a new entry with a fresh id and the current time."""
        entry = Entry(
            id=self.next_id,
            created_at=datetime.now().astimezone(),
            content=content,
            tags=list(tags),
        )
        self.next_id += 1
        self._entries.append(entry)
        logger.debug(f"Created entry {entry.id}")
        self.save()
        return entry.copy()

    def update(self, entry: Entry) -> bool:
        """Replace the stored entry with the same id. Returns False if there is none."""
        for i, existing in enumerate(self._entries):
            if existing.id == entry.id:
                self._entries[i] = entry.copy()
                logger.debug(f"Updated entry {entry.id}")
                self.save()
                return True
        logger.debug(f"Update ignored, no entry {entry.id}")
        return False

    def delete(self, entry_id: int) -> bool:
        """Remove the entry with this id. Returns False if there is none."""
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            logger.debug(f"Delete ignored, no entry {entry_id}")
            return False
        self._entries = remaining
        logger.debug(f"Deleted entry {entry_id}")
        self.save()
        return True

    def get(self, entry_id: int) -> Entry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry.copy()
        return None

    def search(self, query: str) -> list[Entry]:
        """Entries whose content or tags contain query, ignoring case."""
        return [e.copy() for e in self._entries if e.matches(query)]

    def list(self) -> list[Entry]:
        """All entries, oldest first."""
        return [e.copy() for e in self._entries]

    # ============== Persistence ==============

    def to_dict(self) -> dict:
        return {
            "entries": [e.to_dict() for e in self._entries],
            "next_id": self.next_id,
        }

    @classmethod
    def from_dict(cls, data: dict, repository: StateRepository) -> "EntryStore":
        """Rebuild a store from a snapshot, validating its invariants."""
        raw_entries = data.get("entries")
        next_id = data.get("next_id")
        if not isinstance(raw_entries, list):
            raise CorruptStateError("Snapshot is missing its entries list")
        if not isinstance(next_id, int) or isinstance(next_id, bool):
            raise CorruptStateError(f"Invalid next_id: {next_id!r}")

        entries = [Entry.from_dict(item) for item in raw_entries]

        seen: set[int] = set()
        for entry in entries:
            if entry.id in seen:
                raise CorruptStateError(f"Duplicate entry id {entry.id}")
            seen.add(entry.id)

        floor = max(seen, default=0) + 1
        if next_id < floor:
            logger.warning(f"next_id {next_id} is not above stored ids, using {floor}")
            next_id = floor

        return cls(repository, entries=entries, next_id=next_id)

    def save(self) -> None:
        """Persist the complete snapshot."""
        self.repository.write(self.to_dict())

    @classmethod
    def load(cls, repository: StateRepository) -> "EntryStore":
        """
        Load a store from its repository.

        Raises StateNotFoundError when nothing has been saved yet,
        CorruptStateError for unreadable data and StorageIOError for
        other read failures.
        """
        store = cls.from_dict(repository.read(), repository)
        logger.debug(f"Loaded {len(store)} entries, next id {store.next_id}")
        return store
