"""Pure entry domain logic - no I/O dependencies."""

from dataclasses import dataclass, field, replace
from datetime import datetime

from diary.errors import CorruptStateError


def parse_tags(raw: str) -> list[str]:
    """
    Split a raw comma-separated tag string.

    Every piece is trimmed and kept, so an empty string gives [""].
    """
    return [tag.strip() for tag in raw.split(",")]


def format_tags(tags: list[str]) -> str:
    """Join tags back into an editable raw string."""
    return ", ".join(tags)


@dataclass
class Entry:
    """A dated diary entry."""

    id: int
    created_at: datetime
    content: str
    tags: list[str] = field(default_factory=list)

    def copy(self) -> "Entry":
        """Independent copy; the tag list is not shared."""
        return replace(self, tags=list(self.tags))

    @property
    def title(self) -> str:
        """First line of the content."""
        return self.content.split("\n", 1)[0]

    def preview(self, width: int = 50) -> str:
        """One-line preview for list views."""
        title = self.title
        if len(title) <= width and "\n" not in self.content:
            return title
        return title[: max(width - 3, 0)] + "..."

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on content or any tag."""
        needle = query.lower()
        if needle in self.content.lower():
            return True
        return any(needle in tag.lower() for tag in self.tags)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "content": self.content,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        """Build an entry from its serialized form."""
        if not isinstance(data, dict):
            raise CorruptStateError(f"Entry record is not an object: {data!r}")
        try:
            entry_id = data["id"]
            created_at = datetime.fromisoformat(data["created_at"])
            content = data["content"]
            tags = data["tags"]
        except KeyError as e:
            raise CorruptStateError(f"Entry record missing field {e}") from e
        except (TypeError, ValueError) as e:
            raise CorruptStateError(f"Invalid entry timestamp: {e}") from e

        if not isinstance(entry_id, int) or isinstance(entry_id, bool) or entry_id < 1:
            raise CorruptStateError(f"Invalid entry id: {entry_id!r}")
        if not isinstance(content, str):
            raise CorruptStateError(f"Entry {entry_id} content is not text")
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise CorruptStateError(f"Entry {entry_id} tags are not a list of strings")

        return cls(id=entry_id, created_at=created_at, content=content, tags=list(tags))
