"""Error types shared across the diary package."""


class DiaryError(Exception):
    """Base class for diary errors."""

    pass


class StateNotFoundError(DiaryError):
    """Raised when the persisted state file does not exist."""

    pass


class CorruptStateError(DiaryError):
    """Raised when persisted state cannot be parsed or is structurally invalid."""

    pass


class StorageIOError(DiaryError):
    """Raised when reading or writing persisted state fails."""

    pass


class AssistantError(DiaryError):
    """Raised when the text-generation assistant fails."""

    pass
