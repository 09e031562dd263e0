"""Persisted state interface."""

from typing import Protocol


class StateRepository(Protocol):
    """Interface for reading and writing one serialized store snapshot."""

    def read(self) -> dict:
        """Read the snapshot. Raises StateNotFoundError if none exists."""
        ...

    def write(self, state: dict) -> None:
        """Replace the stored snapshot with a complete new one."""
        ...
