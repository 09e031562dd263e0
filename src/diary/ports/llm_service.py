"""Writing assistant interface."""

from typing import Iterator, Protocol


class LLMService(Protocol):
    """
    Text generation used while writing entries.

    Calls may be slow or fail; implementations raise AssistantError.
    """

    def generate(self, prompt: str) -> str:
        """Return the full reply to a prompt."""
        ...

    def stream(self, prompt: str) -> Iterator[str]:
        """Yield reply fragments in order as they arrive."""
        ...
