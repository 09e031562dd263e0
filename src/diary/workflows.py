"""Shared workflow layer between the CLI and the editing session.

Resolves the store and assistant from config and holds the few operations
that combine them.
"""

import logging

from .adapters.json_file import JsonFileRepository
from .adapters.ollama import OllamaService
from .config import Config
from .core.buffer import LineBuffer
from .core.entry import parse_tags
from .errors import StateNotFoundError
from .ports.llm_service import LLMService
from .store import EntryStore

logger = logging.getLogger(__name__)

TAG_PROMPT = "Generate comma-separated tags for the following content: {content}"


def get_repository(config: Config) -> JsonFileRepository:
    """Resolve the state file from config."""
    return JsonFileRepository(config.entries_path)


def open_store(config: Config) -> EntryStore:
    """
    Load the diary, or start an empty one if none has been saved yet.

    CorruptStateError and StorageIOError propagate.
    """
    repository = get_repository(config)
    try:
        return EntryStore.load(repository)
    except StateNotFoundError:
        logger.info(f"No diary at {repository.path}, starting a new one")
        return EntryStore(repository)


def get_assistant(config: Config) -> OllamaService:
    return OllamaService(
        url=config.assistant_url,
        model=config.assistant_model,
        timeout=config.assistant_timeout,
    )


def insert_generated(buffer: LineBuffer, assistant: LLMService, prompt: str) -> str:
    """
    Ask the assistant and insert its answer at the cursor.

    If generation fails the error propagates and the buffer is untouched.
    """
    text = assistant.generate(prompt)
    buffer.insert_text(text)
    return text


def suggest_tags(assistant: LLMService, content: str) -> list[str]:
    """Ask the assistant for tags describing content."""
    reply = assistant.generate(TAG_PROMPT.format(content=content)).strip()
    return [tag for tag in parse_tags(reply) if tag]
