"""Adapters - I/O implementations of ports."""

from .json_file import JsonFileRepository
from .ollama import OllamaService

__all__ = [
    "JsonFileRepository",
    "OllamaService",
]
