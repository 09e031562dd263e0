"""Ports - interfaces/protocols for external dependencies."""

from .state_repo import StateRepository
from .llm_service import LLMService

__all__ = [
    "StateRepository",
    "LLMService",
]
