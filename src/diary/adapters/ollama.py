"""Ollama adapter - HTTP client for the local chat API."""

import json
import logging
from typing import Iterator

import requests

from diary.errors import AssistantError

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:11434/api/chat"
DEFAULT_MODEL = "llama3.2"


class OllamaService:
    """
    Ollama chat adapter.

    Implements LLMService protocol. Sends one user message per prompt and
    reads the newline-delimited JSON stream the server answers with.
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        model: str = DEFAULT_MODEL,
        timeout: int = 120,
    ):
        self.url = url
        self.model = model
        self.timeout = timeout
        self._session = requests.Session()

    def generate(self, prompt: str) -> str:
        """Generate text from a prompt. Returns complete response."""
        return "".join(self.stream(prompt))

    def stream(self, prompt: str) -> Iterator[str]:
        """Stream text generation. Yields chunks as they arrive."""
        body = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": True,
        }
        try:
            resp = self._session.post(self.url, json=body, stream=True, timeout=self.timeout)
        except requests.Timeout:
            raise AssistantError(f"Assistant timed out after {self.timeout}s")
        except requests.RequestException as e:
            logger.error(f"Assistant request failed: {e}")
            raise AssistantError(f"Could not reach assistant at {self.url}: {e}") from e

        with resp:
            if resp.status_code != 200:
                logger.error(f"Assistant returned {resp.status_code}: {resp.text}")
                raise AssistantError(f"Assistant returned HTTP {resp.status_code}")

            try:
                for line in resp.iter_lines(decode_unicode=True):
                    if not line:
                        continue
                    try:
                        chunk = json.loads(line)
                    except json.JSONDecodeError:
                        logger.debug(f"Skipping non-JSON chunk: {line!r}")
                        continue
                    if not isinstance(chunk, dict):
                        raise AssistantError(f"Unexpected assistant payload: {line!r}")
                    if "error" in chunk:
                        raise AssistantError(f"Assistant error: {chunk['error']}")
                    message = chunk.get("message") or {}
                    content = message.get("content") if isinstance(message, dict) else None
                    if not isinstance(message, dict) or not isinstance(content, (str, type(None))):
                        raise AssistantError(f"Unexpected assistant payload: {line!r}")
                    if content:
                        yield content
                    if chunk.get("done"):
                        break
            except requests.RequestException as e:
                logger.error(f"Assistant stream interrupted: {e}")
                raise AssistantError(f"Assistant stream interrupted: {e}") from e
