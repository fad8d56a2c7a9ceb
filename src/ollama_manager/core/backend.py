"""
Chat client for the Ollama inference backend.
"""
import asyncio
import logging
from typing import Any, Callable, Optional, Protocol

import httpx
from langchain_core.language_models import BaseChatModel
from langchain_ollama import ChatOllama
from ollama import ResponseError

from ollama_manager.errors import BackendError
from ollama_manager.models import ConversationHistory

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (ResponseError, httpx.HTTPError, OSError, ValueError, asyncio.TimeoutError)


class ChatBackend(Protocol):
    async def chat(self, model: str, history: ConversationHistory) -> str: ...


def build_llm(model: str, host: str, temperature: Optional[float] = None) -> BaseChatModel:
    kwargs: dict[str, Any] = {"model": model, "base_url": host}
    if temperature is not None:
        kwargs["temperature"] = temperature
    return ChatOllama(**kwargs)


class OllamaBackend:
    """
    Sends the full conversation to Ollama and returns the reply text.

    The reply is awaited as one unit; nothing is rendered incrementally.
    """

    def __init__(
        self,
        host: str,
        timeout: Optional[float] = None,
        llm_factory: Callable[[str, str], BaseChatModel] = build_llm,
    ):
        self.host = host
        self.timeout = timeout
        self._llm_factory = llm_factory
        self._llms: dict[str, BaseChatModel] = {}

    def _llm(self, model: str) -> BaseChatModel:
        if model not in self._llms:
            self._llms[model] = self._llm_factory(model, self.host)
        return self._llms[model]

    async def chat(self, model: str, history: ConversationHistory) -> str:
        messages = history.to_langchain()
        logger.debug("chat request model=%s turns=%d", model, len(messages))
        try:
            call = self._llm(model).ainvoke(messages, stream=False)
            if self.timeout is not None:
                reply = await asyncio.wait_for(call, timeout=self.timeout)
            else:
                reply = await call
        except TRANSPORT_ERRORS as exc:
            logger.warning("chat request to %s failed: %s", self.host, exc)
            raise BackendError(f"Error communicating with the Ollama API: {exc}") from exc

        content = getattr(reply, "content", None)
        if not isinstance(content, str):
            logger.warning("malformed chat reply from %s: %r", self.host, reply)
            raise BackendError("Malformed response from the Ollama API.")
        return content
