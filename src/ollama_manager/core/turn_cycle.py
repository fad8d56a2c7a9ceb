"""
One request/response exchange with the backend.
"""
import logging
from dataclasses import dataclass
from typing import Callable

from rich.text import Text

from ollama_manager.core.backend import ChatBackend
from ollama_manager.core.formatter import format_response
from ollama_manager.models import ConversationHistory, ModelHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnResult:
    history: ConversationHistory
    reply: str
    rendered: Text


async def execute_turn(
    history: ConversationHistory,
    user_input: str,
    model: ModelHandle,
    backend: ChatBackend,
    render: Callable[[str], Text] = format_response,
) -> TurnResult:
    """
    Append the user turn, ask the backend, append and render the reply.

    The user turn is appended before the call and stays in the history when
    the call fails, so a retry still sends it.

    Raises:
        BackendError: the backend call could not complete
    """
    history.append_user(user_input)
    reply = (await backend.chat(model.name, history)).strip()
    history.append_assistant(reply)
    logger.debug("turn complete model=%s history=%d", model.name, len(history))
    return TurnResult(history=history, reply=reply, rendered=render(reply))
