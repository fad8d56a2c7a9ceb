"""
Conversation session state machine.

    AWAITING_INPUT --submit--> PROCESSING --reply--> AWAITING_INPUT  (chat)
                                          --reply--> DECIDING        (command)
                                          --error--> AWAITING_INPUT
    AWAITING_INPUT --"exit"--> TERMINATED                            (chat)
    DECIDING --regenerate--> AWAITING_INPUT
    DECIDING --copy/cancel--> TERMINATED

Only one turn is ever in flight: submit() is refused outside AWAITING_INPUT.
"""
import logging
from enum import Enum
from typing import Callable, Optional

from rich.text import Text

from ollama_manager.core.actions import ActionAutomaton, ActionChoice
from ollama_manager.core.backend import ChatBackend
from ollama_manager.core.domain import ErrorEvent, ExitEvent, PromptEvent, ReplyEvent, SessionEvent
from ollama_manager.core.formatter import format_response
from ollama_manager.core.turn_cycle import execute_turn
from ollama_manager.errors import BackendError, SessionStateError
from ollama_manager.models import ConversationHistory, ModelHandle

logger = logging.getLogger(__name__)

TERMINATION_TOKEN = "exit"


class SessionState(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    PROCESSING = "processing"
    DECIDING = "deciding"
    TERMINATED = "terminated"


class SessionMode(str, Enum):
    CHAT = "chat"
    COMMAND = "command"


def is_termination_token(text: str) -> bool:
    return text.strip().lower() == TERMINATION_TOKEN


class ConversationSession:
    def __init__(
        self,
        backend: ChatBackend,
        model: ModelHandle,
        mode: SessionMode = SessionMode.CHAT,
        automaton: Optional[ActionAutomaton] = None,
        render: Callable[[str], Text] = format_response,
    ):
        if mode is SessionMode.COMMAND and automaton is None:
            raise ValueError("command sessions need an ActionAutomaton")
        self.backend = backend
        self.model = model
        self.mode = mode
        self.automaton = automaton
        self.render = render

        self.history = ConversationHistory()
        self.state = SessionState.AWAITING_INPUT
        self.last_reply: Optional[str] = None
        self.exit_code: Optional[int] = None

    def _transition(self, new_state: SessionState) -> None:
        logger.debug("session %s -> %s", self.state.value, new_state.value)
        self.state = new_state

    def _terminate(self, return_code: int, message: str = "") -> ExitEvent:
        self._transition(SessionState.TERMINATED)
        self.exit_code = return_code
        return {'type': 'exit', 'return_code': return_code, 'message': message}

    def _require(self, expected: SessionState, operation: str) -> None:
        if self.state is not expected:
            raise SessionStateError(f"cannot {operation} while {self.state.value}")

    async def submit(self, text: str) -> SessionEvent:
        """
        Run one turn for ``text``.

        Backend failures come back as an ErrorEvent; the user turn stays in
        the history and the session waits for the next line.
        """
        self._require(SessionState.AWAITING_INPUT, "submit input")

        if self.mode is SessionMode.CHAT and is_termination_token(text):
            return self._terminate(0, "Exiting chat.")

        self._transition(SessionState.PROCESSING)
        try:
            result = await execute_turn(self.history, text, self.model, self.backend, self.render)
        except BackendError as exc:
            self._transition(SessionState.AWAITING_INPUT)
            error: ErrorEvent = {'type': 'error', 'message': str(exc)}
            return error

        self.last_reply = result.reply
        if self.mode is SessionMode.COMMAND:
            self._transition(SessionState.DECIDING)
        else:
            self._transition(SessionState.AWAITING_INPUT)
        reply: ReplyEvent = {
            'type': 'reply',
            'model': self.model.name,
            'content': result.reply,
            'rendered': result.rendered,
        }
        return reply

    async def decide(self, choice: Optional[ActionChoice]) -> SessionEvent:
        """Apply the post-reply action. None means the prompt was dismissed."""
        self._require(SessionState.DECIDING, "decide")
        if self.automaton is None:
            raise SessionStateError("chat sessions have no post-reply actions")

        outcome = await self.automaton.resolve(choice, self.last_reply or "")
        if outcome.terminate:
            return self._terminate(outcome.return_code, outcome.message)

        self._transition(SessionState.AWAITING_INPUT)
        prompt: PromptEvent = {'type': 'prompt'}
        return prompt
