"""
Conversation data models.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationTurn:
    """
    A single user message or assistant reply.
    """
    role: Role
    content: str


@dataclass
class ConversationHistory:
    """
    Every turn exchanged so far, in the order it happened.

    The backend keeps no state between calls, so the whole history is replayed
    on every request. Turns are only ever appended.
    """
    _turns: list[ConversationTurn] = field(default_factory=list)

    def append(self, role: Role, content: str) -> ConversationTurn:
        turn = ConversationTurn(role=Role(role), content=content)
        self._turns.append(turn)
        return turn

    def append_user(self, content: str) -> ConversationTurn:
        return self.append(Role.USER, content)

    def append_assistant(self, content: str) -> ConversationTurn:
        return self.append(Role.ASSISTANT, content)

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    def as_messages(self) -> list[dict[str, str]]:
        return [{"role": turn.role.value, "content": turn.content} for turn in self._turns]

    def to_langchain(self) -> list[BaseMessage]:
        messages: list[BaseMessage] = []
        for turn in self._turns:
            if turn.role is Role.USER:
                messages.append(HumanMessage(content=turn.content))
            else:
                messages.append(AIMessage(content=turn.content))
        return messages

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(self._turns)

    def __len__(self) -> int:
        return len(self._turns)
