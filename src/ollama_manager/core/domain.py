"""
Events the conversation session hands back to its front end.
"""

from typing import Literal, TypedDict, Union

from rich.text import Text


class ReplyEvent(TypedDict):
    type: Literal['reply']
    model: str
    content: str
    rendered: Text


class ErrorEvent(TypedDict):
    type: Literal['error']
    message: str


class PromptEvent(TypedDict):
    type: Literal['prompt']


class ExitEvent(TypedDict):
    type: Literal['exit']
    return_code: int
    message: str


SessionEvent = Union[ReplyEvent, ErrorEvent, PromptEvent, ExitEvent]
