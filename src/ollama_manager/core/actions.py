"""
Post-reply actions for command-generation sessions.

After each reply the user picks regenerate, copy or cancel. Copy puts the
bare command on the clipboard and ends the session.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from ollama_manager.core.clipboard import copy_to_clipboard
from ollama_manager.errors import ClipboardError

logger = logging.getLogger(__name__)

FENCE_MARKER_RE = re.compile(r"```[^\s`]*")
LINE_BREAK_RE = re.compile(r"\s*\n\s*")


class ActionChoice(str, Enum):
    REGENERATE = "regenerate"
    COPY = "copy"
    CANCEL = "cancel"


ACTION_OPTIONS: list[tuple[str, ActionChoice]] = [
    ("1. Regenerate", ActionChoice.REGENERATE),
    ("2. Copy to clipboard", ActionChoice.COPY),
    ("3. Cancel", ActionChoice.CANCEL),
]


@dataclass(frozen=True)
class ActionOutcome:
    terminate: bool
    return_code: int = 0
    message: str = ""


def sanitize_command(reply: str) -> str:
    """Strip code fences and language tags, fold the reply onto one line."""
    without_fences = FENCE_MARKER_RE.sub("", reply)
    return LINE_BREAK_RE.sub(" ", without_fences).strip()


Copier = Callable[[str, Optional[str]], Awaitable[None]]


class ActionAutomaton:
    def __init__(self, clipboard_command: Optional[str], copier: Copier = copy_to_clipboard):
        self.clipboard_command = clipboard_command
        self._copier = copier

    async def resolve(self, choice: Optional[ActionChoice], reply: str) -> ActionOutcome:
        """
        Carry out the chosen action for ``reply``.

        Args:
            choice: the user's pick; None (prompt closed) counts as cancel
            reply: the raw, unformatted model reply
        """
        if choice is None:
            choice = ActionChoice.CANCEL
        choice = ActionChoice(choice)
        logger.debug("action chosen: %s", choice.value)

        if choice is ActionChoice.REGENERATE:
            return ActionOutcome(terminate=False)

        if choice is ActionChoice.COPY:
            command = sanitize_command(reply)
            try:
                await self._copier(command, self.clipboard_command)
            except ClipboardError as exc:
                logger.warning("copy failed: %s", exc)
                return ActionOutcome(terminate=True, return_code=1, message=f"Error copying to clipboard: {exc}")
            return ActionOutcome(terminate=True, return_code=0, message=f"Copied to clipboard: {command}")

        return ActionOutcome(terminate=True, return_code=0, message="Canceled.")
