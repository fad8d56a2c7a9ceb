"""
Interactive prompts for the management commands.

Each prompt runs a short-lived inline Textual app around one of the modal
screens and returns the user's answer, or None when the prompt was dismissed.
Callers treat None as cancellation.
"""
from typing import Any, Optional, Sequence

from textual.app import App
from textual.screen import Screen

from ollama_manager.screens import ChoiceScreen, TextPromptScreen, confirm_screen


class PromptApp(App[Any]):
    """Shows a single screen and exits with whatever it dismisses with."""

    def __init__(self, screen: Screen) -> None:
        super().__init__()
        self._prompt_screen = screen

    def on_mount(self) -> None:
        self.push_screen(self._prompt_screen, callback=self.exit)


class Prompter:
    def __init__(self, inline: bool = True) -> None:
        self.inline = inline

    def _ask(self, screen: Screen) -> Any:
        return PromptApp(screen).run(inline=self.inline)

    def select(self, message: str, options: Sequence[tuple[str, Any]]) -> Optional[Any]:
        return self._ask(ChoiceScreen(message, options))

    def confirm(self, message: str, default: bool = False) -> Optional[bool]:
        return self._ask(confirm_screen(message, default))

    def text(self, message: str) -> Optional[str]:
        return self._ask(TextPromptScreen(message))
