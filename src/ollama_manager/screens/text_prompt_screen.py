"""
Modal free-text prompt.
"""
from typing import Optional

from rich.text import Text
from textual import on
from textual.binding import Binding
from textual.containers import Center, Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Static


class TextPromptScreen(ModalScreen[Optional[str]]):
    CSS = """
#panel {
    width: 80%;
    max-width: 100;
    height: auto;
    border: round $secondary;
    padding: 1 2;
}
    """
    BINDINGS = [Binding("escape", "cancel", "Cancel", show=False)]

    def __init__(self, message: str, placeholder: str = "") -> None:
        super().__init__()
        self.message = message
        self.placeholder = placeholder

    def compose(self):
        yield Center(
            Vertical(
                Static(Text(self.message, style="bold yellow")),
                Input(placeholder=self.placeholder, id="prompt_input"),
                id="panel",
            )
        )

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    @on(Input.Submitted)
    def on_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)
