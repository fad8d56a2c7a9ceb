"""
Modal single-choice prompt, used for model selection and yes/no confirmation.
"""
from typing import Any, Optional, Sequence

from rich.text import Text
from textual import on
from textual.binding import Binding
from textual.containers import Center, Vertical
from textual.screen import ModalScreen
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option


class ChoiceScreen(ModalScreen[Optional[Any]]):
    """Lists labelled options and dismisses with the chosen value, or None on escape."""
    CSS = """
#panel {
    width: 80%;
    max-width: 100;
    height: auto;
    border: round $secondary;
    padding: 1 2;
}
#choice_options {
    margin-top: 1;
    height: auto;
    max-height: 20;
}
#panel OptionList {
    border: none;
    background: transparent;
}
    """
    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, message: str, options: Sequence[tuple[str, Any]], initial: int = 0) -> None:
        """
        Args:
            message: question shown above the options
            options: ``(label, value)`` pairs in display order
            initial: index highlighted when the screen opens
        """
        super().__init__()
        self.message = message
        self.options = list(options)
        self.initial = initial

    def compose(self):
        yield Center(
            Vertical(
                Static(Text(f"{self.message}\n", style="bold cyan")),
                OptionList(
                    *(Option(label, id=str(index)) for index, (label, _) in enumerate(self.options)),
                    id="choice_options",
                ),
                id="panel",
            )
        )

    def on_mount(self) -> None:
        ol = self.query_one(OptionList)
        ol.focus()
        if self.options:
            ol.highlighted = min(self.initial, len(self.options) - 1)

    @on(OptionList.OptionSelected)
    def on_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        index = int(event.option_id or 0)
        self.dismiss(self.options[index][1])

    def action_cancel(self) -> None:
        self.dismiss(None)


def confirm_screen(message: str, default: bool = False) -> ChoiceScreen:
    return ChoiceScreen(message, [("Yes", True), ("No", False)], initial=0 if default else 1)
