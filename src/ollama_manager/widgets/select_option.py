from typing import Optional, Sequence

from textual import on
from textual.binding import Binding
from textual.message import Message
from textual.widgets import OptionList
from textual.widgets.option_list import Option


class SelectionMade(Message):
    """A choice was picked; ``value`` is None when the list was dismissed."""

    def __init__(self, label: str, value: Optional[str]) -> None:
        super().__init__()
        self.label = label
        self.value = value


class SelectOption(OptionList):
    BINDINGS = [Binding("escape", "dismiss", "Cancel", show=False)]

    def __init__(self, id: str, labels: Sequence[str] = ()) -> None:
        super().__init__(id=id)
        if labels:
            self.add_options(Option(label) for label in labels)

    def set_selection_options(self, labels: Sequence[str], ids: Optional[Sequence[str]] = None) -> None:
        self.clear_options()
        if ids:
            self.add_options(Option(label, id) for label, id in zip(labels, ids))
        else:
            self.add_options(Option(label) for label in labels)
        self.highlighted = 0

    @on(OptionList.OptionSelected)
    def on_option_selected(self, event: OptionList.OptionSelected) -> None:
        opt = event.option
        label = str(opt.prompt)
        value = opt.id or label

        self.post_message(SelectionMade(label, value))
        event.stop()

    def action_dismiss(self) -> None:
        self.post_message(SelectionMade("", None))
