"""
Single-line prompt input for the chat screen.
"""
from textual.message import Message
from textual.widgets import Input


class InputArea(Input):
    class Submit(Message, bubble=True):
        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    async def on_key(self, event) -> None:
        if event.key == "enter" and not self.disabled:
            event.stop()
            event.prevent_default()
            value = self.value
            self.value = ""
            self.post_message(self.Submit(value))
