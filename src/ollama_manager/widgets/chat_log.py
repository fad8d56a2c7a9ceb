"""
Scrolling transcript of the conversation.
"""
from rich.text import Text
from textual.widgets import RichLog


class ChatLog(RichLog):
    def write_user(self, name: str, text: str) -> None:
        self.write(Text.assemble((f"{name}: ", "bold blue"), text))

    def write_reply(self, model: str, rendered: Text) -> None:
        self.write(Text.assemble((f"{model}: ", "bold green"), rendered))

    def write_notice(self, text: str, style: str = "yellow") -> None:
        self.write(Text(text, style=style))

    def write_error(self, text: str) -> None:
        self.write(Text(text, style="bold red"))
