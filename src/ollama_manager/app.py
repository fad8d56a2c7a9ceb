"""
Ollama Manager chat front end.
"""

import getpass
import logging
from typing import Optional, Sequence

from textual import work
from textual.app import App, ComposeResult
from textual.widgets import LoadingIndicator

from ollama_manager.config import Settings
from ollama_manager.core.actions import ACTION_OPTIONS, ActionAutomaton, ActionChoice
from ollama_manager.core.backend import ChatBackend
from ollama_manager.core.domain import SessionEvent
from ollama_manager.core.session import ConversationSession, SessionMode, SessionState
from ollama_manager.models import ModelHandle
from ollama_manager.screens import ChoiceScreen
from ollama_manager.widgets import ChatLog, InputArea, SelectionMade, SelectOption

logger = logging.getLogger(__name__)

PLACEHOLDERS = {
    SessionMode.CHAT: "Send a message ('exit' to quit)",
    SessionMode.COMMAND: "Describe the shell command you need",
}


class ChatApp(App[None]):
    CSS = """
#chat_log {
    height: 1fr;
}
#thinking {
    height: 1;
}
#input_selection {
    height: auto;
    max-height: 5;
}
    """

    def __init__(
        self,
        backend: ChatBackend,
        settings: Settings,
        models: Sequence[ModelHandle],
        model: Optional[ModelHandle] = None,
        mode: SessionMode = SessionMode.CHAT,
        automaton: Optional[ActionAutomaton] = None,
    ):
        """
        Args:
            backend: chat client the session sends turns to
            settings: resolved runtime settings (quiet mode is honoured here)
            models: installed models, offered for selection when ``model`` is None
            model: model to chat with, skipping the selection prompt
            mode: general chat or command generation
            automaton: post-reply actions, required for command generation
        """
        super().__init__()
        self.backend = backend
        self.settings = settings
        self.models = list(models)
        self.model = model
        self.mode = mode
        self.automaton = automaton
        self.username = getpass.getuser()

        self.session: Optional[ConversationSession] = None

    def compose(self) -> ComposeResult:
        yield ChatLog(id="chat_log", wrap=True)
        yield LoadingIndicator(id="thinking")
        yield InputArea(id="input_text", placeholder=PLACEHOLDERS[self.mode])
        yield SelectOption(id="input_selection")

    async def on_mount(self) -> None:
        self.query_one('#thinking', LoadingIndicator).display = False
        self._change_input_mode(is_selection=False)
        self.query_one('#input_text', InputArea).disabled = True

        self._startup_flow()

    @work(exclusive=True, group="startup")
    async def _startup_flow(self) -> None:
        """
        Resolve the model, start the session and greet the user.

        Without a preselected model the user picks one; dismissing the picker
        ends the app.
        """
        model = self.model
        if model is None:
            model = await self.push_screen_wait(
                ChoiceScreen("Please select a model to run:", [(m.label, m) for m in self.models])
            )
            if model is None:
                self.exit(return_code=0, message="No model selected.")
                return

        self.model = model
        self.session = ConversationSession(self.backend, model, self.mode, self.automaton)
        self.title = f"ollama-manager - {model.name}"
        logger.info("session started model=%s mode=%s", model.name, self.mode.value)

        chat_log = self.query_one("#chat_log", ChatLog)
        if not self.settings.quiet:
            chat_log.write_notice(f"Starting chat with model '{model.name}'...", style="green")
            if self.mode is SessionMode.CHAT:
                chat_log.write_notice("Type 'exit' to end the chat.")

        self._stop_thinking()

    async def on_input_area_submit(self, message: InputArea.Submit) -> None:
        if self.session is None or self.session.state is not SessionState.AWAITING_INPUT:
            return

        chat_log = self.query_one("#chat_log", ChatLog)
        chat_log.write_user(self.username, message.value)

        self._start_thinking()
        self.run_turn(message.value)

    async def on_selection_made(self, message: SelectionMade) -> None:
        if self.session is None or self.session.state is not SessionState.DECIDING:
            return
        choice = ActionChoice(message.value) if message.value else None
        self.query_one('#input_selection', SelectOption).disabled = True
        self.run_decision(choice)

    def _start_thinking(self) -> None:
        input_text = self.query_one('#input_text', InputArea)
        input_text.disabled = True
        self.query_one('#thinking', LoadingIndicator).display = True

    def _stop_thinking(self) -> None:
        self.query_one('#thinking', LoadingIndicator).display = False
        input_text = self.query_one('#input_text', InputArea)
        input_text.disabled = False
        input_text.focus()

    def _change_input_mode(self, is_selection: bool) -> None:
        input_selection = self.query_one('#input_selection', SelectOption)
        input_text = self.query_one('#input_text', InputArea)

        input_selection.display, input_text.display = is_selection, not is_selection
        if is_selection:
            input_selection.disabled = False
            input_selection.set_selection_options(
                [label for label, _ in ACTION_OPTIONS],
                [choice.value for _, choice in ACTION_OPTIONS],
            )
            input_selection.focus()
        else:
            input_text.focus()

    @work(exclusive=True, group='turn')
    async def run_turn(self, user_input: str) -> None:
        if self.session is None:
            return
        event = await self.session.submit(user_input)
        self._handle_event(event)

    @work(exclusive=True, group='turn')
    async def run_decision(self, choice: Optional[ActionChoice]) -> None:
        if self.session is None:
            return
        event = await self.session.decide(choice)
        self._handle_event(event)

    def _handle_event(self, event: SessionEvent) -> None:
        chat_log = self.query_one("#chat_log", ChatLog)
        type = event['type']

        if type == 'reply':
            chat_log.write_reply(event['model'], event['rendered'])
        elif type == 'error':
            chat_log.write_error(event['message'])
        elif type == 'exit':
            failed = event['return_code'] != 0
            message = event['message'] if failed or not self.settings.quiet else ""
            self.exit(return_code=event['return_code'], message=message or None)
            return

        if self.session is not None and self.session.state is SessionState.DECIDING:
            self.query_one('#thinking', LoadingIndicator).display = False
            self._change_input_mode(is_selection=True)
        else:
            self._change_input_mode(is_selection=False)
            self._stop_thinking()
