"""
Command-line interface for ollama-manager.

Global options are collected on the group and resolved into a Settings value
that every subcommand receives through the click context.
"""
import functools
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

import click

from ollama_manager import __version__, manager
from ollama_manager.app import ChatApp
from ollama_manager.config import Settings, load_settings
from ollama_manager.console import Reporter
from ollama_manager.core.actions import ActionAutomaton
from ollama_manager.core.backend import OllamaBackend
from ollama_manager.core.clipboard import copy_to_clipboard, default_clipboard_command
from ollama_manager.core.inventory import ModelInventory
from ollama_manager.core.session import SessionMode
from ollama_manager.errors import OllamaManagerError, SelectionCancelled
from ollama_manager.logging_utils import configure_logging
from ollama_manager.prompts import Prompter

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CliContext:
    settings: Settings
    model: Optional[str] = None
    reporter: Reporter = field(default_factory=Reporter)
    inventory_factory: Callable[[str], ModelInventory] = ModelInventory
    prompter: Prompter = field(default_factory=Prompter)

    @property
    def inventory(self) -> ModelInventory:
        return self.inventory_factory(self.settings.host)


def _guarded(ctx: CliContext, action: Callable[[], T]) -> T:
    """Run ``action``, mapping package errors to messages and exit codes."""
    try:
        return action()
    except SelectionCancelled as exc:
        ctx.reporter.warn(exc.message)
        raise SystemExit(0)
    except OllamaManagerError as exc:
        ctx.reporter.error(str(exc))
        raise SystemExit(1)


@click.group(context_settings={"help_option_names": ["--help"]})
@click.option('-m', '--model', help='Specify the model name')
@click.option('-q', '--quiet', is_flag=True, help='Suppress non-error messages')
@click.option('-h', '--host', help='Specify the API host and port')
@click.option('--clipboard-manager', help='Command that reads the clipboard payload from stdin')
@click.version_option(__version__)
@click.pass_context
def main(
    ctx: click.Context,
    model: Optional[str],
    quiet: bool,
    host: Optional[str],
    clipboard_manager: Optional[str],
):
    """CLI tool to manage Ollama models."""
    if ctx.obj is None:
        reporter = Reporter()
        try:
            settings = load_settings()
        except OllamaManagerError as exc:
            reporter.error(str(exc))
            raise SystemExit(1)
        configure_logging(settings.log_level)
        ctx.obj = CliContext(settings=settings, reporter=reporter)

    cli_ctx: CliContext = ctx.obj
    cli_ctx.model = model
    cli_ctx.settings = cli_ctx.settings.override(
        quiet=quiet or None,
        host=host,
        clipboard_manager=clipboard_manager,
    )
    cli_ctx.reporter.quiet = cli_ctx.settings.quiet


pass_cli = click.make_pass_decorator(CliContext)


def _start_session(ctx: CliContext, mode: SessionMode) -> None:
    settings = ctx.settings
    logger.debug("starting %s session against %s", mode.value, settings.host)
    inventory = ctx.inventory

    models = _guarded(ctx, lambda: manager.installed_models(inventory))
    selected = None
    if ctx.model:
        selected = _guarded(ctx, lambda: manager.find_installed(models, ctx.model))

    automaton = None
    if mode is SessionMode.COMMAND:
        copier = functools.partial(copy_to_clipboard, timeout=settings.request_timeout)
        automaton = ActionAutomaton(settings.clipboard_manager or default_clipboard_command(), copier)

    app = ChatApp(
        backend=OllamaBackend(settings.host, timeout=settings.request_timeout),
        settings=settings,
        models=models,
        model=selected,
        mode=mode,
        automaton=automaton,
    )
    app.run()
    raise SystemExit(app.return_code or 0)


@main.command()
@pass_cli
def run(ctx: CliContext):
    """Run a model"""
    _start_session(ctx, SessionMode.CHAT)


@main.command(name='cli')
@pass_cli
def cli_command(ctx: CliContext):
    """Generate a shell command from a description"""
    _start_session(ctx, SessionMode.COMMAND)


@main.command()
@click.option('--with-system-info', is_flag=True, help='Include system information in the model prompt')
@pass_cli
def create(ctx: CliContext, with_system_info: bool):
    """Create a new model"""
    _guarded(ctx, lambda: manager.create_model(
        ctx.inventory, ctx.prompter, ctx.reporter, ctx.model, with_system_info,
    ))


@main.command()
@pass_cli
def rm(ctx: CliContext):
    """Remove a model"""
    _guarded(ctx, lambda: manager.remove_model(ctx.inventory, ctx.prompter, ctx.reporter, ctx.model))


@main.command()
@pass_cli
def show(ctx: CliContext):
    """Show information for a model"""
    _guarded(ctx, lambda: manager.show_model(ctx.inventory, ctx.prompter, ctx.reporter, ctx.model))


@main.command()
@pass_cli
def pull(ctx: CliContext):
    """Pull a model from a registry"""
    _guarded(ctx, lambda: manager.pull_model(ctx.inventory, ctx.reporter, ctx.model))


@main.command(name='list')
@pass_cli
def list_command(ctx: CliContext):
    """List installed models"""
    _guarded(ctx, lambda: manager.list_models(ctx.inventory, ctx.reporter))


@main.command()
@pass_cli
def ps(ctx: CliContext):
    """List running models"""
    _guarded(ctx, lambda: manager.list_models(ctx.inventory, ctx.reporter, running=True))
