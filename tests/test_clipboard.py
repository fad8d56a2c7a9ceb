import sys

import pytest

from ollama_manager.core import clipboard
from ollama_manager.core.clipboard import copy_to_clipboard, default_clipboard_command
from ollama_manager.errors import ClipboardError

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="needs POSIX utilities")


@posix_only
async def test_successful_command(tmp_path):
    target = tmp_path / "clip.txt"
    await copy_to_clipboard("ls -la", f"tee {target}")
    assert target.read_text() == "ls -la"


@posix_only
async def test_non_zero_exit_raises():
    with pytest.raises(ClipboardError, match="exited with status 1"):
        await copy_to_clipboard("ls", "false")


async def test_missing_binary_raises():
    with pytest.raises(ClipboardError, match="Could not start"):
        await copy_to_clipboard("ls", "definitely-not-a-clipboard-manager-xyz")


async def test_no_command_configured():
    with pytest.raises(ClipboardError, match="No clipboard manager configured"):
        await copy_to_clipboard("ls", None)


@posix_only
async def test_timeout_kills_the_process():
    with pytest.raises(ClipboardError, match="timed out"):
        await copy_to_clipboard("ls", "sleep 5", timeout=0.1)


def test_default_command_picks_first_available(monkeypatch):
    available = {"xclip", "pbcopy"}
    monkeypatch.setattr(clipboard.shutil, "which", lambda name: f"/usr/bin/{name}" if name in available else None)
    assert default_clipboard_command() == "xclip -selection clipboard"


def test_default_command_none_when_nothing_installed(monkeypatch):
    monkeypatch.setattr(clipboard.shutil, "which", lambda name: None)
    assert default_clipboard_command() is None


async def test_blank_command_is_not_configured():
    with pytest.raises(ClipboardError, match="No clipboard manager configured"):
        await copy_to_clipboard("ls", "   ")


async def test_unbalanced_quotes_raise():
    with pytest.raises(ClipboardError, match="Invalid clipboard manager command"):
        await copy_to_clipboard("ls", 'xclip -selection "clipboard')
