"""
Clipboard collaborator: pipes text into an external clipboard manager.
"""
import asyncio
import logging
import shlex
import shutil
from typing import Optional

from ollama_manager.errors import ClipboardError

logger = logging.getLogger(__name__)

CLIPBOARD_CANDIDATES = (
    "wl-copy",
    "xclip -selection clipboard",
    "xsel --clipboard --input",
    "pbcopy",
    "clip",
)


def default_clipboard_command() -> Optional[str]:
    """First clipboard manager found on PATH, or None."""
    for candidate in CLIPBOARD_CANDIDATES:
        if shutil.which(shlex.split(candidate)[0]):
            return candidate
    return None


async def copy_to_clipboard(text: str, command: Optional[str], timeout: Optional[float] = None) -> None:
    """
    Spawn ``command`` and write ``text`` to its stdin.

    Raises:
        ClipboardError: no command configured, spawn failure, timeout or
            non-zero exit status
    """
    if not command:
        raise ClipboardError("No clipboard manager configured. Use --clipboard-manager.")

    try:
        argv = shlex.split(command)
    except ValueError as exc:
        raise ClipboardError(f"Invalid clipboard manager command {command!r}: {exc}") from exc
    if not argv:
        raise ClipboardError("No clipboard manager configured. Use --clipboard-manager.")

    logger.debug("copying %d chars with %s", len(text), argv[0])
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise ClipboardError(f"Could not start clipboard manager '{argv[0]}': {exc}") from exc

    try:
        _, stderr = await asyncio.wait_for(proc.communicate(text.encode()), timeout=timeout)
    except asyncio.TimeoutError as exc:
        proc.kill()
        await proc.wait()
        raise ClipboardError(f"Clipboard manager '{argv[0]}' timed out.") from exc

    if proc.returncode != 0:
        detail = stderr.decode(errors="replace").strip() if stderr else ""
        logger.warning("clipboard manager exited %s: %s", proc.returncode, detail)
        message = f"Clipboard manager '{argv[0]}' exited with status {proc.returncode}."
        raise ClipboardError(f"{message} {detail}".strip())
