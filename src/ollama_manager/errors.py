"""
Exceptions shared by the session engine and the inventory commands.
"""


class OllamaManagerError(Exception):
    """Base class for every error this package raises on purpose."""


class SelectionCancelled(OllamaManagerError):
    """The user declined a prompt or closed it without choosing."""

    def __init__(self, message: str = "Action canceled by user."):
        super().__init__(message)
        self.message = message


class BackendError(OllamaManagerError):
    """An inference or inventory call against the backend could not complete."""


class ClipboardError(OllamaManagerError):
    """The clipboard manager could not be spawned or exited non-zero."""


class ValidationError(OllamaManagerError):
    """A required value entered by the user was empty or invalid."""


class ConfigError(OllamaManagerError):
    """The user configuration file could not be read."""


class SessionStateError(OllamaManagerError):
    """A session operation was requested in a state that does not accept it."""
