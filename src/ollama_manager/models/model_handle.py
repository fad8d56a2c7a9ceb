from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ModelHandle:
    """The backend model a session talks to."""
    name: str
    parameter_size: str = "unknown"

    @property
    def label(self) -> str:
        return f"{self.name} ({self.parameter_size})"

    @classmethod
    def from_listing(cls, entry: Any) -> "ModelHandle":
        """
        Build a handle from an entry of the Ollama list/ps response.

        Entries are pydantic models in current ollama clients and plain
        dicts in older ones; both are accepted.
        """
        if isinstance(entry, dict):
            name = entry.get("model") or entry.get("name") or ""
            details = entry.get("details") or {}
            size = details.get("parameter_size") if isinstance(details, dict) else None
        else:
            name = getattr(entry, "model", None) or getattr(entry, "name", None) or ""
            details = getattr(entry, "details", None)
            size = getattr(details, "parameter_size", None) if details is not None else None
        return cls(name=name, parameter_size=size or "unknown")
