"""
Model inventory operations against the Ollama backend.

These are one-shot request/response calls used by the management commands
and by session startup to resolve the model to chat with.
"""
import logging
from typing import Any, Optional

import httpx
from ollama import Client, ResponseError

from ollama_manager.errors import BackendError
from ollama_manager.models import ModelHandle

logger = logging.getLogger(__name__)

INVENTORY_ERRORS = (ResponseError, httpx.HTTPError, OSError, ValueError)


class ModelInventory:
    def __init__(self, host: str, client: Optional[Client] = None):
        self.host = host
        self.client = client if client is not None else Client(host=host)

    def _call(self, action: str, fn, *args, **kwargs) -> Any:
        logger.debug("%s against %s", action, self.host)
        try:
            return fn(*args, **kwargs)
        except INVENTORY_ERRORS as exc:
            logger.warning("%s failed: %s", action, exc)
            raise BackendError(f"Error {action}: {exc}") from exc

    def list_models(self) -> list[ModelHandle]:
        response = self._call("retrieving models", self.client.list)
        return [ModelHandle.from_listing(entry) for entry in _models_of(response)]

    def running_models(self) -> list[ModelHandle]:
        response = self._call("retrieving running models", self.client.ps)
        return [ModelHandle.from_listing(entry) for entry in _models_of(response)]

    def find(self, name: str) -> Optional[ModelHandle]:
        for handle in self.list_models():
            if handle.name == name:
                return handle
        return None

    def pull(self, name: str) -> None:
        self._call("pulling model", self.client.pull, name)

    def remove(self, name: str) -> None:
        self._call("removing model", self.client.delete, name)

    def show(self, name: str) -> dict[str, Any]:
        info = self._call("showing model information", self.client.show, name)
        if hasattr(info, "model_dump"):
            return info.model_dump(exclude_none=True)
        return dict(info)

    def create(self, name: str, base_model: str, system_prompt: str) -> None:
        self._call(
            "creating model",
            self.client.create,
            model=name,
            from_=base_model,
            system=system_prompt,
        )


def _models_of(response: Any) -> list[Any]:
    if isinstance(response, dict):
        return list(response.get("models") or [])
    return list(getattr(response, "models", None) or [])
