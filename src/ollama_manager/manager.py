"""
Model management commands: list, ps, create, rm, show, pull.

Each flow takes its collaborators explicitly (inventory, prompter, reporter)
and raises from ollama_manager.errors; the CLI turns those into exit codes.
"""
import json
from typing import Optional, Protocol, Sequence

from rich.table import Table

from ollama_manager.console import Reporter
from ollama_manager.core.inventory import ModelInventory
from ollama_manager.core.system_info import collect_system_info, describe
from ollama_manager.errors import BackendError, SelectionCancelled, ValidationError
from ollama_manager.models import ModelHandle


class PromptCollaborator(Protocol):
    def select(self, message: str, options: Sequence[tuple[str, object]]) -> Optional[object]: ...

    def confirm(self, message: str, default: bool = False) -> Optional[bool]: ...

    def text(self, message: str) -> Optional[str]: ...


class NoModelsInstalled(BackendError):
    def __init__(self) -> None:
        super().__init__("No models installed.")


class ModelNotInstalled(BackendError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Model '{name}' is not installed.")
        self.name = name


def installed_models(inventory: ModelInventory) -> list[ModelHandle]:
    models = inventory.list_models()
    if not models:
        raise NoModelsInstalled()
    return models


def find_installed(models: Sequence[ModelHandle], name: str) -> ModelHandle:
    for model in models:
        if model.name == name:
            return model
    raise ModelNotInstalled(name)


def select_model(prompter: PromptCollaborator, models: Sequence[ModelHandle], message: str) -> ModelHandle:
    choice = prompter.select(message, [(model.label, model) for model in models])
    if choice is None:
        raise SelectionCancelled("No model selected.")
    return choice


def resolve_model(
    inventory: ModelInventory,
    prompter: PromptCollaborator,
    model_name: Optional[str],
    message: str,
) -> ModelHandle:
    models = installed_models(inventory)
    if model_name:
        return find_installed(models, model_name)
    return select_model(prompter, models, message)


def _required_text(prompter: PromptCollaborator, message: str, field: str) -> str:
    answer = prompter.text(message)
    if answer is None:
        raise SelectionCancelled()
    answer = answer.strip()
    if not answer:
        raise ValidationError(f"Error: {field} cannot be empty.")
    return answer


def create_model(
    inventory: ModelInventory,
    prompter: PromptCollaborator,
    reporter: Reporter,
    base_model: Optional[str] = None,
    with_system_info: bool = False,
) -> str:
    if not base_model:
        base_model = select_model(
            prompter,
            installed_models(inventory),
            "Please select the base model for your new model:",
        ).name

    name = _required_text(prompter, "Please enter the name for your new model:", "Model name")
    system_prompt = _required_text(
        prompter,
        'Enter the SYSTEM prompt for your model (e.g., "You are Mario from Super Mario Bros."):',
        "SYSTEM prompt",
    )
    if with_system_info:
        system_prompt += describe(collect_system_info())

    reporter.info(f"Creating model '{name}' based on '{base_model}'...")
    with reporter.status("Creating model..."):
        inventory.create(name, base_model, system_prompt)
    reporter.success(f"Model '{name}' created successfully.")
    return name


def remove_model(
    inventory: ModelInventory,
    prompter: PromptCollaborator,
    reporter: Reporter,
    model_name: Optional[str] = None,
) -> str:
    model = resolve_model(inventory, prompter, model_name, "Please select a model to remove:")
    if not prompter.confirm(f"Are you sure you want to remove model '{model.name}'?"):
        raise SelectionCancelled()

    reporter.info(f"Removing model '{model.name}'...")
    inventory.remove(model.name)
    return model.name


def show_model(
    inventory: ModelInventory,
    prompter: PromptCollaborator,
    reporter: Reporter,
    model_name: Optional[str] = None,
) -> dict:
    if model_name:
        name = model_name
    else:
        name = select_model(
            prompter,
            installed_models(inventory),
            "Please select a model to show information:",
        ).name

    reporter.info(f"Showing information for model '{name}'...")
    info = inventory.show(name)
    reporter.console.print_json(json.dumps(info, default=str))
    return info


def pull_model(inventory: ModelInventory, reporter: Reporter, model_name: Optional[str]) -> str:
    if not model_name:
        raise ValidationError("Error: Model name is required for pull.")

    reporter.info(f"Pulling model '{model_name}'...")
    with reporter.status("Pulling model..."):
        inventory.pull(model_name)
    reporter.success("Model pulled successfully.")
    return model_name


def list_models(inventory: ModelInventory, reporter: Reporter, running: bool = False) -> list[ModelHandle]:
    models = inventory.running_models() if running else inventory.list_models()
    if not models:
        reporter.warn("No models running." if running else "No models installed.")
        return models

    table = Table("NAME", "PARAMETERS", title="Running models" if running else "Installed models")
    for model in models:
        table.add_row(model.name, model.parameter_size)
    reporter.console.print(table)
    return models
