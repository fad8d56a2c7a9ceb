import io

import pytest
from rich.console import Console

from ollama_manager import manager
from ollama_manager.console import Reporter
from ollama_manager.errors import BackendError, SelectionCancelled, ValidationError

from fakes import FakeInventory, FakePrompter


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def reporter(out):
    return Reporter(console=Console(file=out, width=120), err_console=Console(file=out, width=120))


def test_resolve_model_by_name(models):
    model = manager.resolve_model(FakeInventory(models), FakePrompter(), "mistral:7b", "pick")
    assert model.name == "mistral:7b"


def test_resolve_model_not_installed(models):
    with pytest.raises(manager.ModelNotInstalled, match="Model 'phi3' is not installed."):
        manager.resolve_model(FakeInventory(models), FakePrompter(), "phi3", "pick")


def test_resolve_model_with_no_models():
    with pytest.raises(manager.NoModelsInstalled):
        manager.resolve_model(FakeInventory([]), FakePrompter(), None, "pick")


def test_resolve_model_by_selection(models):
    prompter = FakePrompter(selections=["mistral:7b (7.2B)"])
    model = manager.resolve_model(FakeInventory(models), prompter, None, "Please select a model to run:")
    assert model.name == "mistral:7b"
    assert prompter.asked == ["Please select a model to run:"]


def test_dismissed_selection_is_cancellation(models):
    with pytest.raises(SelectionCancelled, match="No model selected."):
        manager.resolve_model(FakeInventory(models), FakePrompter(), None, "pick")


def test_create_model(models, reporter, out):
    inventory = FakeInventory(models)
    prompter = FakePrompter(selections=["llama3:8b"], texts=["  mario ", "You are Mario."])

    name = manager.create_model(inventory, prompter, reporter)

    assert name == "mario"
    assert inventory.created == [("mario", "llama3:8b", "You are Mario.")]
    assert "created successfully" in out.getvalue()


def test_create_with_system_info_appends_description(models, reporter):
    inventory = FakeInventory(models)
    prompter = FakePrompter(texts=["shell", "You are a shell expert."])

    manager.create_model(inventory, prompter, reporter, base_model="llama3:8b", with_system_info=True)

    _, base, system = inventory.created[0]
    assert base == "llama3:8b"
    assert system.startswith("You are a shell expert. You are using the ")
    assert "shell on the" in system


@pytest.mark.parametrize("texts, message", [
    (["   "], "Model name cannot be empty."),
    (["mario", ""], "SYSTEM prompt cannot be empty."),
])
def test_create_rejects_empty_fields(models, reporter, texts, message):
    inventory = FakeInventory(models)
    with pytest.raises(ValidationError, match=message):
        manager.create_model(inventory, FakePrompter(texts=texts), reporter, base_model="llama3:8b")
    assert inventory.created == []


def test_remove_model_after_confirmation(models, reporter):
    inventory = FakeInventory(models)
    prompter = FakePrompter(confirms=[True])

    manager.remove_model(inventory, prompter, reporter, "llama3:8b")

    assert inventory.removed == ["llama3:8b"]
    assert prompter.asked == ["Are you sure you want to remove model 'llama3:8b'?"]


@pytest.mark.parametrize("answer", [False, None])
def test_remove_model_declined(models, reporter, answer):
    inventory = FakeInventory(models)
    with pytest.raises(SelectionCancelled, match="Action canceled by user."):
        manager.remove_model(inventory, FakePrompter(confirms=[answer]), reporter, "llama3:8b")
    assert inventory.removed == []


def test_show_model_prints_json(models, reporter, out):
    info = manager.show_model(FakeInventory(models), FakePrompter(), reporter, "llama3:8b")
    assert info["details"]["parameter_size"] == "8B"
    assert '"modelfile"' in out.getvalue()


def test_pull_requires_name(reporter):
    with pytest.raises(ValidationError, match="Model name is required for pull."):
        manager.pull_model(FakeInventory(), reporter, None)


def test_pull_model(reporter, out):
    inventory = FakeInventory()
    manager.pull_model(inventory, reporter, "phi3")
    assert inventory.pulled == ["phi3"]
    assert "Model pulled successfully." in out.getvalue()


def test_pull_failure_propagates(reporter):
    with pytest.raises(BackendError):
        manager.pull_model(FakeInventory(fail="pull"), reporter, "phi3")


def test_list_models_table(models, reporter, out):
    manager.list_models(FakeInventory(models), reporter)
    assert "mistral:7b" in out.getvalue()
    assert "7.2B" in out.getvalue()


def test_list_running_models_empty(reporter, out):
    assert manager.list_models(FakeInventory(), reporter, running=True) == []
    assert "No models running." in out.getvalue()


def test_quiet_reporter_hides_info(models, out):
    reporter = Reporter(quiet=True, console=Console(file=out, width=120), err_console=Console(file=out, width=120))
    manager.remove_model(FakeInventory(models), FakePrompter(confirms=[True]), reporter, "llama3:8b")
    assert "Removing model" not in out.getvalue()
