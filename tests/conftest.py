import pytest

from ollama_manager.models import ModelHandle


@pytest.fixture
def llama():
    return ModelHandle(name="llama3:8b", parameter_size="8.0B")


@pytest.fixture
def models(llama):
    return [llama, ModelHandle(name="mistral:7b", parameter_size="7.2B")]
