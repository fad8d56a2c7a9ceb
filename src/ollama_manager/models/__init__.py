"""
Data models for the Ollama Manager application.
"""
from .model_handle import ModelHandle
from .turn import ConversationHistory, ConversationTurn, Role

__all__ = ["ConversationHistory", "ConversationTurn", "ModelHandle", "Role"]
