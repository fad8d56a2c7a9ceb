"""
Custom UI widgets for the Ollama Manager application.
"""
from .chat_log import ChatLog
from .input_area import InputArea
from .select_option import SelectionMade, SelectOption

__all__ = ["ChatLog", "InputArea", "SelectionMade", "SelectOption"]
