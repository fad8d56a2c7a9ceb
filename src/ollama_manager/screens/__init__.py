"""
Modal screens for the Ollama Manager application.
"""
from .choice_screen import ChoiceScreen, confirm_screen
from .text_prompt_screen import TextPromptScreen

__all__ = ["ChoiceScreen", "TextPromptScreen", "confirm_screen"]
