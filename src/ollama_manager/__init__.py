"""
Ollama Manager: manage local Ollama models and chat with them from the terminal.
"""

__version__ = "1.0.0"
