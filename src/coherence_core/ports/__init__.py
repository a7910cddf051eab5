"""
Ports - abstract interfaces the core depends on.
"""

from .llm_port import LLMPort, LLMProvider, LLMResponse, Message

__all__ = [
    "LLMPort",
    "LLMProvider",
    "LLMResponse",
    "Message",
]
