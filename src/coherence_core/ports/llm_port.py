"""
LLM Port - Abstract interface for generative-text providers.

Implementations: Claude, Gemini.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Dict, Optional
from enum import Enum


class LLMProvider(Enum):
    """Available LLM providers."""
    CLAUDE = "claude"
    GEMINI = "gemini"


@dataclass
class Message:
    """A message in the conversation."""
    role: str  # "user", "assistant", "system"
    content: str


@dataclass
class LLMResponse:
    """Response from an LLM call."""
    content: str
    finish_reason: str = "stop"  # "stop", "length", "error"
    usage: Optional[Dict[str, int]] = None  # Token usage stats

    @property
    def is_error(self) -> bool:
        return self.finish_reason == "error"


class LLMPort(ABC):
    """Abstract interface for LLM providers."""

    @abstractmethod
    def chat(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> LLMResponse:
        """
        Send a chat completion request.

        Adapters do not raise on provider failures; they return an
        LLMResponse with finish_reason="error" and the message as content.

        Args:
            messages: Conversation history; a leading "system" message is
                sent as the system instruction
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response

        Returns:
            LLMResponse with the generated text
        """
        pass

    @abstractmethod
    def get_provider(self) -> LLMProvider:
        """Get the provider type."""
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """Get the current model name."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is available (API key set, package installed)."""
        pass
