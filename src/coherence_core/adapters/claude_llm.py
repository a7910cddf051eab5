"""
Claude adapter for standard insights.

Each insight is a single exchange: the teaching-assistant instruction
goes in Anthropic's top-level ``system`` field and the standard's prompt
is the only user turn. The key comes from ANTHROPIC_API_KEY unless one
is passed in.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from ..ports.llm_port import LLMPort, LLMProvider, LLMResponse, Message

logger = logging.getLogger(__name__)

DEFAULT_CLAUDE_MODEL = "claude-3-5-haiku-20241022"


def split_system(messages: List[Message]) -> Tuple[Optional[str], List[Dict[str, str]]]:
    """Pull system text out of the turn list; Anthropic takes it separately."""
    system_parts = [m.content for m in messages if m.role == "system"]
    turns = [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]
    return ("\n\n".join(system_parts) or None), turns


class ClaudeLLM(LLMPort):
    """Insight provider backed by the Anthropic Messages API."""

    def __init__(self, model: str = DEFAULT_CLAUDE_MODEL, api_key: Optional[str] = None):
        self.model = model
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self._client = None

    def get_provider(self) -> LLMProvider:
        return LLMProvider.CLAUDE

    def get_model_name(self) -> str:
        return self.model

    def is_available(self) -> bool:
        """A key is configured and the anthropic package imports."""
        if not self.api_key:
            return False
        try:
            self._get_client()
        except ImportError:
            return False
        return True

    def _get_client(self):
        if self._client is None:
            try:
                import anthropic
            except ImportError:
                raise ImportError("Claude insights need the anthropic package: pip install anthropic")
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def chat(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> LLMResponse:
        """
        Send one insight request.

        Failures come back as an LLMResponse with finish_reason "error"
        so the insight worker can show its fallback text.
        """
        system, turns = split_system(messages)
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": turns,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if system:
            request["system"] = system

        try:
            reply = self._get_client().messages.create(**request)
        except Exception as e:
            logger.warning("Claude insight request failed: %s", e)
            return LLMResponse(content=f"Error: {e}", finish_reason="error")

        text = "".join(
            getattr(block, "text", "") for block in reply.content
            if getattr(block, "type", "text") == "text"
        )
        return LLMResponse(
            content=text,
            finish_reason="length" if reply.stop_reason == "max_tokens" else "stop",
            usage={
                "prompt_tokens": reply.usage.input_tokens,
                "completion_tokens": reply.usage.output_tokens,
            },
        )
