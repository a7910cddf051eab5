"""
Gemini LLM Adapter - Google's Gemini API via google-generativeai.

Requires GOOGLE_API_KEY environment variable or explicit key.
"""

import logging
import os
from typing import List, Optional

from ..ports.llm_port import LLMPort, LLMProvider, LLMResponse, Message

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class GeminiLLM(LLMPort):
    """Gemini adapter using the google-generativeai SDK."""

    def __init__(
        self,
        model: str = DEFAULT_GEMINI_MODEL,
        api_key: Optional[str] = None,
    ):
        self.model = model
        self.api_key = api_key or os.environ.get("GOOGLE_API_KEY")
        self._genai = None

    def get_provider(self) -> LLMProvider:
        return LLMProvider.GEMINI

    def get_model_name(self) -> str:
        return self.model

    def is_available(self) -> bool:
        if not self.api_key:
            return False
        try:
            self._get_genai()
            return True
        except ImportError:
            return False

    def _get_genai(self):
        """Lazy import and configure the SDK."""
        if self._genai is None:
            try:
                import google.generativeai as genai
            except ImportError:
                raise ImportError(
                    "Please install google-generativeai: pip install google-generativeai"
                )
            genai.configure(api_key=self.api_key)
            self._genai = genai
        return self._genai

    def chat(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> LLMResponse:
        """Send chat request to Gemini."""
        system_instruction = None
        contents = []
        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
            else:
                # Gemini calls the assistant role "model"
                role = "model" if msg.role == "assistant" else "user"
                contents.append({"role": role, "parts": [msg.content]})

        try:
            genai = self._get_genai()
            from google.generativeai.types import GenerationConfig

            gemini_model = genai.GenerativeModel(
                model_name=self.model,
                system_instruction=system_instruction,
                generation_config=GenerationConfig(
                    temperature=temperature,
                    max_output_tokens=max_tokens,
                ),
            )
            response = gemini_model.generate_content(contents)
            text = response.text or ""
        except Exception as e:
            logger.warning("Gemini request failed: %s", e)
            return LLMResponse(content=f"Error: {e}", finish_reason="error")

        usage = None
        metadata = getattr(response, "usage_metadata", None)
        if metadata is not None:
            usage = {
                "prompt_tokens": metadata.prompt_token_count,
                "completion_tokens": metadata.candidates_token_count,
            }

        return LLMResponse(content=text, usage=usage)
