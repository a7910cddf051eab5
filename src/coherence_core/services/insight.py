"""
Insight Service - asks an LLM to explain a standard for parents and teachers.
"""

import logging

from ..domain.models import Standard
from ..errors import RemoteServiceError
from ..ports.llm_port import LLMPort, Message

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are an expert pedagogical consultant. Provide concise, encouraging "
    "math education advice. Format output as clear markdown."
)
INSIGHT_TEMPERATURE = 0.7

NO_INSIGHT_TEXT = "No insight generated."
FAILURE_TEXT = "Failed to get AI insight. Please try again later."


def build_prompt(standard: Standard) -> str:
    return (
        f"Act as a master math educator. Explain standard {standard.code}: "
        f"\"{standard.description}\" for parents and teachers. "
        f"Suggest one concrete hands-on activity."
    )


class InsightService:
    """Generates markdown insight text for a single standard."""

    def __init__(self, llm: LLMPort):
        self.llm = llm

    def generate_insight(self, standard: Standard) -> str:
        """
        Ask the provider for an explanation plus one hands-on activity.

        Returns:
            Markdown text, or NO_INSIGHT_TEXT if the provider returned nothing

        Raises:
            RemoteServiceError: provider missing, misconfigured or failing
        """
        provider = self.llm.get_provider().value
        if not self.llm.is_available():
            raise RemoteServiceError(f"{provider} is not configured", provider=provider)

        messages = [
            Message(role="system", content=SYSTEM_INSTRUCTION),
            Message(role="user", content=build_prompt(standard)),
        ]
        logger.info("Requesting insight for %s from %s (%s)",
                    standard.code, provider, self.llm.get_model_name())

        response = self.llm.chat(messages, temperature=INSIGHT_TEMPERATURE)
        if response.is_error:
            raise RemoteServiceError(response.content, provider=provider)

        text = (response.content or "").strip()
        return text or NO_INSIGHT_TEXT
