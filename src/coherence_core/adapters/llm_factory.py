"""
LLM Factory - Creates LLM adapters based on provider selection.
"""

import logging
import os
from typing import Optional, List, Dict, Any

from ..ports.llm_port import LLMPort, LLMProvider

logger = logging.getLogger(__name__)


def get_available_providers() -> List[Dict[str, Any]]:
    """
    Get list of LLM providers with their status, in priority order.

    Returns list of dicts with:
    - provider: LLMProvider enum
    - name: Display name
    - available: Whether it's currently usable
    - models: Known models, default first
    - reason: Why it's not available (if applicable)
    """
    providers = []

    # Check Gemini
    gemini_info = {
        "provider": LLMProvider.GEMINI,
        "name": "Gemini (Google)",
        "available": False,
        "models": ["gemini-2.0-flash", "gemini-1.5-pro"],
        "reason": None,
    }
    try:
        import google.generativeai  # noqa: F401
        if os.environ.get("GOOGLE_API_KEY"):
            gemini_info["available"] = True
        else:
            gemini_info["reason"] = "GOOGLE_API_KEY not set"
    except ImportError:
        gemini_info["reason"] = "google-generativeai package not installed"
    providers.append(gemini_info)

    # Check Claude
    claude_info = {
        "provider": LLMProvider.CLAUDE,
        "name": "Claude (Anthropic)",
        "available": False,
        "models": ["claude-3-5-haiku-20241022", "claude-3-5-sonnet-20241022"],
        "reason": None,
    }
    from .claude_llm import ClaudeLLM
    if ClaudeLLM().is_available():
        claude_info["available"] = True
    elif not os.environ.get("ANTHROPIC_API_KEY"):
        claude_info["reason"] = "ANTHROPIC_API_KEY not set"
    else:
        claude_info["reason"] = "anthropic package not installed"
    providers.append(claude_info)

    return providers


def create_llm(
    provider: LLMProvider,
    model: Optional[str] = None,
    **kwargs
) -> LLMPort:
    """
    Create an LLM adapter for the specified provider.

    Args:
        provider: Which provider to use
        model: Model name (optional, uses default if not specified)
        **kwargs: api_key to override the environment

    Returns:
        LLMPort instance (availability is not checked)
    """
    if provider == LLMProvider.GEMINI:
        from .gemini_llm import GeminiLLM, DEFAULT_GEMINI_MODEL
        return GeminiLLM(
            model=model or DEFAULT_GEMINI_MODEL,
            api_key=kwargs.get("api_key"),
        )

    elif provider == LLMProvider.CLAUDE:
        from .claude_llm import ClaudeLLM, DEFAULT_CLAUDE_MODEL
        return ClaudeLLM(
            model=model or DEFAULT_CLAUDE_MODEL,
            api_key=kwargs.get("api_key"),
        )

    raise ValueError(f"Unknown LLM provider: {provider!r}")


def get_default_provider(
    preferred: Optional[str] = None,
    model: Optional[str] = None,
) -> Optional[LLMPort]:
    """
    Get an LLM adapter, or None if nothing is configured.

    Args:
        preferred: Provider value ("gemini", "claude") to use instead of the
            first available one
        model: Model override passed to the adapter

    Priority without a preference: Gemini > Claude
    """
    if preferred:
        try:
            provider = LLMProvider(preferred.strip().lower())
        except ValueError:
            logger.warning("Unknown LLM provider %r, falling back to auto-detect", preferred)
        else:
            return create_llm(provider, model)

    for p in get_available_providers():
        if p["available"]:
            logger.info("Using %s for insights", p["name"])
            return create_llm(p["provider"], model or p["models"][0])
        logger.debug("%s unavailable: %s", p["name"], p["reason"])

    return None
