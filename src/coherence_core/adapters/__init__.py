"""
Adapters - concrete implementations of the core ports.
"""

from .llm_factory import create_llm, get_available_providers, get_default_provider

__all__ = [
    "create_llm",
    "get_available_providers",
    "get_default_provider",
]
