"""
Hosted model providers for contract analysis.

Only hosted APIs are registered; contract text sent to them has already
been redacted by the caller.
"""

from typing import Dict, Optional, Type

from .anthropic import ANTHROPIC_MODELS, AnthropicProvider
from .base import BaseLLMProvider, CompletionResult, ImageInput, ModelInfo
from .openai import OPENAI_MODELS, OpenAIProvider

PROVIDERS: Dict[str, Type[BaseLLMProvider]] = {
    AnthropicProvider.get_provider_name(): AnthropicProvider,
    OpenAIProvider.get_provider_name(): OpenAIProvider,
}

_CATALOGS = {"anthropic": ANTHROPIC_MODELS, "openai": OPENAI_MODELS}

# Model name -> config, tagged with the owning provider
MODELS: Dict[str, dict] = {
    name: {**config, "provider": provider}
    for provider, catalog in _CATALOGS.items()
    for name, config in catalog.items()
}

DEFAULT_MODEL = "claude-haiku-4"


def provider_name_for(model: str) -> str:
    """Name of the provider serving ``model``."""
    try:
        return MODELS[model]["provider"]
    except KeyError:
        raise ValueError(
            f"Unknown model: {model}. Available models: {', '.join(sorted(MODELS))}"
        ) from None


def get_provider(
    model: str,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> BaseLLMProvider:
    """
    Build the provider for a registered model.

    Raises:
        ValueError: If the model is unknown or its API key is missing
    """
    provider_class = PROVIDERS[provider_name_for(model)]
    return provider_class(model=model, api_key=api_key, base_url=base_url)


def list_models() -> Dict[str, dict]:
    return dict(MODELS)


def list_providers() -> list:
    return list(PROVIDERS)


__all__ = [
    "BaseLLMProvider",
    "CompletionResult",
    "ImageInput",
    "ModelInfo",
    "AnthropicProvider",
    "OpenAIProvider",
    "MODELS",
    "PROVIDERS",
    "DEFAULT_MODEL",
    "get_provider",
    "provider_name_for",
    "list_models",
    "list_providers",
]
