"""
Provider interface shared by the hosted model clients.

Providers report API failures in ``CompletionResult`` instead of raising.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# (raw bytes, MIME type)
ImageInput = Tuple[bytes, str]


@dataclass
class ModelInfo:
    """Information about an LLM model."""

    name: str
    provider: str
    model_id: str
    input_cost_per_million: float
    output_cost_per_million: float
    supports_vision: bool = False
    max_tokens: int = 4096
    context_window: int = 128000

    def estimate_cost(self, input_tokens: int, output_tokens: int) -> float:
        """Price a call in USD from token counts."""
        return (
            input_tokens * self.input_cost_per_million
            + output_tokens * self.output_cost_per_million
        ) / 1_000_000


@dataclass
class CompletionResult:
    """Unified result from an LLM completion."""

    success: bool
    content: str
    input_tokens: int = 0
    output_tokens: int = 0
    model: str = ""
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "",
        base_url: Optional[str] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url

    @abstractmethod
    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.1,
    ) -> CompletionResult:
        """
        Generate a completion for the given prompt.

        Args:
            prompt: The user prompt
            system: Optional system instruction
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            CompletionResult with the generated content
        """
        pass

    @abstractmethod
    def complete_vision(
        self,
        prompt: str,
        images: List[ImageInput],
        system: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.1,
    ) -> CompletionResult:
        """
        Generate a completion for one or more page images + prompt.

        Args:
            prompt: The user prompt
            images: (bytes, media_type) pairs, one per page
            system: Optional system instruction
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            CompletionResult with the generated content
        """
        pass

    @abstractmethod
    def supports_vision(self) -> bool:
        """Check if this provider/model supports vision."""
        pass

    @abstractmethod
    def get_model_info(self) -> ModelInfo:
        """Get information about the current model."""
        pass

    @classmethod
    @abstractmethod
    def get_provider_name(cls) -> str:
        """Get the provider name (e.g., 'anthropic', 'openai')."""
        pass
