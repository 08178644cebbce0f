"""
Anthropic Claude provider implementation.
"""

import base64
import os
from typing import Any, Dict, List, Optional

from anthropic import Anthropic

from .base import BaseLLMProvider, CompletionResult, ImageInput, ModelInfo

ANTHROPIC_MODELS = {
    "claude-haiku-4": {
        "id": "claude-haiku-4-5-20251001",
        "input_cost": 1.0,
        "output_cost": 5.0,
        "supports_vision": True,
        "context_window": 200000,
    },
    "claude-sonnet": {
        "id": "claude-sonnet-4-5-20250929",
        "input_cost": 3.0,
        "output_cost": 15.0,
        "supports_vision": True,
        "context_window": 200000,
    },
    "claude-opus": {
        "id": "claude-opus-4-5-20251101",
        "input_cost": 15.0,
        "output_cost": 75.0,
        "supports_vision": True,
        "context_window": 200000,
    },
}


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude provider."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-haiku-4",
        base_url: Optional[str] = None,
    ):
        api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError(
                "Anthropic API key required. Set ANTHROPIC_API_KEY env var or pass api_key."
            )

        super().__init__(api_key=api_key, model=model, base_url=base_url)

        if model not in ANTHROPIC_MODELS:
            raise ValueError(
                f"Unknown Anthropic model: {model}. "
                f"Available: {list(ANTHROPIC_MODELS.keys())}"
            )

        self.model_config = ANTHROPIC_MODELS[model]
        self.model_id = self.model_config["id"]
        self.client = Anthropic(api_key=api_key, base_url=base_url)

    def _create(
        self,
        content: Any,
        system: Optional[str],
        max_tokens: int,
        temperature: float,
        metadata: Dict[str, Any],
    ) -> CompletionResult:
        kwargs: Dict[str, Any] = {
            "model": self.model_id,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": content}],
        }
        if system:
            kwargs["system"] = system

        try:
            response = self.client.messages.create(**kwargs)

            text = "".join(
                block.text
                for block in response.content
                if getattr(block, "type", "text") == "text"
            )

            return CompletionResult(
                success=True,
                content=text,
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
                model=self.model_id,
                metadata={"stop_reason": response.stop_reason, **metadata},
            )

        except Exception as e:
            return CompletionResult(
                success=False,
                content="",
                model=self.model_id,
                error=str(e),
            )

    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.1,
    ) -> CompletionResult:
        return self._create(prompt, system, max_tokens, temperature, {})

    def complete_vision(
        self,
        prompt: str,
        images: List[ImageInput],
        system: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.1,
    ) -> CompletionResult:
        if not self.supports_vision():
            return CompletionResult(
                success=False,
                content="",
                model=self.model_id,
                error=f"Model {self.model} does not support vision",
            )

        content: List[Dict[str, Any]] = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": media_type,
                    "data": base64.standard_b64encode(data).decode("utf-8"),
                },
            }
            for data, media_type in images
        ]
        content.append({"type": "text", "text": prompt})

        return self._create(
            content, system, max_tokens, temperature, {"vision": True, "pages": len(images)}
        )

    def supports_vision(self) -> bool:
        return self.model_config.get("supports_vision", False)

    def get_model_info(self) -> ModelInfo:
        return ModelInfo(
            name=self.model,
            provider="anthropic",
            model_id=self.model_id,
            input_cost_per_million=self.model_config["input_cost"],
            output_cost_per_million=self.model_config["output_cost"],
            supports_vision=self.model_config.get("supports_vision", False),
            context_window=self.model_config.get("context_window", 200000),
        )

    @classmethod
    def get_provider_name(cls) -> str:
        return "anthropic"
