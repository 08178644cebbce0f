"""
OpenAI provider implementation.
"""

import base64
import os
from typing import Any, Dict, List, Optional

from openai import OpenAI

from .base import BaseLLMProvider, CompletionResult, ImageInput, ModelInfo

OPENAI_MODELS = {
    "gpt-4o": {
        "id": "gpt-4o",
        "input_cost": 2.50,
        "output_cost": 10.0,
        "supports_vision": True,
        "context_window": 128000,
    },
    "gpt-4o-mini": {
        "id": "gpt-4o-mini",
        "input_cost": 0.15,
        "output_cost": 0.60,
        "supports_vision": True,
        "context_window": 128000,
    },
    "gpt-4.1": {
        "id": "gpt-4.1",
        "input_cost": 2.0,
        "output_cost": 8.0,
        "supports_vision": True,
        "context_window": 1047576,
    },
}


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT provider. Requests JSON-object output."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
    ):
        api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError(
                "OpenAI API key required. Set OPENAI_API_KEY env var or pass api_key."
            )

        super().__init__(api_key=api_key, model=model, base_url=base_url)

        if model not in OPENAI_MODELS:
            raise ValueError(
                f"Unknown OpenAI model: {model}. "
                f"Available: {list(OPENAI_MODELS.keys())}"
            )

        self.model_config = OPENAI_MODELS[model]
        self.model_id = self.model_config["id"]
        self.client = OpenAI(api_key=api_key, base_url=base_url)

    def _create(
        self,
        content: Any,
        system: Optional[str],
        max_tokens: int,
        temperature: float,
        metadata: Dict[str, Any],
    ) -> CompletionResult:
        messages: List[Dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": content})

        try:
            response = self.client.chat.completions.create(
                model=self.model_id,
                max_tokens=max_tokens,
                temperature=temperature,
                response_format={"type": "json_object"},
                messages=messages,
            )

            choice = response.choices[0]
            usage = response.usage

            return CompletionResult(
                success=True,
                content=choice.message.content or "",
                input_tokens=usage.prompt_tokens if usage else 0,
                output_tokens=usage.completion_tokens if usage else 0,
                model=self.model_id,
                metadata={"finish_reason": choice.finish_reason, **metadata},
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

        content: List[Dict[str, Any]] = []
        for data, media_type in images:
            image_b64 = base64.standard_b64encode(data).decode("utf-8")
            content.append(
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{media_type};base64,{image_b64}"},
                }
            )
        content.append({"type": "text", "text": prompt})

        return self._create(
            content, system, max_tokens, temperature, {"vision": True, "pages": len(images)}
        )

    def supports_vision(self) -> bool:
        return self.model_config.get("supports_vision", False)

    def get_model_info(self) -> ModelInfo:
        return ModelInfo(
            name=self.model,
            provider="openai",
            model_id=self.model_id,
            input_cost_per_million=self.model_config["input_cost"],
            output_cost_per_million=self.model_config["output_cost"],
            supports_vision=self.model_config.get("supports_vision", False),
            context_window=self.model_config.get("context_window", 128000),
        )

    @classmethod
    def get_provider_name(cls) -> str:
        return "openai"
