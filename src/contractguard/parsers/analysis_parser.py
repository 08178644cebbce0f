"""
LLM-based contract analysis using the provider abstraction.

Sends already-redacted contract text to the configured model and validates
the JSON report against ``ContractAnalysis``.
"""

import json
import logging
import re
import time
from typing import List, Optional

from pydantic import ValidationError

from ..prompts import IMAGE_PROMPT, SYSTEM_INSTRUCTION, build_document_prompt
from ..providers import DEFAULT_MODEL, BaseLLMProvider, CompletionResult, get_provider
from ..providers.base import ImageInput
from ..schemas.analysis import ContractAnalysis
from ..schemas.base import AnalysisResult

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?\s*|\s*```")


class AnalysisParseError(ValueError):
    """The model response could not be turned into a ContractAnalysis."""


def parse_analysis(response_text: str) -> ContractAnalysis:
    """
    Parse a model response into a validated ContractAnalysis.

    Strips Markdown code fences and any prose around the outermost JSON object.

    Raises:
        AnalysisParseError: If no valid JSON report can be extracted
    """
    cleaned = _CODE_FENCE.sub("", response_text).strip()

    json_start = cleaned.find("{")
    json_end = cleaned.rfind("}") + 1
    if json_start >= 0 and json_end > json_start:
        cleaned = cleaned[json_start:json_end]

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AnalysisParseError(f"Failed to parse JSON: {e}") from e

    try:
        return ContractAnalysis.model_validate(data)
    except ValidationError as e:
        raise AnalysisParseError(f"Report does not match schema: {e}") from e


class AnalysisParser:
    """
    Runs contract analysis against one LLM provider.

    Features:
    - Multi-provider support (Anthropic, OpenAI)
    - Structured output with Pydantic validation
    - Retry on malformed or invalid reports
    - Token and cost accounting across attempts

    Callers are responsible for redaction: ``analyze`` sends its input as-is.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: Optional[str] = None,
        max_retries: int = 3,
        max_tokens: int = 4096,
        temperature: float = 0.1,
        base_url: Optional[str] = None,
        provider: Optional[BaseLLMProvider] = None,
    ):
        """
        Initialize the analysis parser.

        Args:
            model: Model to use (e.g., 'claude-haiku-4', 'gpt-4o-mini')
            api_key: API key (uses env var if not provided)
            max_retries: Attempts before giving up on an invalid report
            max_tokens: Maximum tokens the model may generate
            temperature: Sampling temperature
            base_url: Optional base URL override
            provider: Pre-built provider (skips registry lookup)
        """
        self.model_name = model
        self.max_retries = max(1, max_retries)
        self.max_tokens = max_tokens
        self.temperature = temperature

        self.provider: BaseLLMProvider = provider or get_provider(
            model=model, api_key=api_key, base_url=base_url
        )
        self.model_info = self.provider.get_model_info()

    def analyze(self, redacted_text: str, document_id: str) -> AnalysisResult:
        """
        Analyze redacted contract text.

        Args:
            redacted_text: Contract text that has already been through ``redact``
            document_id: Identifier used in logs and the result

        Returns:
            AnalysisResult without redaction data attached
        """
        prompt = build_document_prompt(redacted_text)
        return self._run(
            lambda: self.provider.complete(
                prompt=prompt,
                system=SYSTEM_INSTRUCTION,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            ),
            document_id=document_id,
        )

    def analyze_images(
        self, images: List[ImageInput], document_id: str
    ) -> AnalysisResult:
        """Analyze scanned contract pages with a vision-capable model."""
        if not self.provider.supports_vision():
            return self._failure(
                document_id,
                error=f"Model {self.model_name} does not support vision",
            )

        return self._run(
            lambda: self.provider.complete_vision(
                prompt=IMAGE_PROMPT,
                images=images,
                system=SYSTEM_INSTRUCTION,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            ),
            document_id=document_id,
            metadata={"vision": True, "pages": len(images)},
        )

    def _run(self, call, document_id: str, metadata: Optional[dict] = None) -> AnalysisResult:
        """Call the provider and validate the report, retrying invalid output."""
        start_time = time.time()
        input_tokens = 0
        output_tokens = 0
        error: Optional[str] = None

        for attempt in range(1, self.max_retries + 1):
            result: CompletionResult = call()
            input_tokens += result.input_tokens
            output_tokens += result.output_tokens

            if not result.success:
                error = f"Analysis failed: {result.error or 'provider returned no result'}"
                logger.warning("Provider call failed for %s: %s", document_id, result.error)
                break

            try:
                analysis = parse_analysis(result.content)
            except AnalysisParseError as e:
                error = f"Analysis failed to produce a valid report: {e}"
                logger.info(
                    "Invalid report for %s (attempt %d/%d)",
                    document_id,
                    attempt,
                    self.max_retries,
                )
                continue

            logger.info(
                "Analyzed %s in %d attempt(s), %d tokens",
                document_id,
                attempt,
                input_tokens + output_tokens,
            )
            return AnalysisResult(
                success=True,
                document_id=document_id,
                analysis=analysis,
                model=self.model_info.model_id,
                provider=self.model_info.provider,
                attempts=attempt,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                cost=self.model_info.estimate_cost(input_tokens, output_tokens),
                latency=time.time() - start_time,
                metadata=dict(metadata or {}),
            )

        else:
            error = f"{error} (after {self.max_retries} attempts)"

        return self._failure(
            document_id,
            error=error,
            attempts=attempt,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            latency=time.time() - start_time,
            metadata=metadata,
        )

    def _failure(
        self,
        document_id: str,
        error: Optional[str],
        attempts: int = 0,
        input_tokens: int = 0,
        output_tokens: int = 0,
        latency: float = 0.0,
        metadata: Optional[dict] = None,
    ) -> AnalysisResult:
        return AnalysisResult(
            success=False,
            document_id=document_id,
            model=self.model_info.model_id,
            provider=self.model_info.provider,
            attempts=attempts,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost=self.model_info.estimate_cost(input_tokens, output_tokens),
            latency=latency,
            error=error,
            metadata=dict(metadata or {}),
        )
