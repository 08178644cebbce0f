"""
Main ContractGuardian class for contract risk analysis.

This is the primary public API for ContractGuard. It owns the privacy
boundary: contract text is redacted locally and only the redacted text is
handed to the analysis parser.
"""

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..config import Settings
from ..parsers.analysis_parser import AnalysisParser
from ..parsers.documents import DocumentSource, SourceDocument, load_document
from ..privacy import RedactionResult, redact
from ..providers import DEFAULT_MODEL, BaseLLMProvider
from ..schemas.base import AnalysisResult

logger = logging.getLogger(__name__)


class ContractGuardian:
    """
    Contract analysis with local redaction.

    Features:
    - Redacts emails, dates and company names before any remote call
    - Multi-provider support (Anthropic, OpenAI)
    - Text, PDF, DOCX and (opt-in) scanned image input
    - Local restoration of placeholders in the returned report
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        base_url: Optional[str] = None,
        max_retries: int = 3,
        max_tokens: int = 4096,
        temperature: float = 0.1,
        allow_unredacted_images: bool = False,
        provider: Optional[BaseLLMProvider] = None,
    ):
        """
        Initialize ContractGuardian.

        Args:
            api_key: API key (uses env var if not provided)
            model: Model to use (e.g., 'claude-haiku-4', 'gpt-4o-mini')
            base_url: Optional base URL override for the provider
            max_retries: Attempts before giving up on an invalid report
            max_tokens: Maximum tokens the model may generate
            temperature: Sampling temperature
            allow_unredacted_images: Send scanned pages, which cannot be redacted
            provider: Pre-built provider (skips registry lookup)
        """
        self.model_name = model
        self.allow_unredacted_images = allow_unredacted_images

        self.parser = AnalysisParser(
            model=model,
            api_key=api_key,
            max_retries=max_retries,
            max_tokens=max_tokens,
            temperature=temperature,
            base_url=base_url,
            provider=provider,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, api_key: Optional[str] = None
    ) -> "ContractGuardian":
        return cls(
            api_key=api_key,
            model=settings.model,
            max_retries=settings.max_retries,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
            allow_unredacted_images=settings.allow_unredacted_images,
        )

    @staticmethod
    def redact(text: str) -> RedactionResult:
        """Redact contract text locally. No network access."""
        return redact(text)

    def analyze_text(
        self, text: str, document_id: Optional[str] = None
    ) -> AnalysisResult:
        """
        Redact and analyze contract text.

        Args:
            text: Full contract text
            document_id: Unique identifier (auto-generated if not provided)

        Returns:
            AnalysisResult carrying the report and the local RedactionResult
        """
        document_id = document_id or f"doc_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        redaction = redact(text)

        logger.info(
            "Redacted %s: %d placeholder(s) %s",
            document_id,
            len(redaction),
            redaction.placeholders,
        )

        if not redaction.redacted_text.strip():
            return AnalysisResult(
                success=False,
                document_id=document_id,
                redaction=redaction,
                model=self.parser.model_info.model_id,
                provider=self.parser.model_info.provider,
                error="Document is empty",
            )

        result = self.parser.analyze(redaction.redacted_text, document_id=document_id)
        result.redaction = redaction
        return result

    def analyze_file(
        self,
        source: DocumentSource,
        document_id: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> AnalysisResult:
        """
        Load, redact and analyze a contract file.

        Accepts file paths, bytes, or file-like objects. Images are only
        sent when ``allow_unredacted_images`` is set.

        Args:
            source: File path, bytes, or file-like object
            document_id: Unique identifier (derived from filename if not provided)
            filename: Original filename (used when source is bytes/file-like)

        Returns:
            AnalysisResult; failures are reported in ``error``, not raised
        """
        start_time = time.time()

        try:
            document = load_document(source, filename=filename)
        except (FileNotFoundError, ValueError) as e:
            logger.warning("Could not load document: %s", e)
            return AnalysisResult(
                success=False,
                document_id=document_id or _fallback_id(source, filename),
                model=self.parser.model_info.model_id,
                provider=self.parser.model_info.provider,
                file_path=str(source) if isinstance(source, (str, Path)) else None,
                error=str(e),
                latency=time.time() - start_time,
            )

        document_id = document_id or document.document_id

        if document.is_image:
            result = self._analyze_images(document, document_id)
        else:
            result = self.analyze_text(document.text, document_id=document_id)

        result.file_path = document.file_path
        result.file_size_bytes = document.size_bytes
        return result

    def _analyze_images(
        self, document: SourceDocument, document_id: str
    ) -> AnalysisResult:
        if not self.allow_unredacted_images:
            return AnalysisResult(
                success=False,
                document_id=document_id,
                model=self.parser.model_info.model_id,
                provider=self.parser.model_info.provider,
                error=(
                    "Scanned images cannot be redacted locally. "
                    "Pass allow_unredacted_images=True to send them anyway."
                ),
            )

        logger.warning("Sending %s as unredacted image(s)", document_id)
        return self.parser.analyze_images(document.images, document_id=document_id)


def _fallback_id(source: DocumentSource, filename: Optional[str]) -> str:
    if filename:
        return Path(filename).stem
    if isinstance(source, (str, Path)):
        return Path(source).stem
    return "unknown"


def analyze(
    source: DocumentSource,
    model: str = DEFAULT_MODEL,
    api_key: Optional[str] = None,
    filename: Optional[str] = None,
    base_url: Optional[str] = None,
    allow_unredacted_images: bool = False,
) -> AnalysisResult:
    """
    One-liner function for quick analysis of a contract file.

    Examples:
        ```python
        from contractguard import analyze

        result = analyze("msa.pdf")
        print(result.analysis.risk_level)

        # Report with real names and dates put back (local only)
        report = result.restored()
        ```

    Args:
        source: File path, bytes, or file-like object
        model: Model to use (default: claude-haiku-4)
        api_key: API key (uses env var if not provided)
        filename: Original filename (required when source is bytes/file-like)
        base_url: Optional base URL override
        allow_unredacted_images: Allow sending scanned pages

    Returns:
        AnalysisResult with the report and redaction data
    """
    guardian = ContractGuardian(
        api_key=api_key,
        model=model,
        base_url=base_url,
        allow_unredacted_images=allow_unredacted_images,
    )
    return guardian.analyze_file(source, filename=filename)
