"""
ContractGuard - contract risk analysis with local redaction

Redacts emails, dates and company names from a contract locally, sends only
the redacted text to a hosted model, and restores the original values in the
returned report on the user's machine.
Supports multiple LLM providers: Anthropic and OpenAI.
"""

__version__ = "0.1.0"

import sys

if sys.version_info < (3, 10):
    raise RuntimeError("ContractGuard requires Python 3.10 or higher")

from .config import Settings
from .core.guardian import ContractGuardian, analyze
from .privacy import RedactionResult, Segment, highlight_segments, redact
from .providers import (
    DEFAULT_MODEL,
    MODELS,
    PROVIDERS,
    AnthropicProvider,
    BaseLLMProvider,
    CompletionResult,
    ModelInfo,
    OpenAIProvider,
    get_provider,
    list_models,
    list_providers,
)
from .schemas import (
    AnalysisResult,
    ClauseExplanation,
    ContractAnalysis,
    KeyTerms,
    RedFlag,
)

__all__ = [
    "__version__",
    # Main API
    "analyze",
    "ContractGuardian",
    "redact",
    "highlight_segments",
    # Result types
    "AnalysisResult",
    "RedactionResult",
    "Segment",
    # Report schema
    "ContractAnalysis",
    "KeyTerms",
    "RedFlag",
    "ClauseExplanation",
    # Config
    "Settings",
    "MODELS",
    "DEFAULT_MODEL",
    # Providers
    "PROVIDERS",
    "BaseLLMProvider",
    "CompletionResult",
    "ModelInfo",
    "AnthropicProvider",
    "OpenAIProvider",
    "get_provider",
    "list_models",
    "list_providers",
]
