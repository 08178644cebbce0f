"""Document loading and model-response parsing."""

from .analysis_parser import AnalysisParseError, AnalysisParser, parse_analysis
from .documents import SourceDocument, extract_text, load_document

__all__ = [
    "AnalysisParser",
    "AnalysisParseError",
    "parse_analysis",
    "SourceDocument",
    "extract_text",
    "load_document",
]
