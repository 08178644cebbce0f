"""Data models for ContractGuard."""

from .analysis import ClauseExplanation, ContractAnalysis, KeyTerms, RedFlag
from .base import AnalysisResult

__all__ = [
    "AnalysisResult",
    "ContractAnalysis",
    "KeyTerms",
    "RedFlag",
    "ClauseExplanation",
]
