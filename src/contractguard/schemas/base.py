"""
Result envelopes for ContractGuard.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ..privacy import RedactionResult
from .analysis import ContractAnalysis


class AnalysisResult(BaseModel):
    """Outcome of analyzing one contract."""

    success: bool
    document_id: str
    analysis: Optional[ContractAnalysis] = None
    redaction: Optional[RedactionResult] = None
    model: str = ""
    provider: str = ""
    attempts: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    cost: float = 0.0
    latency: float = 0.0
    file_path: Optional[str] = None
    file_size_bytes: Optional[int] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def restored(self) -> Optional[ContractAnalysis]:
        """
        Return the analysis with placeholders swapped back to original values.

        Runs locally; the mapping never leaves this process.
        """
        if self.analysis is None:
            return None
        if not self.redaction:
            return self.analysis

        data = self.redaction.restore_data(self.analysis.model_dump())
        return ContractAnalysis.model_validate(data)
