"""
Structured contract analysis returned by the remote model.

Field descriptions are also used to document the expected JSON in prompts.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

RiskLevel = Literal["Low", "Medium", "High"]
Severity = Literal["Critical", "High", "Medium"]


class KeyTerms(BaseModel):
    """Headline commercial terms of the contract."""

    payment_terms: str = Field("", description="When and how payment is due")
    contract_duration: str = Field("", description="Term and renewal")
    termination_rights: str = Field("", description="Who can terminate and how")
    liability_cap: Optional[str] = Field(
        None, description="Limitation of liability, null if uncapped"
    )
    ip_ownership: str = Field("", description="Who owns work product and IP")
    jurisdiction: str = Field("", description="Governing law and venue")


class RedFlag(BaseModel):
    """A risky or unfair clause with a negotiation plan."""

    id: str
    severity: Severity
    category: str = Field(
        "Other", description="Liability | Termination | IP | Payment | Legal | Other"
    )
    section: str = ""
    clause_text: str = ""
    plain_english: str = ""
    why_risky: str = ""
    financial_impact_example: str = ""
    suggested_alternative: str = ""
    negotiation_script: str = ""
    industry_standard: str = ""


class ClauseExplanation(BaseModel):
    """Plain-English walkthrough of one clause."""

    section_title: str
    original_text: str = ""
    plain_english: str = ""
    why_it_matters: str = ""
    risk_level: RiskLevel = "Low"
    negotiation_recommended: Literal["Yes", "No"] = "No"


class ContractAnalysis(BaseModel):
    """Full risk report for a contract."""

    contract_type: str
    overall_risk_score: float = Field(..., ge=1, le=10)
    risk_level: RiskLevel
    summary: str
    key_terms: KeyTerms = Field(default_factory=KeyTerms)
    red_flags: List[RedFlag] = Field(default_factory=list)
    action_items: List[str] = Field(default_factory=list)
    clause_explanations: List[ClauseExplanation] = Field(default_factory=list)

    def flags_by_severity(self, severity: Severity) -> List[RedFlag]:
        return [flag for flag in self.red_flags if flag.severity == severity]
