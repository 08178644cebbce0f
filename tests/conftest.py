"""Pytest configuration and fixtures."""

import json
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from contractguard.providers.base import BaseLLMProvider, CompletionResult, ModelInfo


@pytest.fixture
def sample_contract_text() -> str:
    """Provide sample contract text."""
    return """
MASTER SERVICES AGREEMENT

This Agreement is entered into on March 3, 2024 between Brightline Consulting LLC
("Provider") and Northwind Trading Company ("Client").

1. PAYMENT. Client shall pay all invoices within 90 days. Questions about invoices
go to billing@brightline.io.

2. TERM. This Agreement runs until 12/31/2026 and renews automatically.

3. LIABILITY. Provider's liability is unlimited. Notices to legal@northwind.com.

4. TERMINATION. Brightline Consulting LLC may terminate at any time without notice.
"""


@pytest.fixture
def sample_analysis_data() -> Dict:
    """Provide a valid analysis report that quotes placeholders."""
    return {
        "contract_type": "Master Services Agreement",
        "overall_risk_score": 8,
        "risk_level": "High",
        "summary": "Services agreement between [ENTITY_5] and [ENTITY_6].",
        "key_terms": {
            "payment_terms": "Net 90",
            "contract_duration": "Until [DATE_4], auto-renewing",
            "termination_rights": "[ENTITY_5] may terminate without notice",
            "liability_cap": None,
            "ip_ownership": "Not specified",
            "jurisdiction": "Not specified",
        },
        "red_flags": [
            {
                "id": "rf-1",
                "severity": "Critical",
                "category": "Liability",
                "section": "3",
                "clause_text": "Provider's liability is unlimited.",
                "plain_english": "You could owe any amount.",
                "why_risky": "No ceiling on damages.",
                "financial_impact_example": "A $10,000 job could cost $1,000,000.",
                "suggested_alternative": "Cap liability at fees paid.",
                "negotiation_script": "We need a cap equal to 12 months of fees.",
                "industry_standard": "Caps of 1x annual fees are common.",
            }
        ],
        "action_items": ["Negotiate a liability cap", "Shorten payment terms"],
        "clause_explanations": [
            {
                "section_title": "Liability",
                "original_text": "Provider's liability is unlimited.",
                "plain_english": "No limit on what you can owe.",
                "why_it_matters": "Exposure is open-ended.",
                "risk_level": "High",
                "negotiation_recommended": "Yes",
            }
        ],
    }


@pytest.fixture
def sample_analysis_json(sample_analysis_data) -> str:
    return json.dumps(sample_analysis_data)


class StubProvider(BaseLLMProvider):
    """Provider that replays canned responses and records prompts."""

    def __init__(self, responses: List[CompletionResult], vision: bool = True):
        super().__init__(api_key="stub", model="stub-model")
        self.responses = list(responses)
        self.vision = vision
        self.prompts: List[str] = []
        self.systems: List[Optional[str]] = []
        self.images: List[list] = []

    def _next(self) -> CompletionResult:
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    def complete(self, prompt, system=None, max_tokens=4096, temperature=0.1):
        self.prompts.append(prompt)
        self.systems.append(system)
        return self._next()

    def complete_vision(
        self, prompt, images, system=None, max_tokens=4096, temperature=0.1
    ):
        self.prompts.append(prompt)
        self.images.append(images)
        return self._next()

    def supports_vision(self) -> bool:
        return self.vision

    def get_model_info(self) -> ModelInfo:
        return ModelInfo(
            name="stub-model",
            provider="stub",
            model_id="stub-model-1",
            input_cost_per_million=1.0,
            output_cost_per_million=2.0,
            supports_vision=self.vision,
        )

    @classmethod
    def get_provider_name(cls) -> str:
        return "stub"


def completion(content: str, success: bool = True, error: Optional[str] = None):
    return CompletionResult(
        success=success,
        content=content,
        input_tokens=1000 if success else 0,
        output_tokens=500 if success else 0,
        model="stub-model-1",
        error=error,
    )


@pytest.fixture
def stub_provider(sample_analysis_json) -> StubProvider:
    """Provider that always returns the sample report."""
    return StubProvider([completion(sample_analysis_json)])


@pytest.fixture
def mock_anthropic_response(sample_analysis_json):
    """Mock Anthropic API response."""

    class MockUsage:
        input_tokens = 1200
        output_tokens = 800

    class MockContent:
        type = "text"
        text = sample_analysis_json

    class MockResponse:
        usage = MockUsage()
        content = [MockContent()]
        stop_reason = "end_turn"

    return MockResponse()


@pytest.fixture
def api_key() -> str:
    """Provide test API key."""
    return "sk-ant-test-key-12345"


@pytest.fixture
def contract_file(tmp_path, sample_contract_text) -> Path:
    """Write the sample contract to a .txt file."""
    path = tmp_path / "msa.txt"
    path.write_text(sample_contract_text, encoding="utf-8")
    return path
