"""Test ContractGuardian core functionality."""

import io
import sys
import zipfile
from unittest.mock import MagicMock, patch

import pytest

from contractguard import ContractGuardian, Settings, analyze
from contractguard.schemas import AnalysisResult

from conftest import StubProvider, completion


class TestGuardianInitialization:
    """Test ContractGuardian initialization."""

    def test_init_with_api_key(self, api_key):
        """Test initialization with explicit API key."""
        guardian = ContractGuardian(api_key=api_key)
        assert guardian.parser.provider.api_key == api_key

    def test_init_with_env_api_key(self, monkeypatch):
        """Test initialization with API key from environment."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env-key")
        guardian = ContractGuardian()
        assert guardian.parser.provider.api_key == "sk-env-key"

    def test_init_without_api_key_raises_error(self, monkeypatch):
        """Test that initialization without API key raises error."""
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with pytest.raises(ValueError, match="API key required"):
            ContractGuardian()

    def test_init_with_openai_model(self, monkeypatch):
        """Test that OpenAI models pick the OpenAI provider."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
        guardian = ContractGuardian(model="gpt-4o-mini")

        assert guardian.parser.provider.get_provider_name() == "openai"

    def test_from_settings(self, api_key):
        """Test building from Settings."""
        settings = Settings(
            model="claude-sonnet", max_retries=5, allow_unredacted_images=True
        )
        guardian = ContractGuardian.from_settings(settings, api_key=api_key)

        assert guardian.model_name == "claude-sonnet"
        assert guardian.parser.max_retries == 5
        assert guardian.allow_unredacted_images is True


class TestPrivacyBoundary:
    """Test that only redacted text reaches the provider."""

    def test_provider_never_sees_original_values(self, stub_provider, sample_contract_text):
        """Test that no mapped value appears in the outgoing prompt."""
        guardian = ContractGuardian(provider=stub_provider)
        result = guardian.analyze_text(sample_contract_text, document_id="msa")

        prompt = stub_provider.prompts[0]
        assert result.redaction.mapping
        for value in result.redaction.mapping.values():
            assert value not in prompt
        assert result.redaction.redacted_text in prompt

    def test_result_carries_redaction(self, stub_provider, sample_contract_text):
        """Test that the local redaction is attached to the result."""
        guardian = ContractGuardian(provider=stub_provider)
        result = guardian.analyze_text(sample_contract_text, document_id="msa")

        assert result.success is True
        assert result.redaction.original_text == sample_contract_text
        assert "[ENTITY_5]" in result.analysis.summary
        assert "Brightline Consulting LLC" in result.restored().summary

    def test_empty_text_not_sent(self, stub_provider):
        """Test that blank documents fail without a provider call."""
        guardian = ContractGuardian(provider=stub_provider)
        result = guardian.analyze_text("   \n ")

        assert result.success is False
        assert result.error == "Document is empty"
        assert stub_provider.prompts == []

    def test_generated_document_id(self, stub_provider):
        """Test that a document ID is generated when missing."""
        guardian = ContractGuardian(provider=stub_provider)
        result = guardian.analyze_text("Some contract text.")

        assert result.document_id.startswith("doc_")

    def test_redact_helper_is_local(self, stub_provider):
        """Test that redact() does not call the provider."""
        guardian = ContractGuardian(provider=stub_provider)
        result = guardian.redact("a@b.com")

        assert result.redacted_text == "[EMAIL_1]"
        assert stub_provider.prompts == []


class TestFileAnalysis:
    """Test analysis of files, bytes and file-like objects."""

    def test_analyze_file_path(self, stub_provider, contract_file):
        """Test analysis from a file path."""
        guardian = ContractGuardian(provider=stub_provider)
        result = guardian.analyze_file(contract_file)

        assert result.success is True
        assert result.document_id == "msa"
        assert result.file_path == str(contract_file)
        assert result.file_size_bytes == contract_file.stat().st_size

    def test_analyze_bytes(self, stub_provider, sample_contract_text):
        """Test analysis from raw bytes with a filename."""
        guardian = ContractGuardian(provider=stub_provider)
        result = guardian.analyze_file(
            sample_contract_text.encode("utf-8"), filename="lease.txt"
        )

        assert result.success is True
        assert result.document_id == "lease"
        assert result.file_path is None

    def test_analyze_file_like(self, stub_provider, sample_contract_text):
        """Test analysis from a file-like object."""
        guardian = ContractGuardian(provider=stub_provider)
        result = guardian.analyze_file(
            io.BytesIO(sample_contract_text.encode("utf-8")), filename="nda.txt"
        )

        assert result.success is True
        assert result.document_id == "nda"

    def test_file_not_found(self, stub_provider, tmp_path):
        """Test missing files are reported, not raised."""
        guardian = ContractGuardian(provider=stub_provider)
        result = guardian.analyze_file(tmp_path / "missing.pdf")

        assert result.success is False
        assert "File not found" in result.error
        assert result.document_id == "missing"

    def test_unsupported_type(self, stub_provider, tmp_path):
        """Test unsupported extensions are reported."""
        path = tmp_path / "contract.xyz"
        path.write_bytes(b"data")

        guardian = ContractGuardian(provider=stub_provider)
        result = guardian.analyze_file(path)

        assert result.success is False
        assert "Unsupported file type" in result.error

    def test_corrupt_docx_reported(self, stub_provider):
        """Test that unreadable DOCX bytes give a failed result."""
        docx = MagicMock()
        docx.Document.side_effect = zipfile.BadZipFile("File is not a zip file")

        guardian = ContractGuardian(provider=stub_provider)
        with patch.dict(sys.modules, {"docx": docx}):
            result = guardian.analyze_file(b"not a zip", filename="c.docx")

        assert result.success is False
        assert "Could not read DOCX" in result.error
        assert result.document_id == "c"
        assert stub_provider.prompts == []

    def test_corrupt_pdf_reported(self, stub_provider):
        """Test that unreadable PDF bytes give a failed result."""
        pdfplumber = MagicMock()
        pdfplumber.open.side_effect = Exception("No /Root object!")

        guardian = ContractGuardian(provider=stub_provider)
        with patch.dict(sys.modules, {"pdfplumber": pdfplumber}):
            result = guardian.analyze_file(b"%PDF-garbage", filename="c.pdf")

        assert result.success is False
        assert "Could not read PDF" in result.error

    def test_images_refused_by_default(self, stub_provider, tmp_path):
        """Test that scanned images are not sent without opt-in."""
        path = tmp_path / "scan.jpg"
        path.write_bytes(b"\xff\xd8\xff")

        guardian = ContractGuardian(provider=stub_provider)
        result = guardian.analyze_file(path)

        assert result.success is False
        assert "cannot be redacted" in result.error
        assert stub_provider.prompts == []
        assert result.file_path == str(path)

    def test_images_sent_with_opt_in(self, stub_provider, tmp_path):
        """Test that opted-in images go to the vision API."""
        path = tmp_path / "scan.png"
        path.write_bytes(b"\x89PNG")

        guardian = ContractGuardian(provider=stub_provider, allow_unredacted_images=True)
        result = guardian.analyze_file(path)

        assert result.success is True
        assert result.redaction is None
        assert stub_provider.images == [[(b"\x89PNG", "image/png")]]


class TestAnthropicIntegration:
    """Test the full path through the Anthropic SDK client (mocked)."""

    @patch("contractguard.providers.anthropic.Anthropic")
    def test_analyze_text_with_anthropic(
        self, mock_anthropic, mock_anthropic_response, sample_contract_text, api_key
    ):
        """Test analysis with a mocked Anthropic client."""
        mock_client = MagicMock()
        mock_client.messages.create.return_value = mock_anthropic_response
        mock_anthropic.return_value = mock_client

        guardian = ContractGuardian(api_key=api_key)
        result = guardian.analyze_text(sample_contract_text, document_id="msa")

        assert isinstance(result, AnalysisResult)
        assert result.success is True
        assert result.provider == "anthropic"
        assert result.input_tokens == 1200

        kwargs = mock_client.messages.create.call_args.kwargs
        sent = kwargs["messages"][0]["content"]
        assert "billing@brightline.io" not in sent
        assert "[EMAIL_1]" in sent
        assert "Contract Guardian" in kwargs["system"]

    @patch("contractguard.providers.anthropic.Anthropic")
    def test_analyze_one_liner(
        self, mock_anthropic, mock_anthropic_response, contract_file, api_key
    ):
        """Test the analyze() convenience function."""
        mock_client = MagicMock()
        mock_client.messages.create.return_value = mock_anthropic_response
        mock_anthropic.return_value = mock_client

        result = analyze(contract_file, api_key=api_key)

        assert result.success is True
        assert result.document_id == "msa"

    @patch("contractguard.providers.anthropic.Anthropic")
    def test_api_error_becomes_failed_result(self, mock_anthropic, api_key):
        """Test that SDK exceptions are reported in the result."""
        mock_client = MagicMock()
        mock_client.messages.create.side_effect = RuntimeError("overloaded")
        mock_anthropic.return_value = mock_client

        guardian = ContractGuardian(api_key=api_key)
        result = guardian.analyze_text("Short contract with Acme Corp.")

        assert result.success is False
        assert "overloaded" in result.error
        assert result.redaction.mapping == {"[ENTITY_1]": "Acme Corp"}


def test_stub_failure_keeps_redaction(sample_contract_text):
    """Test that failed analyses still expose the local redaction."""
    provider = StubProvider([completion("", success=False, error="boom")])
    guardian = ContractGuardian(provider=provider)

    result = guardian.analyze_text(sample_contract_text)

    assert result.success is False
    assert len(result.redaction) == 6
