"""Tests for custom exceptions."""

from core.exceptions import (
    ConfigurationError,
    GovWebError,
    MalformedAuditResultError,
    MalformedDocumentError,
    MissingCategoryError,
    MissingDocumentError,
    SourceUnavailableError,
)


def test_base_error() -> None:
    """Test base GovWebError."""
    error = GovWebError(message="Test error", code="test_error")
    assert error.message == "Test error"
    assert error.code == "test_error"
    assert error.details == {}
    assert str(error) == "Test error"


def test_source_unavailable_error() -> None:
    """Test SourceUnavailableError."""
    error = SourceUnavailableError("https://www.gov.uk", "HTTP 500", source="pagespeed")
    assert error.code == "source_unavailable"
    assert error.url == "https://www.gov.uk"
    assert error.reason == "HTTP 500"
    assert error.details == {"url": "https://www.gov.uk", "source": "pagespeed"}
    assert "HTTP 500" in error.message


def test_malformed_audit_result_error() -> None:
    """Test MalformedAuditResultError is a source failure."""
    error = MalformedAuditResultError("https://www.gov.uk", "expected a JSON object")
    assert isinstance(error, SourceUnavailableError)
    assert error.code == "malformed_audit_result"
    assert "expected a JSON object" in error.reason


def test_missing_category_error() -> None:
    """Test MissingCategoryError."""
    error = MissingCategoryError("seo", url="https://www.bund.de")
    assert error.category == "seo"
    assert error.code == "missing_category"
    assert error.message == "Audit result has no 'seo' category for https://www.bund.de"

    assert MissingCategoryError("seo").message == "Audit result has no 'seo' category"


def test_document_errors() -> None:
    """Test MissingDocumentError and MalformedDocumentError."""
    missing = MissingDocumentError("data/reports/manifest.json")
    assert missing.code == "missing_document"
    assert missing.details == {"path": "data/reports/manifest.json"}

    malformed = MalformedDocumentError("data/countries.json", "Expecting value")
    assert malformed.code == "malformed_document"
    assert malformed.details["reason"] == "Expecting value"


def test_configuration_error() -> None:
    """Test ConfigurationError."""
    error = ConfigurationError("No site found", details={"tld": "xx"})
    assert error.code == "configuration_error"
    assert error.details == {"tld": "xx"}
    assert isinstance(error, GovWebError)
