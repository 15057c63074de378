"""Custom exceptions for the audit pipeline and report store."""

from pathlib import Path
from typing import Any


class GovWebError(Exception):
    """Base exception for the auditor."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class SourceUnavailableError(GovWebError):
    """The audit source could not produce a result for a URL."""

    def __init__(self, url: str, reason: str, source: str | None = None):
        details = {"url": url}
        if source:
            details["source"] = source
        super().__init__(
            message=f"Audit of {url} failed: {reason}",
            code="source_unavailable",
            details=details,
        )
        self.url = url
        self.reason = reason


class MalformedAuditResultError(SourceUnavailableError):
    """The audit source answered, but not with a usable audit result."""

    def __init__(self, url: str, reason: str, source: str | None = None):
        super().__init__(url, f"malformed result ({reason})", source=source)
        self.code = "malformed_audit_result"


class MissingCategoryError(GovWebError):
    """A raw audit result lacks one of the tracked categories."""

    def __init__(self, category: str, url: str | None = None):
        message = f"Audit result has no '{category}' category"
        if url:
            message = f"{message} for {url}"
        super().__init__(
            message=message,
            code="missing_category",
            details={"category": category, "url": url},
        )
        self.category = category


class MissingDocumentError(GovWebError):
    """A persisted document does not exist."""

    def __init__(self, path: Path | str):
        super().__init__(
            message=f"Document not found: {path}",
            code="missing_document",
            details={"path": str(path)},
        )
        self.path = Path(path)


class MalformedDocumentError(GovWebError):
    """A persisted document exists but cannot be parsed."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(
            message=f"Document {path} is malformed: {reason}",
            code="malformed_document",
            details={"path": str(path), "reason": reason},
        )
        self.path = Path(path)


class ConfigurationError(GovWebError):
    """Static configuration (such as the site list) is missing or unusable."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, code="configuration_error", details=details)
