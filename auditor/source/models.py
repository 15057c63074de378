"""Raw audit result schema.

Validates the subset of a Lighthouse result (LHR) the extractor relies on.
Unknown keys are ignored. Categories are deliberately optional so a result
missing one reaches the extractor, which fails closed for that site.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.exceptions import MalformedAuditResultError


class AuditSourceType(StrEnum):
    """Supported audit sources."""

    PAGESPEED = "pagespeed"
    LIGHTHOUSE = "lighthouse"
    MOCK = "mock"


class _RawModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class AuditRef(_RawModel):
    """Reference from a category to one audit."""

    id: str
    weight: float = Field(default=0, ge=0)


class RawCategory(_RawModel):
    """One category's overall score and its audit references."""

    score: float | None = Field(default=None, ge=0, le=1)
    audit_refs: list[AuditRef] = Field(default_factory=list, alias="auditRefs")


class RawAudit(_RawModel):
    """One audit from the global audit lookup."""

    title: str = ""
    description: str = ""
    score: float | None = Field(default=None, ge=0, le=1)
    score_display_mode: str = Field(default="numeric", alias="scoreDisplayMode")
    display_value: str | None = Field(default=None, alias="displayValue")
    numeric_value: float | None = Field(default=None, alias="numericValue")
    numeric_unit: str | None = Field(default=None, alias="numericUnit")
    details: dict[str, Any] | None = None

    @property
    def has_details(self) -> bool:
        return self.details is not None


class RawAuditResult(_RawModel):
    """Validated raw result for one audited URL."""

    requested_url: str | None = Field(default=None, alias="requestedUrl")
    final_url: str | None = Field(default=None, alias="finalUrl")
    lighthouse_version: str | None = Field(default=None, alias="lighthouseVersion")
    categories: dict[str, RawCategory] = Field(default_factory=dict)
    audits: dict[str, RawAudit] = Field(default_factory=dict)

    def numeric_value(self, audit_id: str) -> float | None:
        """Numeric value of an audit, None if absent."""
        audit = self.audits.get(audit_id)
        return audit.numeric_value if audit else None


def parse_audit_result(data: Any, url: str, source: str | None = None) -> RawAuditResult:
    """
    Validate a raw Lighthouse result.

    Args:
        data: Decoded LHR JSON
        url: Audited URL, for error context
        source: Name of the producing source

    Raises:
        MalformedAuditResultError: The payload does not fit the schema
    """
    if not isinstance(data, dict):
        raise MalformedAuditResultError(url, "expected a JSON object", source=source)
    try:
        return RawAuditResult.model_validate(data)
    except ValidationError as e:
        raise MalformedAuditResultError(
            url, f"{e.error_count()} validation error(s)", source=source
        ) from e
