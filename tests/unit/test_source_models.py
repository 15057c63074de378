"""Tests for raw audit result validation."""

import pytest

from auditor.source.models import parse_audit_result
from core.exceptions import MalformedAuditResultError, SourceUnavailableError
from tests.fixtures import make_audit, make_lhr

URL = "https://www.gov.uk"


class TestParseAuditResult:
    """Tests for parse_audit_result."""

    def test_valid_result(self) -> None:
        lhr = make_lhr(
            performance=0.75,
            refs={"performance": [("speed-index", 3)]},
            audits={"speed-index": make_audit(score=0.5, numeric_value=2100.5)},
        )

        raw = parse_audit_result(lhr, URL)

        assert raw.lighthouse_version == "12.0.0"
        assert raw.categories["performance"].score == 0.75
        assert raw.categories["performance"].audit_refs[0].id == "speed-index"
        assert raw.categories["performance"].audit_refs[0].weight == 3
        assert raw.numeric_value("speed-index") == 2100.5
        assert raw.numeric_value("missing") is None

    def test_unknown_keys_ignored(self) -> None:
        lhr = make_lhr()
        lhr["i18n"] = {"rendererFormattedStrings": {}}
        lhr["audits"]["x"] = {**make_audit(), "warnings": [], "id": "x"}

        raw = parse_audit_result(lhr, URL)

        assert raw.audits["x"].title == "Audit"

    def test_missing_category_allowed(self) -> None:
        """Missing categories are left for the extractor to reject."""
        raw = parse_audit_result(make_lhr(omit=("seo",)), URL)

        assert "seo" not in raw.categories

    def test_has_details(self) -> None:
        lhr = make_lhr(
            audits={
                "with": make_audit(details={"type": "table"}),
                "without": make_audit(),
            }
        )

        raw = parse_audit_result(lhr, URL)

        assert raw.audits["with"].has_details
        assert not raw.audits["without"].has_details

    def test_not_an_object(self) -> None:
        with pytest.raises(MalformedAuditResultError) as exc_info:
            parse_audit_result(None, URL, source="pagespeed")

        assert exc_info.value.url == URL
        assert exc_info.value.details["source"] == "pagespeed"

    def test_score_out_of_range(self) -> None:
        with pytest.raises(MalformedAuditResultError):
            parse_audit_result(make_lhr(performance=1.5), URL)

    def test_negative_weight(self) -> None:
        lhr = make_lhr(refs={"seo": [("document-title", -1)]})

        with pytest.raises(MalformedAuditResultError):
            parse_audit_result(lhr, URL)

    def test_malformed_is_a_source_failure(self) -> None:
        """Callers catching source failures also catch malformed results."""
        with pytest.raises(SourceUnavailableError):
            parse_audit_result([], URL)
