"""Audit source layer.

Sources run an external page-quality audit for one URL and hand back a
validated raw result.

Use explicit imports:
    from auditor.source.providers import AuditSource, get_source
    from auditor.source.models import RawAuditResult, AuditSourceType
"""

__all__ = [
    # Providers
    "AuditSource",
    "PageSpeedSource",
    "LighthouseCliSource",
    "MockSource",
    "SourceConfig",
    "get_source",
    # Models
    "AuditSourceType",
    "RawAuditResult",
    "RawCategory",
    "RawAudit",
    "AuditRef",
    "parse_audit_result",
]
