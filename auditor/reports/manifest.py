"""Manifest of available monthly summaries.

The manifest is the discovery index for the dashboard: one entry per month,
always ordered newest first so the latest month is the first entry.
"""

from dataclasses import dataclass, field

from auditor.reports.contract import ManifestEntry


def summary_filename(month: str) -> str:
    """Storage filename of a month's summary document."""
    return f"{month}-summary.json"


@dataclass
class ReportManifest:
    """Ordered index of monthly summaries."""

    entries: list[ManifestEntry] = field(default_factory=list)

    def upsert(self, month: str, filename: str, generated_at: str) -> ManifestEntry:
        """
        Insert or replace the entry for a month and restore ordering.

        Args:
            month: Month key (YYYY-MM)
            filename: Summary document filename
            generated_at: ISO timestamp of the summary

        Returns:
            The stored entry
        """
        entry = ManifestEntry(month=month, filename=filename, generated_at=generated_at)

        for i, existing in enumerate(self.entries):
            if existing.month == month:
                self.entries[i] = entry
                break
        else:
            self.entries.append(entry)

        # YYYY-MM sorts chronologically as a string
        self.entries.sort(key=lambda e: e.month, reverse=True)
        return entry

    @property
    def months(self) -> list[str]:
        """Month keys, newest first."""
        return [e.month for e in self.entries]

    @property
    def latest_month(self) -> str | None:
        return self.entries[0].month if self.entries else None

    def to_dict(self) -> dict:
        return {"reports": [e.to_dict() for e in self.entries]}

    @classmethod
    def from_dict(cls, data: dict) -> "ReportManifest":
        """
        Build a manifest from its stored form.

        Raises:
            ValueError: The document is not a manifest
        """
        if not isinstance(data, dict) or not isinstance(data.get("reports", []), list):
            raise ValueError("manifest must be an object with a 'reports' list")

        manifest = cls()
        # Route through upsert so duplicated or unordered files come back clean
        for raw in data.get("reports", []):
            entry = ManifestEntry.from_dict(raw)
            manifest.upsert(entry.month, entry.filename, entry.generated_at)
        return manifest
