"""Audit sources - unified interface for running a page-quality audit."""

import asyncio
import json
import shlex
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import httpx
import structlog

from auditor.reports.contract import CATEGORY_IDS
from auditor.source.models import AuditSourceType, RawAuditResult, parse_audit_result
from core.exceptions import SourceUnavailableError

logger = structlog.get_logger(__name__)

PAGESPEED_ENDPOINT = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
LIGHTHOUSE_CATEGORIES = list(CATEGORY_IDS.values())


@dataclass
class SourceConfig:
    """Configuration for an audit source."""

    api_key: str = ""
    base_url: str = ""
    timeout_seconds: float = 120.0

    # PageSpeed Insights
    strategy: str = "desktop"

    # Lighthouse CLI
    binary: str = "lighthouse"
    chrome_flags: str = "--headless --ignore-certificate-errors --no-sandbox"
    max_wait_for_load_ms: int = 45000
    extra_args: list[str] = field(default_factory=list)


class AuditSource(ABC):
    """Abstract base class for audit sources."""

    source_type: AuditSourceType

    def __init__(self, config: SourceConfig):
        self.config = config

    @abstractmethod
    async def run_audit(self, url: str) -> RawAuditResult:
        """
        Audit a single URL.

        Raises:
            SourceUnavailableError: No usable result could be produced
        """
        ...


class PageSpeedSource(AuditSource):
    """Google PageSpeed Insights API (hosted Lighthouse)."""

    source_type = AuditSourceType.PAGESPEED

    def __init__(self, config: SourceConfig, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(config)
        self.base_url = config.base_url or PAGESPEED_ENDPOINT
        self._transport = transport

    def _params(self, url: str) -> list[tuple[str, str]]:
        params = [("url", url), ("strategy", self.config.strategy)]
        # PSI spells categories as PERFORMANCE, BEST_PRACTICES, ...
        params.extend(
            ("category", category.replace("-", "_").upper()) for category in LIGHTHOUSE_CATEGORIES
        )
        if self.config.api_key:
            params.append(("key", self.config.api_key))
        return params

    async def run_audit(self, url: str) -> RawAuditResult:
        """Run the audit through the PageSpeed Insights API."""
        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(self.base_url, params=self._params(url))
        except httpx.TimeoutException as e:
            raise SourceUnavailableError(
                url,
                f"timed out after {self.config.timeout_seconds}s",
                source=self.source_type.value,
            ) from e
        except httpx.HTTPError as e:
            raise SourceUnavailableError(url, str(e), source=self.source_type.value) from e

        if response.status_code != 200:
            raise SourceUnavailableError(
                url,
                f"HTTP {response.status_code}: {response.text[:200]}",
                source=self.source_type.value,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise SourceUnavailableError(
                url, "response is not JSON", source=self.source_type.value
            ) from e

        lhr = payload.get("lighthouseResult") if isinstance(payload, dict) else None
        return parse_audit_result(lhr, url, source=self.source_type.value)


class LighthouseCliSource(AuditSource):
    """Local Lighthouse CLI driving headless Chrome."""

    source_type = AuditSourceType.LIGHTHOUSE

    def build_command(self, url: str) -> list[str]:
        """Lighthouse command line for a URL, JSON report on stdout."""
        return [
            self.config.binary,
            url,
            "--output=json",
            "--output-path=stdout",
            "--quiet",
            f"--only-categories={','.join(LIGHTHOUSE_CATEGORIES)}",
            "--preset=desktop",
            f"--max-wait-for-load={self.config.max_wait_for_load_ms}",
            f"--chrome-flags={self.config.chrome_flags}",
            *self.config.extra_args,
        ]

    async def run_audit(self, url: str) -> RawAuditResult:
        """Run Lighthouse as a subprocess and parse its report."""
        command = self.build_command(url)
        logger.debug("lighthouse_started", command=shlex.join(command))

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise SourceUnavailableError(
                url, f"cannot start {self.config.binary}: {e}", source=self.source_type.value
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.config.timeout_seconds
            )
        except TimeoutError as e:
            process.kill()
            await process.wait()
            raise SourceUnavailableError(
                url,
                f"timed out after {self.config.timeout_seconds}s",
                source=self.source_type.value,
            ) from e

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip().splitlines()
            raise SourceUnavailableError(
                url,
                f"exit code {process.returncode}: {message[-1] if message else 'no output'}",
                source=self.source_type.value,
            )

        return self.parse_report(url, stdout)

    def parse_report(self, url: str, stdout: bytes) -> RawAuditResult:
        """
        Parse the JSON report Lighthouse printed for a URL.

        Raises:
            SourceUnavailableError: The output is not a usable report
        """
        try:
            data = json.loads(stdout)
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            raise SourceUnavailableError(
                url, "report is not JSON", source=self.source_type.value
            ) from e

        if isinstance(data, dict) and data.get("runtimeError"):
            runtime_error = data["runtimeError"]
            code = (
                runtime_error.get("code", "unknown")
                if isinstance(runtime_error, dict)
                else runtime_error
            )
            raise SourceUnavailableError(
                url,
                f"runtime error {code}",
                source=self.source_type.value,
            )

        return parse_audit_result(data, url, source=self.source_type.value)


class MockSource(AuditSource):
    """Mock source for testing."""

    source_type = AuditSourceType.MOCK

    def __init__(self, config: SourceConfig | None = None):
        super().__init__(config or SourceConfig())
        self.results: dict[str, dict] = {}
        self.failing_urls: set[str] = set()
        self.calls: list[str] = []

    def set_result(self, url: str, lhr: dict) -> None:
        """Set the raw LHR returned for a URL."""
        self.results[url] = lhr

    def set_failure(self, url: str) -> None:
        """Make audits of a URL fail."""
        self.failing_urls.add(url)

    async def run_audit(self, url: str) -> RawAuditResult:
        """Return the preset result for a URL."""
        self.calls.append(url)

        if url in self.failing_urls:
            raise SourceUnavailableError(url, "simulated failure", source=self.source_type.value)

        lhr = self.results.get(url)
        if lhr is None:
            raise SourceUnavailableError(url, "no preset result", source=self.source_type.value)

        return parse_audit_result(lhr, url, source=self.source_type.value)


def get_source(
    source_type: AuditSourceType | str,
    config: SourceConfig | None = None,
) -> AuditSource:
    """Factory function to get an audit source."""
    if config is None:
        config = SourceConfig()

    sources: dict[AuditSourceType, type[AuditSource]] = {
        AuditSourceType.PAGESPEED: PageSpeedSource,
        AuditSourceType.LIGHTHOUSE: LighthouseCliSource,
        AuditSourceType.MOCK: MockSource,
    }

    try:
        source_class = sources[AuditSourceType(source_type)]
    except ValueError:
        raise ValueError(f"Unknown audit source: {source_type}") from None

    return source_class(config)
