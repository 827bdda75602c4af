"""SEO strategies and the optimizer that picks between them."""

import logging
from typing import Optional, Protocol

import httpx
from pydantic import ValidationError as SchemaValidationError

from ..core.observability import metrics_collector
from ..schemas.seo import SeoReport, SeoRequest
from .heuristics import generate_local_suggestions

logger = logging.getLogger(__name__)


class SeoStrategyError(Exception):
    """A strategy could not produce a report."""


class SeoStrategy(Protocol):
    name: str

    @property
    def available(self) -> bool: ...

    async def optimize(self, request: SeoRequest) -> SeoReport: ...


class LocalSeoStrategy:
    """In-process word-frequency heuristics. Always available."""

    name = "local"

    def __init__(self, site_name: str, site_url: str):
        self.site_name = site_name
        self.site_url = site_url

    @property
    def available(self) -> bool:
        return True

    async def optimize(self, request: SeoRequest) -> SeoReport:
        return generate_local_suggestions(request, site_name=self.site_name, site_url=self.site_url)


class RemoteSeoStrategy:
    """
    Delegate to an external optimization endpoint.

    The endpoint receives the request as JSON and must answer with a report
    in the same shape ``SeoReport`` serializes to. Only available when a URL
    is configured.
    """

    name = "remote"

    def __init__(self, url: Optional[str], timeout_seconds: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._client = client

    @property
    def available(self) -> bool:
        return bool(self.url)

    async def optimize(self, request: SeoRequest) -> SeoReport:
        payload = request.model_dump(mode="json")
        try:
            if self._client is not None:
                response = await self._client.post(self.url, json=payload, timeout=self.timeout_seconds)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.post(self.url, json=payload)
            response.raise_for_status()
            report = SeoReport.model_validate(response.json())
        except (httpx.HTTPError, ValueError, SchemaValidationError) as e:
            raise SeoStrategyError(f"Remote SEO endpoint failed: {e.__class__.__name__}") from e

        return report.model_copy(update={"strategy": self.name})


class SeoOptimizer:
    """
    Try each available strategy in order.

    A failing strategy is logged and counted, then the next one is tried. The
    local heuristic is always appended last so a report is always produced.
    """

    def __init__(self, strategies: list[SeoStrategy], local: LocalSeoStrategy):
        self.strategies = [s for s in strategies if s is not local] + [local]

    async def optimize(self, request: SeoRequest) -> SeoReport:
        for strategy in self.strategies:
            if not strategy.available:
                continue
            try:
                report = await strategy.optimize(request)
            except SeoStrategyError as e:
                metrics_collector.record_seo_fallback(strategy.name)
                logger.warning(
                    "SEO strategy failed, falling back",
                    extra={"strategy": strategy.name, "error": str(e)}
                )
                continue

            logger.info(
                "SEO report generated",
                extra={
                    "strategy": strategy.name,
                    "content_type": request.content_type,
                    "keywords": len(report.keywords),
                }
            )
            return report

        # Unreachable while the local strategy is last
        raise SeoStrategyError("No SEO strategy produced a report")
