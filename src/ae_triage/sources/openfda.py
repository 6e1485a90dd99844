"""
openFDA adverse event source.

Reads recent FAERS reports from the openFDA drug event API.
https://open.fda.gov/apis/drug/event/
"""

import logging
from typing import Any

import httpx
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from ae_triage.config import Settings, settings
from ae_triage.errors import UpstreamCorpusError
from ae_triage.models import AdverseEventReport
from ae_triage.sources.base import BaseReportSource

logger = logging.getLogger(__name__)

UNKNOWN_DRUG = "unknown"


def parse_openfda_report(record: dict[str, Any]) -> AdverseEventReport:
    """
    Convert one openFDA event record to an AdverseEventReport.

    The first listed drug is taken as the suspect product. Reaction terms
    (MedDRA preferred terms) are lower-cased and deduplicated in order.
    """
    patient = record.get("patient") or {}
    drugs = patient.get("drug") or []
    drug = ""
    if drugs:
        drug = (drugs[0].get("medicinalproduct") or "").strip().lower()

    reactions: dict[str, None] = {}
    for reaction in patient.get("reaction") or []:
        term = (reaction.get("reactionmeddrapt") or "").strip().lower()
        if term:
            reactions[term] = None

    return AdverseEventReport(
        report_id=str(record.get("safetyreportid") or ""),
        drug=drug or UNKNOWN_DRUG,
        serious=str(record.get("serious", "")) == "1",
        reactions=tuple(reactions),
    )


def _is_transient(exc: BaseException) -> bool:
    """Network errors, rate limiting and 5xx are worth retrying."""
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return False


class OpenFDAEventSource(BaseReportSource):
    """Fetch adverse event reports from the openFDA API."""

    source_key = "openfda"

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        search: str | None = None,
        timeout: float | None = None,
        attempts: int | None = None,
        client: httpx.Client | None = None,
        wait: wait_base | None = None,
    ):
        self.url = url or settings.openfda_url
        self.api_key = api_key if api_key is not None else settings.openfda_api_key
        self.search = search if search is not None else settings.openfda_search
        self.timeout = timeout or settings.request_timeout
        self.attempts = attempts or settings.retry_attempts
        self._client = client
        self.wait = wait or wait_exponential(multiplier=1, min=1, max=10)

    @classmethod
    def from_settings(cls, config: Settings) -> "OpenFDAEventSource":
        return cls(
            url=config.openfda_url,
            api_key=config.openfda_api_key,
            search=config.openfda_search,
            timeout=config.request_timeout,
            attempts=config.retry_attempts,
        )

    def fetch(self, limit: int) -> list[AdverseEventReport]:
        """
        Fetch the latest ``limit`` reports.

        Args:
            limit: Number of reports to request

        Returns:
            List of AdverseEventReport in API order

        Raises:
            UpstreamCorpusError: On HTTP or payload failure after retries
        """
        if limit <= 0:
            return []

        params: dict[str, Any] = {"limit": limit}
        if self.search:
            params["search"] = self.search
        if self.api_key:
            params["api_key"] = self.api_key

        try:
            payload = self._get(params)
        except (httpx.HTTPError, RetryError, ValueError) as e:
            raise UpstreamCorpusError(f"openFDA request failed: {e}") from e

        if payload is None:
            return []

        results = payload.get("results")
        if not isinstance(results, list):
            raise UpstreamCorpusError("openFDA response has no results list")

        reports = [parse_openfda_report(r) for r in results[:limit]]
        logger.debug("Fetched %d openFDA reports", len(reports))
        return reports

    def _get(self, params: dict[str, Any]) -> dict[str, Any] | None:
        """GET with retries; returns None when openFDA reports no matches."""
        retrying = Retrying(
            stop=stop_after_attempt(self.attempts),
            wait=self.wait,
            retry=retry_if_exception(_is_transient),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                response = self._request(params)
                # openFDA answers an empty search with 404 NOT_FOUND
                if response.status_code == 404:
                    return None
                response.raise_for_status()
                return response.json()
        return None

    def _request(self, params: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return self._client.get(self.url, params=params)
        with httpx.Client(timeout=self.timeout) as client:
            return client.get(self.url, params=params)
