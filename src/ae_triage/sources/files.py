"""
Offline report sources.

JsonFileReportSource reads a saved openFDA response (or a bare list of
event records) so analyses can run without network access.
"""

import json
from collections.abc import Iterable
from pathlib import Path

from ae_triage.errors import UpstreamCorpusError
from ae_triage.models import AdverseEventReport
from ae_triage.sources.base import BaseReportSource
from ae_triage.sources.openfda import parse_openfda_report


class JsonFileReportSource(BaseReportSource):
    """Read openFDA-shaped event records from a JSON file."""

    source_key = "json_file"

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def fetch(self, limit: int) -> list[AdverseEventReport]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise UpstreamCorpusError(f"Cannot read reports from {self.path}: {e}") from e

        records = data.get("results", []) if isinstance(data, dict) else data
        if not isinstance(records, list):
            raise UpstreamCorpusError(f"{self.path} does not contain a list of reports")

        return [parse_openfda_report(r) for r in records[: max(limit, 0)]]


class StaticReportSource(BaseReportSource):
    """Serve a fixed list of reports."""

    source_key = "static"

    def __init__(self, reports: Iterable[AdverseEventReport] = ()):
        self.reports = list(reports)

    def fetch(self, limit: int) -> list[AdverseEventReport]:
        return self.reports[: max(limit, 0)]
