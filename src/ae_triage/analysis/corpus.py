"""
Reaction corpus adapter.

Wraps a report source and hands the matcher a bounded, read-only snapshot.
A failing source degrades to an empty snapshot instead of failing the
analysis.
"""

import logging
from dataclasses import replace

from ae_triage.models import AdverseEventReport
from ae_triage.sources.base import BaseReportSource

logger = logging.getLogger(__name__)


def _fold_reactions(report: AdverseEventReport) -> AdverseEventReport:
    folded = dict.fromkeys(r.strip().lower() for r in report.reactions if r.strip())
    return replace(report, reactions=tuple(folded))


class ReactionCorpus:
    """Per-request snapshot of adverse event reports."""

    def __init__(self, source: BaseReportSource, limit: int = 5):
        self.source = source
        self.limit = limit

    def snapshot(self) -> list[AdverseEventReport]:
        """
        Fetch up to ``limit`` reports.

        Returns:
            Reports in fetch order with case-folded reactions, or an empty
            list if the source failed
        """
        try:
            reports = self.source.fetch(self.limit)
        except Exception as e:
            logger.warning(
                "Adverse event source %s unavailable, continuing without matches: %s",
                getattr(self.source, "source_key", type(self.source).__name__),
                e,
            )
            return []
        return [_fold_reactions(r) for r in reports[: self.limit]]
