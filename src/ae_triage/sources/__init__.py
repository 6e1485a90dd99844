"""
Upstream collaborators.

Report sources (openFDA, JSON file, static) and entity extractors
(lexicon, AWS Comprehend Medical).
"""

from ae_triage.sources.base import BaseExtractor, BaseReportSource
from ae_triage.sources.extractors import ComprehendMedicalExtractor, LexiconExtractor
from ae_triage.sources.files import JsonFileReportSource, StaticReportSource
from ae_triage.sources.openfda import OpenFDAEventSource, parse_openfda_report

__all__ = [
    "BaseExtractor",
    "BaseReportSource",
    "ComprehendMedicalExtractor",
    "LexiconExtractor",
    "JsonFileReportSource",
    "StaticReportSource",
    "OpenFDAEventSource",
    "parse_openfda_report",
]
