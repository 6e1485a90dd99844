"""
Adverse event risk analysis pipeline.

Stages (leaves first):
1. normalize_entities: lower-case and deduplicate entities
2. ReactionCorpus: bounded report snapshot, empty on source failure
3. FuzzyMatcher: best reaction per (entity, report) within a threshold
4. RiskScorer: high-risk vocabulary hits → score → level
5. assemble_result: response payload

Usage:
    from ae_triage.analysis import RiskAnalyzer
    result = RiskAnalyzer.from_settings().analyze("Jane Doe", entities)
"""

from ae_triage.analysis.analyzer import RiskAnalyzer, assemble_result
from ae_triage.analysis.corpus import ReactionCorpus
from ae_triage.analysis.matching import (
    SIMILARITY_STRATEGIES,
    FuzzyMatcher,
    exact_similarity,
    get_similarity,
    levenshtein_similarity,
    token_sort_similarity,
)
from ae_triage.analysis.normalize import normalize_entities
from ae_triage.analysis.risk import RiskScorer, level_for_score, score_for_count

__all__ = [
    # Pipeline
    "RiskAnalyzer",
    "assemble_result",
    "normalize_entities",
    "ReactionCorpus",
    # Matching
    "FuzzyMatcher",
    "SIMILARITY_STRATEGIES",
    "get_similarity",
    "levenshtein_similarity",
    "token_sort_similarity",
    "exact_similarity",
    # Risk
    "RiskScorer",
    "score_for_count",
    "level_for_score",
]
