"""Tests for fuzzy matching of entities against report reactions."""

import pytest

from ae_triage.analysis import (
    FuzzyMatcher,
    exact_similarity,
    get_similarity,
    levenshtein_similarity,
    token_sort_similarity,
)
from ae_triage.errors import ConfigurationError
from ae_triage.models import AdverseEventReport, EntityCategory, MedicalEntity


def condition(text: str) -> MedicalEntity:
    return MedicalEntity(text, EntityCategory.MEDICAL_CONDITION)


def report(report_id: str, *reactions: str, drug: str = "drugx", serious: bool = False):
    return AdverseEventReport(report_id=report_id, drug=drug, serious=serious, reactions=reactions)


# ---------------------------------------------------------------------------
# Similarity Strategies
# ---------------------------------------------------------------------------


class TestSimilarity:
    """Tests for similarity strategy functions."""

    def test_levenshtein_identical(self):
        assert levenshtein_similarity("sepsis", "sepsis") == 1.0

    def test_levenshtein_normalized_by_longer(self):
        """One edit over seven characters."""
        assert levenshtein_similarity("sepsis", "sepsiss") == pytest.approx(6 / 7)

    def test_token_sort_ignores_order(self):
        assert token_sort_similarity("pain chest", "chest pain") == 1.0

    def test_exact(self):
        assert exact_similarity("nausea", "nausea") == 1.0
        assert exact_similarity("nausea", "nausea ") == 0.0

    def test_lookup_by_name(self):
        assert get_similarity("levenshtein") is levenshtein_similarity
        assert get_similarity("exact") is exact_similarity

    def test_unknown_strategy(self):
        with pytest.raises(ConfigurationError):
            get_similarity("soundex")


# ---------------------------------------------------------------------------
# Threshold Boundary
# ---------------------------------------------------------------------------


class TestThreshold:
    """Tests for the maximum normalized distance."""

    def test_one_extra_letter_matches(self):
        """'sepsiss' is 1/7 away from 'sepsis', inside the 0.2 threshold."""
        matcher = FuzzyMatcher()
        matches = matcher.match([condition("sepsis")], [report("1", "sepsiss")])
        assert len(matches) == 1
        assert matches[0].reaction == "sepsiss"

    def test_two_extra_letters_rejected(self):
        """'sepsisxx' is 2/8 = 0.25 away, outside the 0.2 threshold."""
        matcher = FuzzyMatcher()
        assert matcher.match([condition("sepsis")], [report("1", "sepsisxx")]) == []

    def test_exactly_at_threshold_matches(self):
        """One edit in five characters is exactly 0.2."""
        matcher = FuzzyMatcher(threshold=0.2)
        assert matcher.distance("abcde", "abcdx") == 0.2
        assert len(matcher.match([condition("abcde")], [report("1", "abcdx")])) == 1

    def test_one_edit_beyond_threshold_rejected(self):
        """Two edits in five characters is 0.4."""
        matcher = FuzzyMatcher(threshold=0.2)
        assert matcher.match([condition("abcde")], [report("1", "abcxy")]) == []

    def test_looser_threshold_accepts(self):
        matcher = FuzzyMatcher(threshold=0.25)
        assert len(matcher.match([condition("sepsis")], [report("1", "sepsisxx")])) == 1

    def test_zero_threshold_is_exact(self):
        matcher = FuzzyMatcher(threshold=0.0)
        assert matcher.match([condition("sepsis")], [report("1", "sepsiss")]) == []
        assert len(matcher.match([condition("sepsis")], [report("1", "sepsis")])) == 1

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_invalid_threshold(self, threshold):
        with pytest.raises(ConfigurationError):
            FuzzyMatcher(threshold=threshold)


# ---------------------------------------------------------------------------
# Match Selection
# ---------------------------------------------------------------------------


class TestMatchSelection:
    """Tests for per-report selection and ordering."""

    def test_best_reaction_wins(self):
        """The lowest-distance reaction in a report is chosen."""
        matcher = FuzzyMatcher()
        matches = matcher.match([condition("sepsis")], [report("1", "sepsiss", "sepsis")])
        assert [m.reaction for m in matches] == ["sepsis"]
        assert matches[0].distance == 0.0

    def test_tie_keeps_first_stored(self):
        """Equal distances resolve to the reaction stored first."""
        matcher = FuzzyMatcher()
        matches = matcher.match([condition("sepsis")], [report("1", "sepsisa", "sepsisb")])
        assert [m.reaction for m in matches] == ["sepsisa"]

    def test_one_match_per_report(self):
        """An entity matches each qualifying report at most once."""
        matcher = FuzzyMatcher()
        reports = [
            report("1", "sepsis", "sepsiss", drug="drugx", serious=True),
            report("2", "nausea", drug="drugy"),
            report("3", "sepsis", drug="drugz"),
        ]
        matches = matcher.match([condition("sepsis")], reports)
        assert [(m.report_id, m.drug) for m in matches] == [("1", "drugx"), ("3", "drugz")]
        assert matches[0].serious is True
        assert matches[1].serious is False

    def test_order_follows_entities_then_reports(self):
        matcher = FuzzyMatcher()
        reports = [report("1", "nausea", "sepsis"), report("2", "sepsis", "nausea")]
        matches = matcher.match([condition("sepsis"), condition("nausea")], reports)
        assert [(m.symptom, m.report_id) for m in matches] == [
            ("sepsis", "1"),
            ("sepsis", "2"),
            ("nausea", "1"),
            ("nausea", "2"),
        ]

    def test_match_carries_entity_category(self):
        matcher = FuzzyMatcher()
        entity = MedicalEntity("aspirin", EntityCategory.MEDICATION)
        matches = matcher.match([entity], [report("1", "aspirin")])
        assert matches[0].category is EntityCategory.MEDICATION

    def test_no_match(self):
        matcher = FuzzyMatcher()
        assert matcher.match([condition("chest pain")], [report("1", "sepsis")]) == []

    def test_empty_inputs(self):
        matcher = FuzzyMatcher()
        assert matcher.match([], [report("1", "sepsis")]) == []
        assert matcher.match([condition("sepsis")], []) == []
        assert matcher.match([condition("sepsis")], [report("1")]) == []

    def test_exact_strategy(self):
        """The exact strategy rejects any spelling variance."""
        matcher = FuzzyMatcher(similarity=exact_similarity)
        reports = [report("1", "sepsiss"), report("2", "sepsis")]
        matches = matcher.match([condition("sepsis")], reports)
        assert [m.report_id for m in matches] == ["2"]
