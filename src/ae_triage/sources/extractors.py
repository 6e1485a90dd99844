"""
Medical entity extractors.

- LexiconExtractor: offline phrase lookup against a term -> category map
- ComprehendMedicalExtractor: AWS Comprehend Medical DetectEntitiesV2
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from ae_triage.config import settings
from ae_triage.models import EntityCategory, MedicalEntity
from ae_triage.sources.base import BaseExtractor

logger = logging.getLogger(__name__)


class LexiconExtractor(BaseExtractor):
    """
    Find known phrases in text.

    Matching is case-insensitive on word boundaries. Entities are returned in
    order of first appearance; the text is the span as written.
    """

    source_key = "lexicon"

    def __init__(self, lexicon: Mapping[str, EntityCategory | str] | None = None):
        if lexicon is None:
            lexicon = {
                term: EntityCategory.MEDICAL_CONDITION
                for term in settings.high_risk_conditions
            }
        self.lexicon = {
            term.strip().lower(): EntityCategory(category)
            for term, category in lexicon.items()
            if term.strip()
        }
        self._patterns = {
            term: re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)
            for term in self.lexicon
        }

    def extract(self, text: str) -> list[MedicalEntity]:
        found = []
        for term, pattern in self._patterns.items():
            for m in pattern.finditer(text):
                found.append((m.start(), MedicalEntity(m.group(0), self.lexicon[term])))
        found.sort(key=lambda item: item[0])
        return [entity for _, entity in found]


class ComprehendMedicalExtractor(BaseExtractor):
    """Extract entities with AWS Comprehend Medical (requires boto3)."""

    source_key = "comprehend_medical"

    def __init__(self, region: str | None = None, client: Any = None):
        if client is None:
            import boto3

            client = boto3.client("comprehendmedical", region_name=region or settings.aws_region)
        self._client = client

    def extract(self, text: str) -> list[MedicalEntity]:
        response = self._client.detect_entities_v2(Text=text)
        entities = []
        for item in response.get("Entities", []):
            try:
                category = EntityCategory(item["Category"])
            except ValueError:
                logger.debug("Skipping entity with category %s", item["Category"])
                continue
            entities.append(MedicalEntity(text=item["Text"], category=category))
        return entities
