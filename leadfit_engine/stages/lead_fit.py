"""
Lead Fit Scoring
================
Deterministic five-dimension fit score for one lead against one set of
search criteria.

Dimensions (default weights):
- Industry (30%): exact, partial or related-industry match
- Location (20%): exact, partial or same-region match
- Company Size (15%): distance between size buckets
- Engagement (20%): reachable contact details on the lead
- AI Confidence (15%): discovery evidence and data completeness
"""

import logging
from typing import List, Optional

from ..models.schemas import Lead, SearchCriteria, ScoreVector
from ..models.engine_config import EngineConfig
from ..config.settings import COMPANY_SIZE_SUFFIXES, COMPLETENESS_FIELDS
from .field_similarity import normalize_label, contains_term

logger = logging.getLogger(__name__)

UNCONSTRAINED_SCORE = 0.8
EXACT_SCORE = 1.0
CONTAINS_SCORE = 0.9
RELATED_INDUSTRY_SCORE = 0.7
SAME_REGION_SCORE = 0.6
NO_MATCH_SCORE = 0.3
SIZE_DISTANCE_SCORES = {0: 1.0, 1: 0.8, 2: 0.6}
SIZE_MISMATCH_SCORE = 0.4


def round_score(value: float) -> float:
    """Round to two decimals the way every published score is rounded"""
    return round(value * 100) / 100


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class LeadFitScoringStage:
    """
    Score a lead against search criteria across five weighted dimensions.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize with engine configuration or use defaults.
        """
        self.config = config or EngineConfig()
        self.weights = self.config.fit_weights
        self.size_buckets = [self._normalize_size(b) for b in self.config.company_size_buckets]

    def process(self, lead: Lead, criteria: SearchCriteria) -> ScoreVector:
        """
        Calculate the fit score vector.

        Args:
            lead: Lead to score
            criteria: Search criteria; absent fields do not penalize the lead

        Returns:
            ScoreVector with every value rounded to two decimals
        """
        industry = self._score_industry(lead, criteria)
        location = self._score_location(lead, criteria)
        company_size = self._score_company_size(lead, criteria)
        engagement = self._score_engagement(lead)
        ai_confidence = self._score_ai_confidence(lead)

        overall = (
            industry * self.weights.industry
            + location * self.weights.location
            + company_size * self.weights.company_size
            + engagement * self.weights.engagement
            + ai_confidence * self.weights.ai_confidence
        )

        scores = ScoreVector(
            overall=round_score(overall),
            industry=round_score(industry),
            location=round_score(location),
            company_size=round_score(company_size),
            engagement=round_score(engagement),
            ai_confidence=round_score(ai_confidence),
        )
        logger.debug("Scored lead %s: %s", lead.lead_id or lead.company_name, scores)
        return scores

    # =========================================================================
    # Sub-scoring functions
    # =========================================================================

    def _score_industry(self, lead: Lead, criteria: SearchCriteria) -> float:
        """Score industry match"""
        target = normalize_label(criteria.industry)
        if not target:
            return UNCONSTRAINED_SCORE

        industry = normalize_label(lead.industry)
        if not industry:
            return NO_MATCH_SCORE

        if industry == target:
            return EXACT_SCORE
        if industry in target or target in industry:
            return CONTAINS_SCORE

        for related in self._related_industries(target):
            if contains_term(industry, related):
                return RELATED_INDUSTRY_SCORE

        return NO_MATCH_SCORE

    def _score_location(self, lead: Lead, criteria: SearchCriteria) -> float:
        """Score geographic match"""
        target = normalize_label(criteria.location)
        if not target:
            return UNCONSTRAINED_SCORE

        location = normalize_label(lead.location)
        if not location:
            return NO_MATCH_SCORE

        if location == target:
            return EXACT_SCORE
        if location in target or target in location:
            return CONTAINS_SCORE

        if self._same_region(location, target):
            return SAME_REGION_SCORE

        return NO_MATCH_SCORE

    def _score_company_size(self, lead: Lead, criteria: SearchCriteria) -> float:
        """Score company size by bucket distance"""
        if is_blank(criteria.company_size):
            return UNCONSTRAINED_SCORE

        lead_size = self._normalize_size(lead.company_size)
        target_size = self._normalize_size(criteria.company_size)
        if lead_size and lead_size == target_size:
            return EXACT_SCORE

        if lead_size not in self.size_buckets or target_size not in self.size_buckets:
            return SIZE_MISMATCH_SCORE

        distance = abs(self.size_buckets.index(lead_size) - self.size_buckets.index(target_size))
        return SIZE_DISTANCE_SCORES.get(distance, SIZE_MISMATCH_SCORE)

    def _score_engagement(self, lead: Lead) -> float:
        """Score how reachable the lead is"""
        score = 0.5

        if not is_blank(lead.customer_website):
            score += 0.2
        if not is_blank(lead.contact_person):
            score += 0.1
        if not is_blank(lead.phone):
            score += 0.1
        if lead.description and len(lead.description) > 50:
            score += 0.1

        return min(score, 1.0)

    def _score_ai_confidence(self, lead: Lead) -> float:
        """Score confidence in the discovered lead data"""
        confidence = 0.5

        if lead.match_reasons:
            confidence += 0.1 * len(lead.match_reasons)

        if lead.discovery_confidence is not None:
            confidence = (confidence + lead.discovery_confidence) / 2

        confidence = (confidence + self.calculate_data_completeness(lead)) / 2

        return min(confidence, 1.0)

    # =========================================================================
    # Helper functions
    # =========================================================================

    @staticmethod
    def calculate_data_completeness(lead: Lead) -> float:
        """Fraction of the eight contact/firmographic fields that are filled"""
        filled = sum(1 for field in COMPLETENESS_FIELDS if not is_blank(getattr(lead, field)))
        return filled / len(COMPLETENESS_FIELDS)

    def _related_industries(self, target: str) -> List[str]:
        for relation in self.config.industry_relations:
            if any(contains_term(target, alias) for alias in relation.aliases):
                return relation.related
        return []

    def _same_region(self, location_a: str, location_b: str) -> bool:
        for cluster in self.config.region_clusters:
            in_a = any(contains_term(location_a, place) for place in cluster)
            in_b = any(contains_term(location_b, place) for place in cluster)
            if in_a and in_b:
                return True
        return False

    @staticmethod
    def _normalize_size(value: Optional[str]) -> str:
        size = normalize_label(value)
        for suffix in COMPANY_SIZE_SUFFIXES:
            if size.endswith(suffix):
                size = size[: -len(suffix)].strip()
        return size.replace(" ", "")
