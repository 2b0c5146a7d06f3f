"""
Similar Company Search
======================
Pairwise comparison of a target lead against a pool of leads.

Factors (default weights):
- Industry (30%), Location (20%), Size (15%): label similarity
- Keywords (20%): description token overlap
- Website (15%): shared host or registrable domain
"""

import logging
from typing import List, Optional

from ..models.schemas import Lead, SimilarCompany, SimilarityFactors
from ..models.engine_config import EngineConfig
from .field_similarity import field_similarity, keyword_similarity, website_similarity

logger = logging.getLogger(__name__)


class SimilarityStage:
    """
    Rank pool leads by weighted similarity to a target lead.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.weights = self.config.similarity_weights
        self.threshold = self.config.limits.similarity_threshold

    def process(
        self,
        target: Lead,
        pool: List[Lead],
        max_results: Optional[int] = None,
    ) -> List[SimilarCompany]:
        """
        Find the leads most similar to the target.

        Args:
            target: Lead to compare against
            pool: Candidate leads; the target itself is skipped
            max_results: Result cap (defaults to the configured limit)

        Returns:
            SimilarCompany list, most similar first, ties in pool order
        """
        if max_results is None:
            max_results = self.config.limits.max_similar_results

        candidates = []
        for lead in pool:
            if self._is_same_lead(target, lead):
                continue

            factors = self.calculate_factors(target, lead)
            similarity = self.calculate_overall(factors)
            if similarity > self.threshold:
                candidates.append(
                    SimilarCompany(lead=lead, similarity=similarity, factors=factors)
                )

        # sorted() is stable with reverse=True, so ties keep pool order
        ranked = sorted(candidates, key=lambda c: c.similarity, reverse=True)
        logger.debug(
            "Found %d similar leads above %.2f for %s",
            len(ranked), self.threshold, target.lead_id or target.company_name,
        )
        return ranked[:max(max_results, 0)]

    def calculate_factors(self, a: Lead, b: Lead) -> SimilarityFactors:
        """Compute the five similarity factors between two leads"""
        return SimilarityFactors(
            industry_match=field_similarity(a.industry, b.industry),
            location_match=field_similarity(a.location, b.location),
            size_match=field_similarity(a.company_size, b.company_size),
            keyword_match=keyword_similarity(a.description, b.description),
            website_match=website_similarity(a.customer_website, b.customer_website),
        )

    def calculate_overall(self, factors: SimilarityFactors) -> float:
        """Weighted combination of the similarity factors"""
        return (
            factors.industry_match * self.weights.industry_match
            + factors.location_match * self.weights.location_match
            + factors.size_match * self.weights.size_match
            + factors.keyword_match * self.weights.keyword_match
            + factors.website_match * self.weights.website_match
        )

    @staticmethod
    def _is_same_lead(target: Lead, lead: Lead) -> bool:
        if lead is target:
            return True
        return target.lead_id is not None and lead.lead_id == target.lead_id
