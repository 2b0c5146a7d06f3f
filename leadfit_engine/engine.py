"""
Lead Intelligence Engine - Main Orchestrator
============================================
Wires the scoring stages together:
  Lead Fit → Similar Companies → Analysis Report
  Keyword Extraction → Attachment Relevance → Summary

Every stage is a pure computation over caller-supplied data except keyword
extraction, whose provider call is optional, time-limited and has a
vocabulary fallback.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from .models.schemas import (
    AttachmentRecommendation,
    BatchScoreResult,
    EmailContent,
    Lead,
    LeadAnalysisReport,
    Material,
    ScoredLead,
    ScoreVector,
    SearchCriteria,
    SimilarCompany,
)
from .models.engine_config import EngineConfig, create_default_engine_config
from .config.settings import LLM_CONFIG
from .stages.lead_fit import LeadFitScoringStage
from .stages.similarity import SimilarityStage
from .stages.keyword_extraction import KeywordExtractionStage, Summarizer
from .stages.attachment_relevance import AttachmentRelevanceStage, KeywordExtractor
from .stages.summarizer import RecommendationSummaryStage

logger = logging.getLogger(__name__)


class LeadIntelligenceEngine:
    """
    Main engine that orchestrates lead scoring and attachment matching.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        keyword_extractor: Optional[KeywordExtractor] = None,
        summarizer: Optional[Summarizer] = None,
        llm_api_key: Optional[str] = None,
        llm_provider: Optional[str] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
            keyword_extractor: Replaces the built-in keyword extraction entirely
            summarizer: Prompt-to-text function used by the built-in extractor
            llm_api_key: API key for the built-in extractor's provider client
            llm_provider: LLM provider ("openrouter", "openai" or "anthropic")
        """
        self.config = config or create_default_engine_config()
        self._summarizer = summarizer
        self._llm_api_key = llm_api_key
        self._llm_provider = llm_provider
        self._custom_extractor = keyword_extractor
        self._build_stages()

    def _build_stages(self):
        self.lead_fit = LeadFitScoringStage(self.config)
        self.similarity = SimilarityStage(self.config)
        self.keywords = KeywordExtractionStage(
            summarizer=self._summarizer,
            api_key=self._llm_api_key,
            provider=self._llm_provider,
            config=self.config,
        )
        self.summaries = RecommendationSummaryStage()
        self.attachments = AttachmentRelevanceStage(self.config, self.summaries)
        self.keyword_extractor = self._custom_extractor or self.keywords.process

    # =========================================================================
    # Lead fit & similarity
    # =========================================================================

    def score_lead(self, lead: Lead, criteria: SearchCriteria) -> ScoreVector:
        """Score a single lead against search criteria"""
        return self.lead_fit.process(lead, criteria)

    def score_batch(
        self,
        leads: List[Lead],
        criteria: SearchCriteria,
        max_workers: int = 4,
    ) -> BatchScoreResult:
        """
        Score multiple leads.

        Args:
            leads: Leads to score
            criteria: Criteria shared by every lead
            max_workers: Number of parallel workers

        Returns:
            BatchScoreResult, best overall score first, ties in input order
        """
        start_time = time.time()

        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
            scores = list(executor.map(lambda lead: self.score_lead(lead, criteria), leads))

        results = [ScoredLead(lead=lead, scores=s) for lead, s in zip(leads, scores)]
        results.sort(key=lambda r: r.scores.overall, reverse=True)

        total_time = (time.time() - start_time) * 1000
        logger.info("Scored %d leads in %.2f ms", len(leads), total_time)

        return BatchScoreResult(
            processed=len(leads),
            results=results,
            processing_time_ms=round(total_time, 2),
        )

    def find_similar_leads(
        self,
        target: Lead,
        pool: List[Lead],
        max_results: Optional[int] = None,
    ) -> List[SimilarCompany]:
        """Find the pool leads most similar to the target"""
        return self.similarity.process(target, pool, max_results)

    def build_lead_analysis_report(
        self,
        lead: Lead,
        scores: ScoreVector,
        similar_leads: List[SimilarCompany],
        criteria: Optional[SearchCriteria] = None,
    ) -> LeadAnalysisReport:
        """Assemble the analysis report for a scored lead"""
        return self.summaries.build_lead_report(lead, scores, similar_leads, criteria)

    def analyze_lead(
        self,
        lead: Lead,
        pool: List[Lead],
        criteria: SearchCriteria,
        max_similar: Optional[int] = None,
    ) -> LeadAnalysisReport:
        """
        Score a lead, find its similar companies and build the report.

        Args:
            lead: Lead to analyze
            pool: Leads to search for similar companies
            criteria: Search criteria
            max_similar: Cap on similar companies

        Returns:
            LeadAnalysisReport
        """
        scores = self.score_lead(lead, criteria)
        similar = self.find_similar_leads(lead, pool, max_similar)
        return self.build_lead_analysis_report(lead, scores, similar, criteria)

    # =========================================================================
    # Attachment matching
    # =========================================================================

    def match_attachments(
        self,
        email: EmailContent,
        materials: List[Material],
        keyword_extractor: Optional[KeywordExtractor] = None,
    ) -> AttachmentRecommendation:
        """
        Recommend attachments for an email.

        Args:
            email: Generated email content
            materials: Candidate materials
            keyword_extractor: Per-call override of the keyword extractor

        Returns:
            AttachmentRecommendation (degraded, never raised, on failure)
        """
        extractor = keyword_extractor or self.keyword_extractor
        return self.attachments.process(email, materials, extractor)

    def update_config(self, new_config: EngineConfig):
        """Update the engine configuration and reinitialize stages"""
        self.config = new_config
        self._build_stages()


# =============================================================================
# Convenience Functions
# =============================================================================

def create_engine(
    fallback_vocabulary: Optional[List[str]] = None,
    similarity_threshold: Optional[float] = None,
    llm_api_key: Optional[str] = None,
    llm_provider: Optional[str] = None,
) -> LeadIntelligenceEngine:
    """
    Factory function to create an engine with common settings.

    The provider API key falls back to OPENROUTER_API_KEY from the environment.

    Args:
        fallback_vocabulary: Replacement keyword vocabulary
        similarity_threshold: Minimum similarity for similar companies
        llm_api_key: API key for the keyword extraction provider
        llm_provider: LLM provider name

    Returns:
        Configured LeadIntelligenceEngine instance
    """
    config = create_default_engine_config(
        fallback_vocabulary=fallback_vocabulary,
        similarity_threshold=similarity_threshold,
    )
    api_key = llm_api_key or LLM_CONFIG.get("api_key") or os.getenv("OPENROUTER_API_KEY")
    return LeadIntelligenceEngine(
        config=config,
        llm_api_key=api_key or None,
        llm_provider=llm_provider or LLM_CONFIG.get("provider"),
    )


def score_lead(lead: Lead, criteria: SearchCriteria) -> ScoreVector:
    """Score a lead with the default configuration"""
    return LeadFitScoringStage().process(lead, criteria)


def find_similar_leads(
    target: Lead, pool: List[Lead], max_results: int = 5
) -> List[SimilarCompany]:
    """Find similar leads with the default configuration"""
    return SimilarityStage().process(target, pool, max_results)


def match_attachments(
    email: EmailContent,
    materials: List[Material],
    keyword_extractor: Optional[Callable[[EmailContent], List[str]]] = None,
) -> AttachmentRecommendation:
    """
    Recommend attachments with the default configuration.

    Without a keyword extractor, keywords come from the static vocabulary.
    """
    extractor = keyword_extractor or KeywordExtractionStage().process
    return AttachmentRelevanceStage().process(email, materials, extractor)


def build_lead_analysis_report(
    lead: Lead,
    scores: ScoreVector,
    similar_leads: List[SimilarCompany],
    criteria: Optional[SearchCriteria] = None,
) -> LeadAnalysisReport:
    """Build a lead analysis report"""
    return RecommendationSummaryStage().build_lead_report(lead, scores, similar_leads, criteria)
