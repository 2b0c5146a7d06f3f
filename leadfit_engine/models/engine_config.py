"""
Engine Configuration Models
"""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from ..config.settings import (
    DEFAULT_FIT_WEIGHTS,
    DEFAULT_SIMILARITY_WEIGHTS,
    DEFAULT_LIMITS,
    COMPANY_SIZE_BUCKETS,
    INDUSTRY_RELATIONS,
    REGION_CLUSTERS,
    FALLBACK_KEYWORD_VOCABULARY,
    FILE_TYPE_RULES,
    FILE_NAME_REASON_RULES,
    RELEVANCE_THRESHOLDS,
)

WEIGHT_TOLERANCE = 1e-6


class _WeightsBase(BaseModel):
    """Weights that must sum to 1.0"""

    @model_validator(mode="after")
    def _check_sum(self):
        total = sum(self.model_dump().values())
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise ValueError(f"weights must sum to 1.0, got {total:.4f}")
        return self


class FitWeights(_WeightsBase):
    """Weights for each lead fit dimension"""
    industry: float = DEFAULT_FIT_WEIGHTS["industry"]
    location: float = DEFAULT_FIT_WEIGHTS["location"]
    company_size: float = DEFAULT_FIT_WEIGHTS["company_size"]
    engagement: float = DEFAULT_FIT_WEIGHTS["engagement"]
    ai_confidence: float = DEFAULT_FIT_WEIGHTS["ai_confidence"]


class SimilarityWeights(_WeightsBase):
    """Weights for each similarity factor"""
    industry_match: float = DEFAULT_SIMILARITY_WEIGHTS["industry_match"]
    location_match: float = DEFAULT_SIMILARITY_WEIGHTS["location_match"]
    size_match: float = DEFAULT_SIMILARITY_WEIGHTS["size_match"]
    keyword_match: float = DEFAULT_SIMILARITY_WEIGHTS["keyword_match"]
    website_match: float = DEFAULT_SIMILARITY_WEIGHTS["website_match"]


class Limits(BaseModel):
    """Thresholds and caps"""
    similarity_threshold: float = DEFAULT_LIMITS["similarity_threshold"]
    max_similar_results: int = DEFAULT_LIMITS["max_similar_results"]
    max_llm_keywords: int = DEFAULT_LIMITS["max_llm_keywords"]
    max_fallback_keywords: int = DEFAULT_LIMITS["max_fallback_keywords"]
    max_matches: int = DEFAULT_LIMITS["max_matches"]
    max_basic_matches: int = DEFAULT_LIMITS["max_basic_matches"]


class IndustryRelation(BaseModel):
    """Industries related to a target industry"""
    aliases: List[str]
    related: List[str]


class FileTypeRule(BaseModel):
    """Bonus for a file type whose semantics match the email keywords"""
    name: str
    type_markers: List[str]
    terms: List[str]
    bonus: float = 1.0


class FileNameReasonRule(BaseModel):
    """Match reason emitted when the file name contains a term"""
    reason: str
    terms: List[str]


class RelevanceThresholds(BaseModel):
    """Score and keyword-count thresholds for reasons and confidence tiers"""
    highly_relevant_above: float = RELEVANCE_THRESHOLDS["highly_relevant_above"]
    moderately_relevant_above: float = RELEVANCE_THRESHOLDS["moderately_relevant_above"]
    high_confidence_score: float = RELEVANCE_THRESHOLDS["high_confidence_score"]
    high_confidence_keywords: int = RELEVANCE_THRESHOLDS["high_confidence_keywords"]
    medium_confidence_score: float = RELEVANCE_THRESHOLDS["medium_confidence_score"]
    medium_confidence_keywords: int = RELEVANCE_THRESHOLDS["medium_confidence_keywords"]


class EngineConfig(BaseModel):
    """Complete engine configuration"""
    name: str = "Default Engine"

    # Lead fit & similarity
    fit_weights: FitWeights = Field(default_factory=FitWeights)
    similarity_weights: SimilarityWeights = Field(default_factory=SimilarityWeights)
    company_size_buckets: List[str] = Field(
        default_factory=lambda: list(COMPANY_SIZE_BUCKETS)
    )
    industry_relations: List[IndustryRelation] = Field(
        default_factory=lambda: [IndustryRelation(**r) for r in INDUSTRY_RELATIONS]
    )
    region_clusters: List[List[str]] = Field(
        default_factory=lambda: [list(c) for c in REGION_CLUSTERS]
    )

    # Attachment matching
    fallback_vocabulary: List[str] = Field(
        default_factory=lambda: list(FALLBACK_KEYWORD_VOCABULARY)
    )
    file_type_rules: List[FileTypeRule] = Field(
        default_factory=lambda: [FileTypeRule(**r) for r in FILE_TYPE_RULES]
    )
    file_name_reason_rules: List[FileNameReasonRule] = Field(
        default_factory=lambda: [FileNameReasonRule(**r) for r in FILE_NAME_REASON_RULES]
    )
    relevance_thresholds: RelevanceThresholds = Field(default_factory=RelevanceThresholds)

    limits: Limits = Field(default_factory=Limits)


def create_default_engine_config(
    fallback_vocabulary: Optional[List[str]] = None,
    file_type_rules: Optional[List[FileTypeRule]] = None,
    similarity_threshold: Optional[float] = None,
) -> EngineConfig:
    """
    Factory function to create an engine config with sensible defaults
    """
    config = EngineConfig()

    if fallback_vocabulary:
        config.fallback_vocabulary = fallback_vocabulary

    if file_type_rules:
        config.file_type_rules = file_type_rules

    if similarity_threshold is not None:
        config.limits.similarity_threshold = similarity_threshold

    return config
