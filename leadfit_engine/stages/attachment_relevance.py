"""
Attachment Relevance Scoring
============================
Ranks product materials against the keywords of an outbound email.

Points per keyword (first rule wins):
- File name contains the keyword: +3
- Description contains the keyword: +2
- A material keyword contains the keyword: +1.5
Plus at most +1 when the file type suits the email's topics.

Any failure degrades to a basic match of the first few materials so the
caller always receives a recommendation.
"""

import logging
import re
import time
from typing import Callable, List, Optional

from ..models.schemas import (
    AttachmentMatch,
    AttachmentRecommendation,
    Confidence,
    EmailContent,
    Material,
    MaterialScore,
)
from ..models.engine_config import EngineConfig
from .summarizer import RecommendationSummaryStage, BASIC_MATCH_SUMMARY

logger = logging.getLogger(__name__)

KeywordExtractor = Callable[[EmailContent], List[str]]

FILE_NAME_POINTS = 3.0
DESCRIPTION_POINTS = 2.0
MATERIAL_KEYWORD_POINTS = 1.5
BASIC_MATCH_SCORE = 1.0
BASIC_MATCH_REASON = "Basic match"
FILE_NAME_SEPARATORS = re.compile(r"[_\-]+")


class AttachmentRelevanceStage:
    """
    Score, rank and explain materials for an email.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        summarizer: Optional[RecommendationSummaryStage] = None,
    ):
        self.config = config or EngineConfig()
        self.thresholds = self.config.relevance_thresholds
        self.summarizer = summarizer or RecommendationSummaryStage()

    def process(
        self,
        email: EmailContent,
        materials: List[Material],
        keyword_extractor: KeywordExtractor,
    ) -> AttachmentRecommendation:
        """
        Recommend attachments for an email.

        Args:
            email: Email content the attachments will accompany
            materials: Candidate materials
            keyword_extractor: Callable turning the email into keywords

        Returns:
            AttachmentRecommendation; never raises
        """
        start_time = time.time()

        if not materials:
            return AttachmentRecommendation(
                matches=[],
                total_materials=0,
                processing_time_ms=round((time.time() - start_time) * 1000, 2),
                summary=self.summarizer.summarize_matches([], []),
            )

        try:
            keywords = list(keyword_extractor(email) or [])
            logger.debug("Email keywords: %s", keywords)

            matches = []
            for material in materials:
                result = self.score_material(keywords, material)
                if result.score <= 0:
                    continue
                matches.append(AttachmentMatch(
                    material=material,
                    relevance_score=result.score,
                    match_reasons=self.build_match_reasons(
                        result.matched_keywords, material, result.score
                    ),
                    confidence=self.determine_confidence(
                        result.score, result.matched_keywords
                    ),
                ))

            matches.sort(key=lambda m: m.relevance_score, reverse=True)

            # Summary counts every positive match, not just the returned ones
            return AttachmentRecommendation(
                matches=matches[: self.config.limits.max_matches],
                total_materials=len(materials),
                processing_time_ms=round((time.time() - start_time) * 1000, 2),
                summary=self.summarizer.summarize_matches(matches, keywords),
                keywords=keywords,
            )

        except Exception:
            logger.exception("Attachment matching failed, falling back to basic matching")
            return self._basic_recommendation(materials, start_time)

    # =========================================================================
    # Scoring
    # =========================================================================

    def score_material(self, keywords: List[str], material: Material) -> MaterialScore:
        """
        Score one material against a keyword list.

        Args:
            keywords: Email keywords
            material: Material to score

        Returns:
            MaterialScore with total points and the keywords that matched
        """
        file_name = material.file_name.lower()
        description = (material.description or "").lower()
        material_keywords = [k.lower() for k in (material.keywords or [])]

        score = 0.0
        matched = []
        for keyword in keywords:
            term = keyword.lower().strip()
            if not term:
                continue
            if term in file_name:
                score += FILE_NAME_POINTS
            elif term in description:
                score += DESCRIPTION_POINTS
            elif any(term in mk for mk in material_keywords):
                score += MATERIAL_KEYWORD_POINTS
            else:
                continue
            matched.append(keyword)

        score += self.file_type_bonus(material.file_type, keywords)
        return MaterialScore(score=score, matched_keywords=matched)

    def file_type_bonus(self, file_type: str, keywords: List[str]) -> float:
        """Bonus for a file type whose typical content matches the keywords"""
        type_text = (file_type or "").lower()
        keyword_text = " ".join(keywords).lower()
        if not type_text or not keyword_text:
            return 0.0

        for rule in self.config.file_type_rules:
            if not any(marker in type_text for marker in rule.type_markers):
                continue
            if any(term.lower() in keyword_text for term in rule.terms):
                return rule.bonus
        return 0.0

    def build_match_reasons(
        self, matched_keywords: List[str], material: Material, score: float
    ) -> List[str]:
        """Explain why a material was matched; never returns an empty list"""
        reasons = []
        file_name = FILE_NAME_SEPARATORS.sub(" ", material.file_name.lower())

        if matched_keywords:
            reasons.append(f"Keyword match: {', '.join(matched_keywords[:3])}")

        for rule in self.config.file_name_reason_rules:
            if any(term.lower() in file_name for term in rule.terms):
                reasons.append(rule.reason)

        if score > self.thresholds.highly_relevant_above:
            reasons.append("Highly relevant content")
        elif score > self.thresholds.moderately_relevant_above:
            reasons.append("Moderately relevant content")

        return reasons or [BASIC_MATCH_REASON]

    def determine_confidence(self, score: float, matched_keywords: List[str]) -> Confidence:
        """Map score and matched keyword count to a confidence tier"""
        count = len(matched_keywords)
        if (
            score >= self.thresholds.high_confidence_score
            and count >= self.thresholds.high_confidence_keywords
        ):
            return Confidence.HIGH
        if (
            score >= self.thresholds.medium_confidence_score
            and count >= self.thresholds.medium_confidence_keywords
        ):
            return Confidence.MEDIUM
        return Confidence.LOW

    def _basic_recommendation(
        self, materials: List[Material], start_time: float
    ) -> AttachmentRecommendation:
        """Degraded result: first materials at a flat low-confidence score"""
        matches = [
            AttachmentMatch(
                material=material,
                relevance_score=BASIC_MATCH_SCORE,
                match_reasons=[BASIC_MATCH_REASON],
                confidence=Confidence.LOW,
            )
            for material in materials[: self.config.limits.max_basic_matches]
        ]
        return AttachmentRecommendation(
            matches=matches,
            total_materials=len(materials),
            processing_time_ms=round((time.time() - start_time) * 1000, 2),
            summary=BASIC_MATCH_SUMMARY,
            fallback_used=True,
        )
