"""
Recommendation Summaries
========================
Human-readable text for attachment recommendations and lead analysis.
"""

from typing import List, Optional

from ..models.schemas import (
    AttachmentMatch,
    Confidence,
    Lead,
    LeadAnalysisReport,
    ScoreVector,
    SearchCriteria,
    SimilarCompany,
)
from .lead_fit import is_blank

NO_MATCHES_SUMMARY = "No relevant product materials found"
BASIC_MATCH_SUMMARY = "Recommended attachments using the basic matching algorithm"


class RecommendationSummaryStage:
    """
    Explain attachment matches and lead scores in plain language.
    """

    def summarize_matches(self, matches: List[AttachmentMatch], keywords: List[str]) -> str:
        """
        Summarize a ranked match list.

        Args:
            matches: Ranked attachment matches
            keywords: Keywords the matches were scored against

        Returns:
            One-paragraph summary
        """
        if not matches:
            return NO_MATCHES_SUMMARY

        high = sum(1 for m in matches if m.confidence == Confidence.HIGH)
        medium = sum(1 for m in matches if m.confidence == Confidence.MEDIUM)

        parts = []
        if high:
            parts.append(f"{high} highly relevant attachment{'s' if high != 1 else ''}")
        if medium:
            parts.append(f"{medium} moderately relevant attachment{'s' if medium != 1 else ''}")
        if not parts:
            parts.append(f"{len(matches)} candidate attachment{'s' if len(matches) != 1 else ''}")
        found = f"found {' and '.join(parts)}"

        top = min(3, len(matches))
        return (
            f'Based on keywords "{", ".join(keywords[:3])}" and others, {found}. '
            f"Recommend prioritizing the top {top} attachment{'s' if top != 1 else ''}."
        )

    def build_lead_report(
        self,
        lead: Lead,
        scores: ScoreVector,
        similar_leads: List[SimilarCompany],
        criteria: Optional[SearchCriteria] = None,
    ) -> LeadAnalysisReport:
        """
        Assemble the analysis report for a lead.

        Args:
            lead: Analyzed lead
            scores: Fit scores for the lead
            similar_leads: Similar companies found for the lead
            criteria: Criteria the lead was scored against

        Returns:
            LeadAnalysisReport with recommendations, risks and next actions
        """
        return LeadAnalysisReport(
            lead_id=lead.lead_id or "",
            scores=scores,
            similar_companies=[item.lead.lead_id or "" for item in similar_leads],
            recommendations=self._generate_recommendations(lead, scores),
            risk_factors=self._identify_risk_factors(lead, scores),
            next_actions=self._suggest_next_actions(lead, scores),
        )

    def _generate_recommendations(self, lead: Lead, scores: ScoreVector) -> List[str]:
        recommendations = []

        if scores.overall > 0.8:
            recommendations.append("High-quality lead, prioritize outreach")
        elif scores.overall > 0.6:
            recommendations.append("Medium-quality lead, consider contacting")
        else:
            recommendations.append("Low-quality lead, needs further verification")

        if scores.industry < 0.5:
            recommendations.append("Weak industry fit, adjust the sales approach")

        if scores.engagement < 0.5:
            recommendations.append("Key contact details missing, enrich the record")

        if is_blank(lead.customer_website):
            recommendations.append("No website on record, verify the company through other channels")

        return recommendations

    def _identify_risk_factors(self, lead: Lead, scores: ScoreVector) -> List[str]:
        risks = []

        if scores.ai_confidence < 0.5:
            risks.append("Low AI confidence, data may be inaccurate")

        if not lead.customer_email or "@" not in lead.customer_email:
            risks.append("Email address may be malformed")

        if scores.engagement < 0.3:
            risks.append("Incomplete contact details, lead may be hard to reach")

        if scores.overall < 0.4:
            risks.append("Low overall fit, conversion unlikely")

        return risks

    def _suggest_next_actions(self, lead: Lead, scores: ScoreVector) -> List[str]:
        actions = []

        if scores.overall > 0.7:
            actions.append("Send a personalized product introduction email")
            actions.append("Schedule a phone call")
        elif scores.overall > 0.5:
            actions.append("Send product materials")
            actions.append("Monitor company news")
        else:
            actions.append("Enrich the lead record")
            actions.append("Verify contact details")

        if is_blank(lead.contact_person):
            actions.append("Find the key decision-maker's contact details")

        if is_blank(lead.phone):
            actions.append("Obtain the company phone number")

        return actions
