"""
Lead Fit & Attachment Matching Engine
=====================================
Deterministic, explainable scoring for outbound sales:
  Lead Fit: five weighted sub-scores for a lead against search criteria
  Similarity: the pool leads most similar to a target lead
  Attachment Matching: materials ranked against an email's keywords
  Summaries: match explanations and lead analysis reports
"""

from .engine import (
    LeadIntelligenceEngine,
    create_engine,
    score_lead,
    find_similar_leads,
    match_attachments,
    build_lead_analysis_report,
)

__version__ = "1.0.0"
__author__ = "Lead Fit Team"
