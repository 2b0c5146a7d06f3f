"""
Pydantic schemas for the Lead Fit & Attachment Matching Engine
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================

class Confidence(str, Enum):
    """Confidence tier of an attachment match"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# =============================================================================
# INPUT SCHEMAS
# =============================================================================

class Lead(BaseModel):
    """A prospective customer record, read-only to the engine"""
    model_config = ConfigDict(extra="allow")

    lead_id: Optional[str] = None
    company_name: str = ""
    customer_email: Optional[str] = None
    customer_website: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    company_size: Optional[str] = None
    match_reasons: Optional[List[str]] = None
    discovery_confidence: Optional[float] = Field(None, ge=0, le=1)


class SearchCriteria(BaseModel):
    """Lead search criteria; every field is optional"""
    industry: Optional[str] = None
    location: Optional[str] = None
    company_size: Optional[str] = None
    keywords: Optional[str] = None


class Material(BaseModel):
    """An uploaded document usable as an email attachment"""
    model_config = ConfigDict(extra="allow")

    material_id: Optional[str] = None
    file_name: str
    file_type: str = ""
    description: Optional[str] = None
    keywords: Optional[List[str]] = None
    storage_path: Optional[str] = None


class EmailContent(BaseModel):
    """A generated outbound email"""
    subject: str = ""
    body: str = ""
    customer_name: str = ""
    customer_website: Optional[str] = None
    industry: Optional[str] = None


# =============================================================================
# LEAD FIT RESULT SCHEMAS
# =============================================================================

class ScoreVector(BaseModel):
    """Five named fit sub-scores plus their weighted overall"""
    overall: float = Field(..., ge=0, le=1)
    industry: float = Field(..., ge=0, le=1)
    location: float = Field(..., ge=0, le=1)
    company_size: float = Field(..., ge=0, le=1)
    engagement: float = Field(..., ge=0, le=1)
    ai_confidence: float = Field(..., ge=0, le=1)


class SimilarityFactors(BaseModel):
    """Pairwise similarity breakdown between two leads"""
    industry_match: float = Field(0, ge=0, le=1)
    location_match: float = Field(0, ge=0, le=1)
    size_match: float = Field(0, ge=0, le=1)
    keyword_match: float = Field(0, ge=0, le=1)
    website_match: float = Field(0, ge=0, le=1)


class SimilarCompany(BaseModel):
    """A pool lead ranked by similarity to a target lead"""
    lead: Lead
    similarity: float
    factors: SimilarityFactors


class ScoredLead(BaseModel):
    """A lead paired with its fit scores"""
    lead: Lead
    scores: ScoreVector


class BatchScoreResult(BaseModel):
    """Result from batch scoring"""
    processed: int
    results: List[ScoredLead] = Field(default_factory=list)
    processing_time_ms: float = 0


class LeadAnalysisReport(BaseModel):
    """Explainable analysis of one lead"""
    lead_id: str = ""
    scores: ScoreVector
    similar_companies: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    risk_factors: List[str] = Field(default_factory=list)
    next_actions: List[str] = Field(default_factory=list)


# =============================================================================
# ATTACHMENT MATCHING RESULT SCHEMAS
# =============================================================================

class MaterialScore(BaseModel):
    """Raw relevance of one material against a keyword list"""
    score: float = 0
    matched_keywords: List[str] = Field(default_factory=list)


class AttachmentMatch(BaseModel):
    """A material recommended as an attachment"""
    material: Material
    relevance_score: float = Field(..., ge=0)
    match_reasons: List[str] = Field(..., min_length=1)
    confidence: Confidence


class AttachmentRecommendation(BaseModel):
    """Ranked attachment matches for one email"""
    matches: List[AttachmentMatch] = Field(default_factory=list)
    total_materials: int = 0
    processing_time_ms: float = 0
    summary: str = ""
    keywords: List[str] = Field(default_factory=list)
    fallback_used: bool = False
