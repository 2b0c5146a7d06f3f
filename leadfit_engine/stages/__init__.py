# Scoring stages module
from .lead_fit import LeadFitScoringStage
from .similarity import SimilarityStage
from .keyword_extraction import KeywordExtractionStage
from .attachment_relevance import AttachmentRelevanceStage
from .summarizer import RecommendationSummaryStage
