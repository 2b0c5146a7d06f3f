"""Tests for the lead fit scoring stage."""

import pytest
from pydantic import ValidationError

from leadfit_engine.models.engine_config import EngineConfig, FitWeights
from leadfit_engine.models.schemas import Lead, SearchCriteria
from leadfit_engine.stages.lead_fit import LeadFitScoringStage


def full_lead(**overrides):
    data = dict(
        lead_id="lead-1",
        company_name="Acme Robotics",
        customer_email="sales@acme.com",
        customer_website="https://acme.com",
        contact_person="Li Wei",
        phone="+86 10 5555 0000",
        description="Acme builds an AI platform that automates quality inspection for factories.",
        industry="Technology",
        location="Beijing",
        company_size="11-50人",
    )
    data.update(overrides)
    return Lead(**data)


class TestLeadFitScoringStage:
    """Tests for LeadFitScoringStage."""

    def setup_method(self):
        """Set up test fixtures."""
        self.stage = LeadFitScoringStage()
        self.weights = FitWeights()

    def test_exact_match_example(self):
        """Matching industry, location and size score 1.0 each."""
        lead = full_lead()
        criteria = SearchCriteria(
            industry="Technology", location="Beijing", company_size="11-50人", keywords="AI"
        )
        scores = self.stage.process(lead, criteria)
        assert scores.industry == 1.0
        assert scores.location == 1.0
        assert scores.company_size == 1.0

    def test_overall_is_weighted_sum(self):
        """Overall can be reconstructed from the sub-scores."""
        lead = full_lead(industry="Software", location="Tianjin", company_size="51-200")
        criteria = SearchCriteria(industry="Technology", location="Beijing", company_size="1-10")
        s = self.stage.process(lead, criteria)
        expected = (
            s.industry * self.weights.industry
            + s.location * self.weights.location
            + s.company_size * self.weights.company_size
            + s.engagement * self.weights.engagement
            + s.ai_confidence * self.weights.ai_confidence
        )
        assert s.overall == pytest.approx(expected, abs=0.011)

    def test_all_scores_in_unit_range(self):
        """Every component stays within [0, 1]."""
        lead = full_lead(match_reasons=["a"] * 12, discovery_confidence=1.0)
        s = self.stage.process(lead, SearchCriteria())
        for value in s.model_dump().values():
            assert 0.0 <= value <= 1.0

    def test_absent_criteria_are_neutral(self):
        """Absent criteria fields score 0.8 regardless of the lead."""
        for lead in (full_lead(), Lead(company_name="Empty Co")):
            s = self.stage.process(lead, SearchCriteria())
            assert s.industry == 0.8
            assert s.location == 0.8
            assert s.company_size == 0.8

    def test_criteria_keywords_do_not_change_fit(self):
        """Free-text keywords on the criteria carry no weight in the fit score."""
        criteria = SearchCriteria(industry="Technology", location="Beijing")
        with_keywords = criteria.model_copy(update={"keywords": "AI, automation"})
        assert self.stage.process(full_lead(), with_keywords) == self.stage.process(full_lead(), criteria)

    def test_blank_criteria_are_absent(self):
        """Whitespace-only criteria count as absent."""
        s = self.stage.process(full_lead(), SearchCriteria(industry="  ", company_size=""))
        assert s.industry == 0.8
        assert s.company_size == 0.8

    def test_industry_contains(self):
        """Containment in either direction scores 0.9."""
        s = self.stage.process(full_lead(industry="Enterprise Software"), SearchCriteria(industry="software"))
        assert s.industry == 0.9

    def test_related_industry(self):
        """Related industries score 0.7 in both languages."""
        s = self.stage.process(full_lead(industry="Software"), SearchCriteria(industry="Technology"))
        assert s.industry == 0.7
        s = self.stage.process(full_lead(industry="软件开发"), SearchCriteria(industry="科技"))
        assert s.industry == 0.7

    @pytest.mark.parametrize("industry", ["IT服务", "IT", "AI公司"])
    def test_related_industry_mixed_script(self, industry):
        """ASCII related terms match labels that continue in Chinese."""
        s = self.stage.process(full_lead(industry=industry), SearchCriteria(industry="科技"))
        assert s.industry == 0.7

    def test_unrelated_industry(self):
        """Short related terms do not match inside unrelated words."""
        s = self.stage.process(full_lead(industry="Retail"), SearchCriteria(industry="Technology"))
        assert s.industry == 0.3

    def test_missing_lead_industry(self):
        """A lead without an industry does not match a constrained search."""
        s = self.stage.process(full_lead(industry=None), SearchCriteria(industry="Technology"))
        assert s.industry == 0.3

    def test_same_region(self):
        """Locations in one city cluster score 0.6."""
        s = self.stage.process(full_lead(location="天津市"), SearchCriteria(location="北京"))
        assert s.location == 0.6
        s = self.stage.process(full_lead(location="Tianjin"), SearchCriteria(location="Beijing"))
        assert s.location == 0.6

    def test_different_region(self):
        """Locations in different clusters score 0.3."""
        s = self.stage.process(full_lead(location="Shanghai"), SearchCriteria(location="Beijing"))
        assert s.location == 0.3

    def test_location_contains(self):
        """A district within the target city scores 0.9."""
        s = self.stage.process(full_lead(location="Beijing Haidian"), SearchCriteria(location="Beijing"))
        assert s.location == 0.9

    @pytest.mark.parametrize("lead_size,target,expected", [
        ("11-50人", "11-50人", 1.0),
        ("11-50人", "11-50", 1.0),
        ("11-50人", "51-200", 0.8),
        ("1-10", "51-200", 0.6),
        ("1-10", "201-500", 0.4),
        ("huge", "11-50", 0.4),
        (None, "11-50", 0.4),
    ])
    def test_company_size_distance(self, lead_size, target, expected):
        """Company size scores by bucket distance."""
        s = self.stage.process(full_lead(company_size=lead_size), SearchCriteria(company_size=target))
        assert s.company_size == expected

    def test_engagement_full(self):
        """Website, contact, phone and long description max out engagement."""
        s = self.stage.process(full_lead(), SearchCriteria())
        assert s.engagement == 1.0

    def test_engagement_base(self):
        """A bare lead keeps the base engagement."""
        s = self.stage.process(Lead(company_name="Bare", customer_website="   "), SearchCriteria())
        assert s.engagement == 0.5

    def test_ai_confidence_formula(self):
        """Match reasons, discovery confidence and completeness are averaged."""
        lead = full_lead(match_reasons=["industry", "size", "keywords"], discovery_confidence=0.6)
        s = self.stage.process(lead, SearchCriteria())
        # ((0.5 + 0.3 + 0.6) / 2 + 1.0) / 2
        assert s.ai_confidence == 0.85

    def test_ai_confidence_capped(self):
        """Many match reasons cannot push confidence above 1.0."""
        lead = full_lead(match_reasons=["r"] * 10)
        s = self.stage.process(lead, SearchCriteria())
        assert s.ai_confidence == 1.0

    def test_zero_discovery_confidence_is_used(self):
        """A discovery confidence of 0.0 is present, not absent."""
        with_zero = self.stage.process(Lead(company_name="Acme", discovery_confidence=0.0), SearchCriteria())
        without = self.stage.process(Lead(company_name="Acme"), SearchCriteria())
        assert with_zero.ai_confidence == 0.19
        assert without.ai_confidence == 0.31

    def test_data_completeness(self):
        """Completeness counts the eight named non-blank fields."""
        assert LeadFitScoringStage.calculate_data_completeness(full_lead()) == 1.0
        assert LeadFitScoringStage.calculate_data_completeness(
            Lead(company_name="Acme", phone=" ")
        ) == 0.125

    def test_custom_weights(self):
        """Configured weights drive the overall score."""
        config = EngineConfig(fit_weights=FitWeights(
            industry=1.0, location=0.0, company_size=0.0, engagement=0.0, ai_confidence=0.0
        ))
        stage = LeadFitScoringStage(config)
        s = stage.process(full_lead(industry="Retail"), SearchCriteria(industry="Technology"))
        assert s.overall == 0.3

    def test_weights_must_sum_to_one(self):
        """Weights that do not sum to 1.0 are rejected."""
        with pytest.raises(ValidationError):
            FitWeights(industry=0.5)
