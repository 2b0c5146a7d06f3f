"""Tests for the similar company search."""

import pytest
from leadfit_engine.models.engine_config import create_default_engine_config
from leadfit_engine.models.schemas import Lead
from leadfit_engine.stages.similarity import SimilarityStage


def make_lead(lead_id, **fields):
    return Lead(lead_id=lead_id, company_name=f"Company {lead_id}", **fields)


class TestSimilarityStage:
    """Tests for SimilarityStage."""

    def setup_method(self):
        """Set up test fixtures."""
        self.stage = SimilarityStage()
        self.target = make_lead(
            "t",
            industry="Technology",
            location="Beijing",
            company_size="11-50",
            description="cloud analytics platform for retailers",
            customer_website="https://www.target.com",
        )

    def test_excludes_target_by_id(self):
        """The target never appears in its own results."""
        copy = self.target.model_copy()
        results = self.stage.process(self.target, [self.target, copy])
        assert results == []

    def test_excludes_target_by_identity_without_id(self):
        """A target without an id is excluded by object identity."""
        target = Lead(company_name="No Id", industry="Technology", location="Beijing")
        twin = Lead(company_name="Twin", industry="Technology", location="Beijing")
        results = self.stage.process(target, [target, twin])
        assert [r.lead.company_name for r in results] == ["Twin"]

    def test_threshold_is_exclusive(self):
        """A similarity of exactly 0.3 is dropped."""
        industry_only = make_lead("a", industry="Technology")
        assert self.stage.process(self.target, [industry_only]) == []

    def test_factors_and_overall(self):
        """Factors are computed per field and combined with the weights."""
        lead = make_lead(
            "b",
            industry="technology",
            location="Beijing Haidian",
            company_size="11-50",
            description="analytics platform for banks",
            customer_website="https://shop.target.com",
        )
        [result] = self.stage.process(self.target, [lead])
        f = result.factors
        assert f.industry_match == 1.0
        assert f.location_match == 0.8
        assert f.size_match == 1.0
        assert f.keyword_match == pytest.approx(0.5)
        assert f.website_match == 0.8
        expected = 0.3 * 1.0 + 0.2 * 0.8 + 0.15 * 1.0 + 0.2 * 0.5 + 0.15 * 0.8
        assert result.similarity == pytest.approx(expected)

    def test_size_uses_label_equality_only(self):
        """Adjacent size buckets are not similar in this comparison."""
        lead = make_lead("c", industry="Technology", location="Beijing", company_size="51-200")
        [result] = self.stage.process(self.target, [lead])
        assert result.factors.size_match == 0.0

    def test_sorted_descending_and_stable(self):
        """Results are non-increasing; ties keep pool order."""
        strong = make_lead("strong", industry="Technology", location="Beijing", company_size="11-50")
        tie_1 = make_lead("tie1", industry="Technology", location="Beijing")
        tie_2 = make_lead("tie2", industry="Technology", location="Beijing")
        results = self.stage.process(self.target, [tie_1, strong, tie_2])
        assert [r.lead.lead_id for r in results] == ["strong", "tie1", "tie2"]
        sims = [r.similarity for r in results]
        assert sims == sorted(sims, reverse=True)
        assert all(s > 0.3 for s in sims)

    def test_max_results(self):
        """Results are truncated to max_results."""
        pool = [make_lead(str(i), industry="Technology", location="Beijing") for i in range(8)]
        assert len(self.stage.process(self.target, pool)) == 5
        assert len(self.stage.process(self.target, pool, max_results=2)) == 2

    def test_configurable_threshold(self):
        """A lower threshold admits weaker matches."""
        stage = SimilarityStage(create_default_engine_config(similarity_threshold=0.1))
        industry_only = make_lead("a", industry="Technology")
        assert len(stage.process(self.target, [industry_only])) == 1
