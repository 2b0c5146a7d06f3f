"""Tests for keyword extraction."""

import threading
import time

import pytest
from leadfit_engine.models.engine_config import create_default_engine_config
from leadfit_engine.models.schemas import EmailContent
from leadfit_engine.stages.keyword_extraction import KeywordExtractionStage


def english_email(**overrides):
    data = dict(
        subject="Boost efficiency with automation",
        body="Our platform helps teams ship faster.",
        customer_name="Acme Corp",
        industry="Retail",
    )
    data.update(overrides)
    return EmailContent(**data)


class TestPrimaryExtraction:
    """Tests for the summarizer-backed path."""

    def test_parses_comma_separated_response(self):
        """Keywords are split, trimmed and empties dropped."""
        stage = KeywordExtractionStage(summarizer=lambda prompt: "AI, 自动化 , ,platform，数据")
        assert stage.process(english_email()) == ["AI", "自动化", "platform", "数据"]

    def test_caps_at_twenty(self):
        """At most twenty keywords are returned."""
        response = ", ".join(f"kw{i}" for i in range(30))
        stage = KeywordExtractionStage(summarizer=lambda prompt: response)
        result = stage.process(english_email())
        assert len(result) == 20
        assert result[0] == "kw0"

    def test_prompt_includes_email_context(self):
        """The prompt carries subject, body, customer, website and industry."""
        prompts = []

        def capture(prompt):
            prompts.append(prompt)
            return "automation"

        stage = KeywordExtractionStage(summarizer=capture)
        stage.process(english_email(customer_website="https://acme.com"))
        [prompt] = prompts
        for fragment in ("Boost efficiency", "ship faster", "Acme Corp", "https://acme.com", "Retail"):
            assert fragment in prompt

    def test_stage_is_callable(self):
        """The stage can be passed wherever an extractor callable is expected."""
        stage = KeywordExtractionStage(summarizer=lambda prompt: "crm")
        assert stage(english_email()) == ["crm"]


class TestFallbackExtraction:
    """Tests for the vocabulary fallback."""

    def test_no_summarizer_uses_vocabulary(self):
        """Without a provider the static vocabulary is used."""
        stage = KeywordExtractionStage()
        assert stage.process(english_email()) == [
            "automation", "efficiency", "platform", "acme corp", "retail",
        ]

    def test_summarizer_error_falls_back(self):
        """A raising summarizer triggers the fallback."""
        def broken(prompt):
            raise RuntimeError("provider down")

        stage = KeywordExtractionStage(summarizer=broken)
        assert stage.process(english_email())[:3] == ["automation", "efficiency", "platform"]

    def test_empty_response_falls_back(self):
        """A response without keywords triggers the fallback."""
        stage = KeywordExtractionStage(summarizer=lambda prompt: " , ")
        assert "automation" in stage.process(english_email())

    def test_timeout_falls_back(self):
        """A slow summarizer is abandoned after the timeout."""
        def slow(prompt):
            time.sleep(1.0)
            return "late"

        stage = KeywordExtractionStage(summarizer=slow, timeout_seconds=0.05)
        start = time.time()
        result = stage.process(english_email())
        assert time.time() - start < 0.9
        assert "late" not in result
        assert "automation" in result

    def test_summarizer_runs_on_daemon_thread(self):
        """An abandoned summarizer call never blocks interpreter exit."""
        seen = []

        def record(prompt):
            seen.append(threading.current_thread().daemon)
            return "automation"

        stage = KeywordExtractionStage(summarizer=record)
        assert stage.process(english_email()) == ["automation"]
        assert seen == [True]

    def test_chinese_vocabulary_in_list_order(self):
        """Chinese terms are matched by containment in vocabulary order."""
        email = EmailContent(subject="关于自动化平台的合作", body="我们提供数据分析服务", customer_name="")
        stage = KeywordExtractionStage()
        assert stage.process(email) == ["自动化", "平台", "服务", "数据", "分析"]

    def test_fallback_caps_at_ten(self):
        """The fallback returns at most ten keywords."""
        body = "automation efficiency management platform solution product marketing analytics cloud blockchain"
        stage = KeywordExtractionStage()
        result = stage.process(english_email(body=body))
        assert len(result) == 10
        assert "acme corp" not in result

    def test_custom_vocabulary(self):
        """The fallback vocabulary is configurable."""
        config = create_default_engine_config(fallback_vocabulary=["warehouse"])
        stage = KeywordExtractionStage(config=config)
        email = EmailContent(subject="Warehouse robots", body="", customer_name="")
        assert stage.process(email) == ["warehouse"]

    @pytest.mark.parametrize("email", [
        EmailContent(),
        EmailContent(subject="", body="", customer_name="   ", industry=""),
    ])
    def test_fallback_on_empty_email(self, email):
        """Empty emails produce an empty list instead of raising."""
        assert KeywordExtractionStage().process(email) == []
