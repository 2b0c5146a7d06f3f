"""
Keyword Extraction
==================
Turns an outbound email into an ordered list of salient terms.

Primary path: an injected summarize function (prompt in, comma-separated
keywords out), or a provider client built from an explicit API key.
Fallback path: a static bilingual business vocabulary. The fallback is the
terminal error path and never raises.
"""

import logging
import re
import threading
from concurrent.futures import Future, TimeoutError as FutureTimeoutError
from typing import Callable, List, Optional

from ..models.schemas import EmailContent
from ..models.engine_config import EngineConfig
from ..config.settings import LLM_CONFIG

logger = logging.getLogger(__name__)

Summarizer = Callable[[str], str]

KEYWORD_SEPARATORS = re.compile(r"[,，、]")


class KeywordExtractionStage:
    """
    Extract keywords from email content, falling back to a static vocabulary.
    """

    def __init__(
        self,
        summarizer: Optional[Summarizer] = None,
        api_key: Optional[str] = None,
        provider: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        config: Optional[EngineConfig] = None,
    ):
        """
        Initialize the extractor.

        Args:
            summarizer: Callable taking a prompt and returning the raw keyword text
            api_key: API key for a built-in provider client (ignored if summarizer given)
            provider: LLM provider ("openrouter", "openai" or "anthropic")
            timeout_seconds: Limit for one summarizer call
            config: Engine configuration (fallback vocabulary and limits)
        """
        self.config = config or EngineConfig()
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else LLM_CONFIG["timeout_seconds"]
        )
        self.api_key = api_key
        self.provider = provider or LLM_CONFIG.get("provider", "openrouter")
        self.model = LLM_CONFIG.get("model")
        self.client = None
        self.summarizer = summarizer

        if self.summarizer is None and self.api_key:
            self._initialize_client()
            if self.client is not None:
                self.summarizer = self._call_llm

    def __call__(self, email: EmailContent) -> List[str]:
        return self.process(email)

    def process(self, email: EmailContent) -> List[str]:
        """
        Extract up to the configured number of keywords.

        Args:
            email: Email content to analyze

        Returns:
            Ordered keyword list; never raises
        """
        if self.summarizer is None:
            return self.extract_fallback_keywords(email)

        try:
            response = self._summarize_with_timeout(self.generate_prompt(email))
            keywords = self.parse_response(response)
        except FutureTimeoutError:
            logger.warning(
                "Keyword extraction timed out after %.1fs, using fallback vocabulary",
                self.timeout_seconds,
            )
            return self.extract_fallback_keywords(email)
        except Exception as e:
            logger.warning("Keyword extraction failed (%s), using fallback vocabulary", e)
            return self.extract_fallback_keywords(email)

        if not keywords:
            logger.warning("Keyword extraction returned no keywords, using fallback vocabulary")
            return self.extract_fallback_keywords(email)

        logger.debug("Extracted keywords: %s", keywords)
        return keywords

    def generate_prompt(self, email: EmailContent) -> str:
        """Generate the keyword extraction prompt"""
        return f"""Analyze the following email and extract its keywords and topics.

Subject: {email.subject}
Body: {email.body}
Customer name: {email.customer_name}
Customer website: {email.customer_website or 'Unknown'}
Industry: {email.industry or 'Unknown'}

Extract the most important keywords, including:
1. Product and service terms
2. Industry terms
3. Technical keywords
4. Business need terms

Return a comma-separated keyword list of at most {self.config.limits.max_llm_keywords} terms.
Return only the keywords, no other text."""

    def parse_response(self, response: Optional[str]) -> List[str]:
        """Split a comma-separated response into trimmed, non-empty keywords"""
        if not response:
            return []
        keywords = [k.strip() for k in KEYWORD_SEPARATORS.split(response)]
        keywords = [k for k in keywords if k]
        return keywords[: self.config.limits.max_llm_keywords]

    def extract_fallback_keywords(self, email: EmailContent) -> List[str]:
        """Match the static vocabulary against subject and body"""
        text = f"{email.subject or ''} {email.body or ''}".lower()

        found = [term for term in self.config.fallback_vocabulary if term.lower() in text]

        if email.customer_name and email.customer_name.strip():
            found.append(email.customer_name.strip().lower())
        if email.industry and email.industry.strip():
            found.append(email.industry.strip().lower())

        return found[: self.config.limits.max_fallback_keywords]

    # =========================================================================
    # Provider client
    # =========================================================================

    def _summarize_with_timeout(self, prompt: str) -> str:
        """
        Run the summarizer, abandoning it once the timeout expires.

        The call runs on a daemon thread so a provider request that never
        returns cannot hold up interpreter shutdown.
        """
        future = Future()

        def run():
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(self.summarizer(prompt))
            except Exception as e:
                future.set_exception(e)

        threading.Thread(target=run, name="keyword-extraction", daemon=True).start()
        return future.result(timeout=self.timeout_seconds)

    def _initialize_client(self):
        """Initialize the LLM client based on provider"""
        try:
            if self.provider == "openrouter":
                from openai import OpenAI
                self.client = OpenAI(
                    api_key=self.api_key,
                    base_url=LLM_CONFIG.get("base_url"),
                    default_headers={
                        "HTTP-Referer": LLM_CONFIG.get("site_url"),
                        "X-Title": LLM_CONFIG.get("app_name"),
                    },
                )
            elif self.provider == "openai":
                from openai import OpenAI
                self.client = OpenAI(api_key=self.api_key)
            elif self.provider == "anthropic":
                from anthropic import Anthropic
                self.client = Anthropic(api_key=self.api_key)
            else:
                raise ValueError(f"Unknown provider: {self.provider}")
        except ImportError:
            logger.warning("SDK for provider %s is not installed, using fallback vocabulary", self.provider)

    def _call_llm(self, prompt: str) -> str:
        """Call the LLM API"""
        if self.provider in ["openrouter", "openai"]:
            # Both OpenRouter and OpenAI use the same SDK interface
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": "You extract business keywords. Reply with a comma-separated list only."},
                    {"role": "user", "content": prompt},
                ],
                temperature=LLM_CONFIG.get("temperature", 0.2),
                max_tokens=LLM_CONFIG.get("max_tokens", 300),
            )
            return response.choices[0].message.content

        elif self.provider == "anthropic":
            response = self.client.messages.create(
                model=self.model,
                max_tokens=LLM_CONFIG.get("max_tokens", 300),
                messages=[{"role": "user", "content": prompt}],
            )
            return response.content[0].text

        raise ValueError(f"Unknown provider: {self.provider}")
