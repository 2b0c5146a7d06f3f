"""
Field Similarity Primitives
===========================
Low-level string and token-set comparisons shared by the lead fit scorer
and the similarity engine. Every function returns a float in [0, 1] and
treats missing or malformed input as no match.
"""

import re
from typing import Optional
from urllib.parse import urlparse

EXACT_MATCH = 1.0
PARTIAL_MATCH = 0.8
SAME_DOMAIN_MATCH = 0.8
MIN_TOKEN_LENGTH = 4


def normalize_label(value: Optional[str]) -> str:
    """Trim and lowercase a label, mapping None to an empty string"""
    return (value or "").strip().lower()


def contains_term(text: str, term: str) -> bool:
    """
    Check whether a lookup-table term occurs in text.

    ASCII terms must not touch other ASCII letters or digits ("ai" does not
    hit "retail" but does hit "ai公司"); CJK terms have no word separators
    and use plain containment.
    """
    text = text.lower()
    term = term.lower().strip()
    if not text or not term:
        return False
    if term.isascii():
        return re.search(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])", text) is not None
    return term in text


def field_similarity(a: Optional[str], b: Optional[str]) -> float:
    """Compare two short labels: equal 1.0, containment 0.8, else 0.0"""
    left = normalize_label(a)
    right = normalize_label(b)
    if not left or not right:
        return 0.0
    if left == right:
        return EXACT_MATCH
    if left in right or right in left:
        return PARTIAL_MATCH
    return 0.0


def _tokens(text: Optional[str]) -> set:
    return {w for w in (text or "").lower().split() if len(w) >= MIN_TOKEN_LENGTH}


def keyword_similarity(text_a: Optional[str], text_b: Optional[str]) -> float:
    """Token overlap of two descriptions, relative to the larger token set"""
    tokens_a = _tokens(text_a)
    tokens_b = _tokens(text_b)
    if not tokens_a or not tokens_b:
        return 0.0
    return len(tokens_a & tokens_b) / max(len(tokens_a), len(tokens_b))


def _hostname(url: Optional[str]) -> Optional[str]:
    if not url or not url.strip():
        return None
    try:
        host = urlparse(url.strip()).hostname
    except ValueError:
        return None
    if not host:
        return None
    if host.startswith("www."):
        host = host[4:]
    return host


def website_similarity(url_a: Optional[str], url_b: Optional[str]) -> float:
    """Same host 1.0, same registrable domain (last two labels) 0.8, else 0.0"""
    host_a = _hostname(url_a)
    host_b = _hostname(url_b)
    if not host_a or not host_b:
        return 0.0

    if host_a == host_b:
        return EXACT_MATCH

    labels_a = host_a.split(".")
    labels_b = host_b.split(".")
    if len(labels_a) >= 2 and len(labels_b) >= 2:
        if labels_a[-2:] == labels_b[-2:]:
            return SAME_DOMAIN_MATCH

    return 0.0
