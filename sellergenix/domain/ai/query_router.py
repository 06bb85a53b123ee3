"""Chat query routing between the fast and the deep model tier.

Simple data lookups (~90% of dashboard questions) go to the fast model,
strategy/analysis questions go to the deep model.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

FAST_MODEL = "haiku"
DEEP_MODEL = "opus"

LONG_QUERY_CHARS = 200

# Substrings that need deep analysis (English + Turkish)
DEEP_TRIGGERS = (
    # English
    "strategy",
    "optimize",
    "optimization",
    "improve",
    "increase",
    "reduce",
    "decrease",
    "recommend",
    "advice",
    "suggest",
    "plan",
    "roadmap",
    "forecast",
    "predict",
    "analyze",
    "analysis",
    "compare",
    "comparison",
    "evaluate",
    "assess",
    "diagnose",
    "troubleshoot",
    "why",
    "reason",
    "cause",
    "problem",
    "issue",
    "solve",
    "fix",
    # Turkish
    "strateji",
    "optimizasyon",
    "artır",
    "artırırım",
    "düşür",
    "düşürürüm",
    "azalt",
    "öneri",
    "tavsiye",
    "yol haritası",
    "tahmin",
    "analiz",
    "karşılaştır",
    "kıyasla",
    "değerlendir",
    "teşhis",
    "sorun",
    "çöz",
    "düzelt",
    "neden",
    "sebep",
    "nasıl yapabilirim",
    "ne yapmalıyım",
)

# Patterns that stay on the fast model
FAST_PATTERNS = (
    re.compile(r"^(today|yesterday|this week|this month|last month)", re.IGNORECASE),
    re.compile(r"^(what|how much|how many|total|show|list|display)", re.IGNORECASE),
    re.compile(r"^(bugün|dün|bu hafta|bu ay|geçen ay)", re.IGNORECASE),
    re.compile(r"^(bugünkü|dünkü|bu haftaki|bu ayki|geçen ayki)", re.IGNORECASE),
    re.compile(r"^(kaç|ne kadar|toplam|göster|listele)", re.IGNORECASE),
    re.compile(r"(sales|revenue|profit|orders|units|margin)", re.IGNORECASE),
    re.compile(r"(satış|gelir|kâr|kar|sipariş|birim|marj)", re.IGNORECASE),
    re.compile(r"\?$"),
)


@dataclass(frozen=True)
class QueryClassification:
    """Routing decision for one chat query."""

    model: str
    confidence: float
    reason: str


def classify_query(query: str, *, long_query_chars: int = LONG_QUERY_CHARS) -> QueryClassification:
    """Classify chat query as fast lookup or deep analysis.

    Rules (first match wins):
        - contains a deep trigger keyword  -> deep, 0.9
        - longer than long_query_chars     -> deep, 0.7
        - matches a fast lookup pattern    -> fast, 0.9
        - otherwise                         -> fast, 0.6

    Examples:
        >>> classify_query("How to optimize my ad spend").model
        'opus'
        >>> classify_query("today sales").model
        'haiku'

    """
    lowered = query.lower()

    for trigger in DEEP_TRIGGERS:
        if trigger in lowered:
            return QueryClassification(
                model=DEEP_MODEL,
                confidence=0.9,
                reason=f'Complex query: contains "{trigger}"',
            )

    if len(query) > long_query_chars:
        return QueryClassification(
            model=DEEP_MODEL,
            confidence=0.7,
            reason="Long query requiring detailed analysis",
        )

    for pattern in FAST_PATTERNS:
        if pattern.search(query):
            return QueryClassification(
                model=FAST_MODEL,
                confidence=0.9,
                reason="Simple data lookup or aggregation",
            )

    return QueryClassification(
        model=FAST_MODEL,
        confidence=0.6,
        reason="Default to efficient model",
    )
