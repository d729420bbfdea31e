"""
Adblock filtering for webfence.

Classifies outgoing request URLs against a list of advertising and tracking
domain fragments and serves an empty response for blocked requests.
"""

from .engine import FilterEngine
from .fragments import SEED_FRAGMENTS, FilterList
from .interceptor import PlaywrightInterceptor, RequestInterceptor
from .matcher import ALLOWED, Allowed, Blocked, ClassificationResult, Matcher, SubstringMatcher
from .resources import EMPTY_TEXT, SubstituteResponse

__all__ = [
    "ALLOWED",
    "Allowed",
    "Blocked",
    "ClassificationResult",
    "EMPTY_TEXT",
    "FilterEngine",
    "FilterList",
    "Matcher",
    "PlaywrightInterceptor",
    "RequestInterceptor",
    "SEED_FRAGMENTS",
    "SubstituteResponse",
    "SubstringMatcher",
]
