"""
URL matching for domain fragment lists.

A URL is blocked if it contains any fragment as a plain, case-sensitive
substring. Fragments match anywhere in the URL (host, path or query), so
``analytics`` also blocks ``https://example.com/analytics/collect``.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from .fragments import FilterList
from .resources import EMPTY_TEXT, SubstituteResponse


@dataclass(frozen=True)
class Blocked:
    """Request must not be fetched; serve ``response`` instead."""

    response: SubstituteResponse
    fragments: frozenset[str]

    @property
    def blocked(self) -> bool:
        return True


@dataclass(frozen=True)
class Allowed:
    """Request proceeds with the host's default handling."""

    @property
    def blocked(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ALLOWED"


ALLOWED = Allowed()

ClassificationResult = Blocked | Allowed


class Matcher(ABC):
    """Decides which fragments of a filter list a URL contains."""

    @abstractmethod
    def match(self, url: str) -> frozenset[str]:
        """Return every fragment found in ``url`` (empty if none)."""
        ...


class SubstringMatcher(Matcher):
    """Plain substring containment.

    A single compiled alternation rejects non-matching URLs in one pass;
    matching URLs are then scanned against every fragment so the reported
    set does not depend on list order.
    """

    def __init__(self, filter_list: FilterList) -> None:
        self._fragments = tuple(sorted(filter_list))
        self._pattern: re.Pattern[str] | None = None
        if self._fragments:
            self._pattern = re.compile("|".join(re.escape(f) for f in self._fragments))

    def match(self, url: str) -> frozenset[str]:
        if self._pattern is None or self._pattern.search(url) is None:
            return frozenset()
        return frozenset(f for f in self._fragments if f in url)


MatcherFactory = Callable[[FilterList], Matcher]


def classify_url(
    matcher: Matcher,
    url: str,
    response: SubstituteResponse = EMPTY_TEXT,
) -> ClassificationResult:
    """Classify a URL against a matcher."""
    fragments = matcher.match(url)
    if fragments:
        return Blocked(response=response, fragments=fragments)
    return ALLOWED
