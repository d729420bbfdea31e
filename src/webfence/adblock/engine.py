"""
Filter engine that classifies request URLs as blocked or allowed.

The engine classifies against an immutable snapshot (filter list plus the
matcher built from it). Updates build a complete new snapshot and replace
the reference in a single assignment, so concurrent ``classify`` calls never
lock and never observe a half-built list.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from .fragments import FilterList
from .matcher import ClassificationResult, Matcher, MatcherFactory, SubstringMatcher, classify_url
from .resources import EMPTY_TEXT, SubstituteResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    filter_list: FilterList
    matcher: Matcher


class FilterEngine:
    """Classifies request URLs against a domain fragment list."""

    def __init__(
        self,
        filter_list: FilterList | None = None,
        matcher_factory: MatcherFactory = SubstringMatcher,
        response: SubstituteResponse = EMPTY_TEXT,
    ) -> None:
        """Initialize the engine.

        Args:
            filter_list: Fragments to block. If None, uses the seed list.
            matcher_factory: Builds a matcher from a filter list.
            response: Substitute served for blocked requests.
        """
        self._matcher_factory = matcher_factory
        self._response = response
        self._update_lock = threading.Lock()
        self._snapshot = self._build_snapshot(
            filter_list if filter_list is not None else FilterList.default()
        )
        logger.info("Filter engine created with %d fragments", len(self._snapshot.filter_list))

    def _build_snapshot(self, filter_list: FilterList) -> _Snapshot:
        return _Snapshot(filter_list=filter_list, matcher=self._matcher_factory(filter_list))

    @property
    def filter_list(self) -> FilterList:
        return self._snapshot.filter_list

    @property
    def matcher(self) -> Matcher:
        return self._snapshot.matcher

    @property
    def response(self) -> SubstituteResponse:
        return self._response

    def classify(self, url: str) -> ClassificationResult:
        """Classify a request URL.

        Args:
            url: Absolute URL of the outgoing request. Not validated; any
                string is matched as opaque text.

        Returns:
            Blocked with the substitute response, or ALLOWED.
        """
        snapshot = self._snapshot
        return classify_url(snapshot.matcher, url, self._response)

    def update(self, filter_list: FilterList) -> None:
        """Publish a new filter list.

        In-flight ``classify`` calls finish against the previous snapshot.
        """
        with self._update_lock:
            previous = self._snapshot.filter_list
            snapshot = self._build_snapshot(filter_list)
            self._snapshot = snapshot
        logger.info(
            "Filter list updated: %d fragments (was %d)", len(filter_list), len(previous)
        )
