"""
Domain fragment lists for network blocking.

A fragment is an opaque substring pattern such as ``doubleclick.net`` or
``analytics``. Lists are immutable; every edit returns a new list.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from webfence.exceptions import InvalidFragmentError

# Default advertising and tracking fragments
SEED_FRAGMENTS: tuple[str, ...] = (
    "doubleclick.net",
    "googleads",
    "googlesyndication.com",
    "adservice.google.com",
    "pagead2.googlesyndication.com",
    "ads.pubmatic.com",
    "adsystem.com",
    "analytics",
    "buffooncountabletreble.com",
    "constructpreachystopper.com",
    "122da.com",
    "curlyluxurypregnancy.com",
    "ad.zanox.com",
    "adsrvr.org",
    "openx.net",
)

COMMENT_PREFIXES = ("#", "!")


def _validate(fragment: object) -> str:
    if not isinstance(fragment, str) or not fragment.strip():
        raise InvalidFragmentError(fragment)
    return fragment


def _fragment_set(fragments: Iterable[str]) -> frozenset[str]:
    # A bare string would otherwise become a set of single characters
    if isinstance(fragments, (str, bytes)):
        raise InvalidFragmentError(fragments)
    return frozenset(fragments)


def split_fragments(text: str) -> list[str]:
    """Split fragment text into individual fragments.

    One or more comma separated fragments per line. Lines starting with
    ``#`` or ``!`` are comments. Surrounding whitespace and blank entries
    are dropped.
    """
    fragments = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        for part in line.split(","):
            part = part.strip()
            if part:
                fragments.append(part)
    return fragments


@dataclass(frozen=True)
class FilterList:
    """Immutable set of domain fragments."""

    fragments: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        # Also accept plain iterables passed positionally
        fragments = frozenset(_validate(f) for f in _fragment_set(self.fragments))
        object.__setattr__(self, "fragments", fragments)

    @classmethod
    def of(cls, fragments: Iterable[str]) -> FilterList:
        """Build a list from fragments, rejecting empty ones."""
        return cls(_fragment_set(fragments))

    @classmethod
    def default(cls) -> FilterList:
        """The seed list of advertising and tracking fragments."""
        return cls.of(SEED_FRAGMENTS)

    @classmethod
    def from_text(cls, text: str) -> FilterList:
        """Parse a fragment file body (see split_fragments)."""
        return cls.of(split_fragments(text))

    def extend(self, fragments: Iterable[str]) -> FilterList:
        """Return a new list with additional fragments."""
        return FilterList(self.fragments | _fragment_set(fragments))

    def without(self, fragments: Iterable[str]) -> FilterList:
        """Return a new list with the given fragments removed."""
        return FilterList(self.fragments - _fragment_set(fragments))

    def __contains__(self, fragment: object) -> bool:
        return fragment in self.fragments

    def __iter__(self) -> Iterator[str]:
        return iter(self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)
