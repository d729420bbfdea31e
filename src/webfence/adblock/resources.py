"""
Substitute responses served in place of blocked requests.
"""

from __future__ import annotations

import io
from dataclasses import dataclass


@dataclass(frozen=True)
class SubstituteResponse:
    """Response descriptor the host serves instead of fetching."""

    content_type: str
    encoding: str
    body: bytes = b""

    @property
    def content_type_header(self) -> str:
        """Value for the Content-Type header, e.g. 'text/plain; charset=UTF-8'."""
        return f"{self.content_type}; charset={self.encoding}"

    def stream(self) -> io.BytesIO:
        """Return a fresh readable stream over the body."""
        return io.BytesIO(self.body)


# Empty text, served for every blocked request
EMPTY_TEXT = SubstituteResponse(content_type="text/plain", encoding="UTF-8")
