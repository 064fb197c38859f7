"""
Per-query accumulation of streamed search output.

Turns the raw chunks coming from the provider into cumulative
`ResultSnapshot`s:
- appends text fragments to a buffer
- pulls the typo-correction suggestion out of the first marker line
- merges grounding citations into an ordered, deduplicated source list
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from .models import ResultSnapshot, SourceRef
from .prompts import SUGGESTION_MARKER

_SUGGESTION_LINE_RE = re.compile(
    r"^[^\S\n]*" + re.escape(SUGGESTION_MARKER) + r"[^\n]*(?:\n|$)", re.MULTILINE
)


def extract_suggestion(buffer: str) -> Optional[str]:
    """Return the suggested query from the first marker line, if complete.

    The marker line only counts once a line break follows somewhere in the
    buffer, so a half-streamed suggestion is not reported.
    """
    if SUGGESTION_MARKER not in buffer:
        return None
    lines = buffer.split("\n")
    if len(lines) < 2:
        return None
    for line in lines:
        stripped = line.strip()
        if stripped.startswith(SUGGESTION_MARKER):
            return stripped[len(SUGGESTION_MARKER):].strip() or None
    return None


def strip_suggestion_lines(buffer: str) -> str:
    return _SUGGESTION_LINE_RE.sub("", buffer).strip()


def extract_sources(chunk: Any) -> List[SourceRef]:
    """Map the web citations attached to a provider chunk to `SourceRef`s."""
    candidates = getattr(chunk, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    grounding_chunks: Iterable[Any] = getattr(metadata, "grounding_chunks", None) or []

    sources: List[SourceRef] = []
    for grounding_chunk in grounding_chunks:
        web = getattr(grounding_chunk, "web", None)
        if web is None or not web.uri:
            continue
        sources.append(SourceRef(uri=web.uri, title=web.title or web.uri))
    return sources


class SnapshotAccumulator:
    """Private state for one search stream."""

    def __init__(self) -> None:
        self._buffer = ""
        self._suggestion: Optional[str] = None
        self._sources: Dict[str, SourceRef] = {}
        self.chunk_count = 0

    @property
    def source_count(self) -> int:
        return len(self._sources)

    def feed(self, text: Optional[str], sources: Iterable[SourceRef] = ()) -> ResultSnapshot:
        self.chunk_count += 1
        self._buffer += text or ""

        if not self._suggestion:
            self._suggestion = extract_suggestion(self._buffer)

        # Existing keys keep their position; the latest title wins.
        for source in sources:
            self._sources[source.uri] = source

        return self.snapshot()

    def feed_chunk(self, chunk: Any) -> ResultSnapshot:
        return self.feed(getattr(chunk, "text", None), extract_sources(chunk))

    def snapshot(self) -> ResultSnapshot:
        return ResultSnapshot(
            text=strip_suggestion_lines(self._buffer),
            suggestion=self._suggestion,
            sources=list(self._sources.values()),
        )
