"""
AI Search Stream package.

Streams Gemini search summaries, grounded in live Google Search results,
as cumulative snapshots of summary text, a typo-correction suggestion and
the cited web sources.
"""

from .accumulator import SnapshotAccumulator
from .exceptions import AuthError, SearchClientError, SearchStreamError, UpstreamError
from .models import ResultSnapshot, SourceRef, StreamDone
from .stream_adapter import SearchStreamAdapter

__all__ = [
    "AuthError",
    "ResultSnapshot",
    "SearchClientError",
    "SearchStreamAdapter",
    "SearchStreamError",
    "SnapshotAccumulator",
    "SourceRef",
    "StreamDone",
    "UpstreamError",
]
