"""
Streaming adapter around the Gemini generative-search API.

The adapter:
- Sends the search prompt with the Google Search tool enabled.
- Feeds every streamed chunk through a private `SnapshotAccumulator`.
- Yields one cumulative `ResultSnapshot` per chunk, then a `StreamDone`.

It never reads the environment; the credential is passed in explicitly
(see `from_settings`).
"""

import asyncio
import logging
from typing import Any, AsyncIterator, Optional, Union

from google import genai
from google.genai import types

from .accumulator import SnapshotAccumulator
from .config import Settings, settings as default_settings
from .exceptions import AuthError, UpstreamError
from .models import ResultSnapshot, StreamDone
from .prompts import build_search_prompt

logger = logging.getLogger(__name__)

StreamItem = Union[ResultSnapshot, StreamDone]

_END = object()


class SearchStreamAdapter:
    """Turns one query into a lazy sequence of search snapshots."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-3-flash-preview",
        chunk_timeout: Optional[float] = 60.0,
        _client: Any = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.chunk_timeout = chunk_timeout
        self._client = _client
        self._owns_client = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SearchStreamAdapter":
        settings = settings or default_settings
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            chunk_timeout=settings.chunk_timeout_seconds,
        )

    def stream(self, query: str) -> AsyncIterator[StreamItem]:
        """Start a search stream for ``query``.

        Raises `AuthError` right away when no API key is configured; nothing
        is sent upstream in that case. Failures while streaming surface as
        `UpstreamError` from the returned iterator.
        """
        if not self.api_key:
            raise AuthError("GEMINI_API_KEY is not set; cannot call the search provider.")
        return self._generate(query)

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        """Release the Gemini client's connection pool if this adapter built it."""
        if self._owns_client and self._client is not None:
            await self._client.aio.aclose()
            self._client = None
            self._owns_client = False

    def _upstream_error(self, exc: Exception) -> UpstreamError:
        # TimeoutError is an OSError on 3.11+, so check it first.
        if isinstance(exc, asyncio.TimeoutError):
            logger.error("Search stream stalled for more than %ss", self.chunk_timeout)
            return UpstreamError(f"No data from search provider within {self.chunk_timeout}s")
        logger.error("Search error: %s: %s", type(exc).__name__, exc)
        return UpstreamError(str(exc) or type(exc).__name__)

    async def _open_upstream(self, query: str) -> AsyncIterator[Any]:
        config = types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )
        try:
            return await self._get_client().aio.models.generate_content_stream(
                model=self.model,
                contents=build_search_prompt(query),
                config=config,
            )
        except Exception as exc:
            raise self._upstream_error(exc) from exc

    async def _next_chunk(self, upstream: AsyncIterator[Any]) -> Any:
        """Return the next provider chunk, or `_END` once the stream is exhausted."""
        try:
            if self.chunk_timeout is None:
                return await upstream.__anext__()
            return await asyncio.wait_for(upstream.__anext__(), timeout=self.chunk_timeout)
        except StopAsyncIteration:
            return _END
        except Exception as exc:
            raise self._upstream_error(exc) from exc

    async def _generate(self, query: str) -> AsyncIterator[StreamItem]:
        accumulator = SnapshotAccumulator()
        upstream: Optional[AsyncIterator[Any]] = None
        logger.debug("Opening search stream for query %r with model %s", query, self.model)
        try:
            upstream = await self._open_upstream(query)
            while True:
                chunk = await self._next_chunk(upstream)
                if chunk is _END:
                    break
                yield accumulator.feed_chunk(chunk)
        finally:
            aclose = getattr(upstream, "aclose", None)
            if aclose is not None:
                await aclose()

        logger.info(
            "Search stream finished: %d chunks, %d sources",
            accumulator.chunk_count,
            accumulator.source_count,
        )
        yield StreamDone()
