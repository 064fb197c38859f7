"""Shared test fixtures: a fake Gemini client fed with real response types."""

import asyncio
from typing import Iterable, List, Optional, Sequence, Tuple

import pytest
from google.genai import types

from ai_search_stream.stream_adapter import SearchStreamAdapter


def make_chunk(
    text: Optional[str] = None,
    citations: Sequence[Tuple[str, Optional[str]]] = (),
) -> types.GenerateContentResponse:
    """Build a streamed response chunk with optional web citations."""
    grounding = None
    if citations:
        grounding = types.GroundingMetadata(
            grounding_chunks=[
                types.GroundingChunk(web=types.GroundingChunkWeb(uri=uri, title=title))
                for uri, title in citations
            ]
        )
    parts = [types.Part(text=text)] if text is not None else None
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=parts),
                grounding_metadata=grounding,
            )
        ]
    )


class FakeModels:
    def __init__(
        self,
        chunks: Iterable,
        error: Optional[Exception] = None,
        delay: float = 0.0,
        open_error: Optional[Exception] = None,
    ):
        self.chunks = list(chunks)
        self.error = error
        self.open_error = open_error
        self.delay = delay
        self.calls: List[dict] = []
        self.closed = False

    async def generate_content_stream(self, **kwargs):
        self.calls.append(kwargs)
        if self.open_error is not None:
            raise self.open_error
        return self._iterate()

    async def _iterate(self):
        try:
            for chunk in self.chunks:
                if self.delay:
                    await asyncio.sleep(self.delay)
                yield chunk
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


class FakeAio:
    def __init__(self, models: FakeModels):
        self.models = models
        self.pool_closed = False

    async def aclose(self):
        self.pool_closed = True


class FakeGeminiClient:
    """Stands in for `google.genai.Client`; only the async streaming call."""

    def __init__(
        self,
        chunks: Iterable = (),
        error: Optional[Exception] = None,
        delay: float = 0.0,
        open_error: Optional[Exception] = None,
    ):
        self.aio = FakeAio(FakeModels(chunks, error=error, delay=delay, open_error=open_error))

    @property
    def calls(self) -> List[dict]:
        return self.aio.models.calls

    @property
    def closed(self) -> bool:
        return self.aio.models.closed


def collect(iterator) -> list:
    async def _run():
        return [item async for item in iterator]

    return asyncio.run(_run())


@pytest.fixture
def make_adapter():
    def _factory(chunks=(), error=None, delay=0.0, chunk_timeout=5.0, open_error=None):
        client = FakeGeminiClient(chunks, error=error, delay=delay, open_error=open_error)
        adapter = SearchStreamAdapter(api_key="test-key", chunk_timeout=chunk_timeout, _client=client)
        return adapter, client

    return _factory
