"""
FastAPI backend for the AI Search Stream service.

Exposes:
- A Server-Sent Events endpoint streaming search snapshots to the web UI
- A blocking endpoint returning only the final snapshot
"""

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator, Dict

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from .exceptions import AuthError, UpstreamError
from .models import (
    ResultSnapshot,
    SearchRequest,
    StreamDone,
    StreamErrorDetail,
    StreamErrorEvent,
)
from .stream_adapter import SearchStreamAdapter, StreamItem

logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


@lru_cache(maxsize=1)
def get_adapter() -> SearchStreamAdapter:
    """Shared adapter; its Gemini client is reused across requests."""
    return SearchStreamAdapter.from_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    if get_adapter.cache_info().currsize:
        await get_adapter().aclose()
        get_adapter.cache_clear()


def _sse_event(payload: BaseModel) -> bytes:
    return f"data: {payload.model_dump_json()}\n\n".encode("utf-8")


def _open_stream(adapter: SearchStreamAdapter, payload: SearchRequest) -> AsyncIterator[StreamItem]:
    if not payload.query:
        raise HTTPException(status_code=400, detail="Query must not be empty.")
    try:
        return adapter.stream(payload.query)
    except AuthError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


async def _sse_events(items: AsyncIterator[StreamItem]) -> AsyncIterator[bytes]:
    try:
        async for item in items:
            yield _sse_event(item)
    except UpstreamError as exc:
        logger.warning("Search stream aborted: %s", exc)
        yield _sse_event(
            StreamErrorEvent(error=StreamErrorDetail(message=str(exc), type="upstream_error"))
        )


def create_app() -> FastAPI:
    app = FastAPI(title="AI Search Stream", version="0.1.0", lifespan=lifespan)

    # Allow local UIs to talk to the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/search/stream")
    async def search_stream(
        payload: SearchRequest,
        adapter: SearchStreamAdapter = Depends(get_adapter),
    ) -> StreamingResponse:
        """
        Stream cumulative snapshots as SSE `data:` events, ending with
        `{"done": true}`.
        """
        items = _open_stream(adapter, payload)
        return StreamingResponse(
            _sse_events(items), media_type="text/event-stream", headers=SSE_HEADERS
        )

    @app.post("/search", response_model=ResultSnapshot)
    async def search(
        payload: SearchRequest,
        adapter: SearchStreamAdapter = Depends(get_adapter),
    ) -> ResultSnapshot:
        """Run the whole stream and return the last snapshot."""
        items = _open_stream(adapter, payload)
        final = ResultSnapshot()
        try:
            async for item in items:
                if isinstance(item, StreamDone):
                    break
                final = item
        except UpstreamError as exc:
            raise HTTPException(status_code=502, detail=f"Search provider failed: {exc}") from exc
        return final

    return app


app = create_app()
