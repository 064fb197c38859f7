"""
Payload models shared by the stream adapter, the backend and the client.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, field_validator


class SourceRef(BaseModel):
    uri: str
    title: str


class ResultSnapshot(BaseModel):
    """Cumulative search result after one upstream chunk.

    Consumers replace their previous snapshot with this one; they never
    merge it.
    """

    text: str = ""
    suggestion: Optional[str] = None
    sources: List[SourceRef] = []


class StreamDone(BaseModel):
    """Terminal marker. Not a snapshot; consumers stop and discard it."""

    done: Literal[True] = True


class SearchRequest(BaseModel):
    query: str

    @field_validator("query")
    @classmethod
    def _strip_query(cls, value: str) -> str:
        return value.strip()


class StreamErrorDetail(BaseModel):
    message: str
    type: str


class StreamErrorEvent(BaseModel):
    error: StreamErrorDetail
