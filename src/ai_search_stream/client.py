"""
Python consumer of the search stream endpoint.

Reads the SSE response line by line and hands back `ResultSnapshot`s until
the done marker arrives. Useful for scripts and for UIs that want the
latest snapshot after every chunk.
"""

import json
from typing import Iterator, Optional

import requests

from .config import settings
from .exceptions import SearchClientError
from .models import ResultSnapshot


def iter_snapshots(
    query: str,
    base_url: Optional[str] = None,
    timeout: float = 120,
) -> Iterator[ResultSnapshot]:
    """Yield each snapshot streamed for ``query``.

    The terminal ``{"done": true}`` event ends iteration and is not yielded.
    """
    url = f"{base_url or settings.api_base_url}{settings.search_stream_path}"
    try:
        resp = requests.post(url, json={"query": query}, stream=True, timeout=timeout)
    except requests.RequestException as exc:
        raise SearchClientError(f"Search request failed: {exc}") from exc

    with resp:
        try:
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise SearchClientError(f"Search request failed: {exc}") from exc

        for line in resp.iter_lines(decode_unicode=True):
            if not line or not line.startswith("data:"):
                continue
            try:
                data = json.loads(line[len("data:"):].strip())
            except ValueError as exc:
                raise SearchClientError(f"Malformed stream event: {line!r}") from exc
            if data.get("done"):
                return
            if "error" in data:
                raise SearchClientError(data["error"].get("message", "Search failed"))
            yield ResultSnapshot.model_validate(data)


def search(query: str, base_url: Optional[str] = None) -> ResultSnapshot:
    """Consume the whole stream and return the final snapshot."""
    final = ResultSnapshot()
    for snapshot in iter_snapshots(query, base_url=base_url):
        final = snapshot
    return final
