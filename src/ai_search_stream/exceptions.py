class SearchStreamError(Exception):
    """Base exception for ai_search_stream."""


class AuthError(SearchStreamError):
    """Raised when the provider credential is missing."""


class UpstreamError(SearchStreamError):
    """Raised when the generative-search provider fails."""


class SearchClientError(SearchStreamError):
    """Raised when the search stream endpoint returns an error."""
