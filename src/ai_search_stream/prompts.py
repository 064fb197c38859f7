"""Prompt sent to the generative-search provider."""

SUGGESTION_MARKER = "추천검색어:"

SEARCH_PROMPT_TEMPLATE = """사용자 검색어: "{query}"

1. 오타가 있다면 첫 줄에 "{marker} [수정된 검색어]"라고 적으세요.
2. 그 다음 줄부터 검색 결과 요약을 한국어로 매우 간결하게 작성하세요."""


def build_search_prompt(query: str) -> str:
    return SEARCH_PROMPT_TEMPLATE.format(query=query, marker=SUGGESTION_MARKER)
