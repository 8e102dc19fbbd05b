"""Needle detection for long-context benchmarks."""

import re

from memorybench.provider.domain.search_result import SearchResult

KEYWORD_MATCH_RATIO = 0.7

_STOP_WORDS = frozenset(
    """
    the a an is are was were be been being have has had do does did will would
    could should may might must shall can to of in for on with at by from as
    into through during before after above below between under again further
    then once here there when where why how all each few more most other some
    such no nor not only own same so than too very just and but if or because
    until while that which who whom this these those am its it he she they them
    his her their what actually really certainly
    """.split()
)


def _keywords(text: str) -> list[str]:
    words = re.sub(r"[^a-z0-9\s]", " ", text.lower()).split()
    return [word for word in words if len(word) > 2 and word not in _STOP_WORDS]


def retrieved_needle(needle: str, results: list[SearchResult]) -> bool:
    """True when the retrieved text contains the needle.

    Providers that rephrase what they store rarely return the needle verbatim,
    so when the exact (case-insensitive) match fails, the needle still counts
    as retrieved if at least 70% of its content words appear in the text.
    """
    texts = [result.content for result in results]
    texts.extend(chunk.content for result in results for chunk in result.chunks)
    haystack = "\n\n".join(text for text in texts if text).lower()
    if not haystack:
        return False
    if needle.lower() in haystack:
        return True

    keywords = _keywords(needle)
    if not keywords:
        return False
    matched = sum(1 for word in keywords if word in haystack)
    return matched / len(keywords) >= KEYWORD_MATCH_RATIO
