"""Token filters applied between tokenization and shingling."""

from typing import Callable, Iterable, List

TokenFilter = Callable[[List[str]], List[str]]


def identity(tokens: List[str]) -> List[str]:
    """A noop filter."""
    return tokens


def stopword_filter(stopwords: Iterable[str]) -> TokenFilter:
    """
    Build a filter dropping every token found in ``stopwords``.

    Surviving tokens keep their relative order. Matching is exact, so the
    stop-words should already be in normalized (lower case) form.
    """
    stop = frozenset(stopwords)

    def _filter(tokens: List[str]) -> List[str]:
        return [t for t in tokens if t not in stop]

    return _filter
