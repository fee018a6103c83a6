"""Tokenizers turning normalized text into an ordered list of tokens."""

from typing import Callable, Dict, List

import regex

from ..errors import ConfigurationError

_GRAPHEME = regex.compile(r"\X")

Tokenizer = Callable[[str], List[str]]


def tokenize_words(text: str) -> List[str]:
    """Split a string into words on whitespace runs."""
    return text.split()


def tokenize_chars(text: str) -> List[str]:
    """
    Split a string into its Unicode grapheme clusters.

    Meant for short strings such as usernames or e-mail addresses where
    word shingles are too coarse.
    """
    return _GRAPHEME.findall(text)


TOKENIZERS: Dict[str, Tokenizer] = {
    "words": tokenize_words,
    "chars": tokenize_chars,
}


def get_tokenizer(name: str) -> Tokenizer:
    """Resolve a tokenizer by its configuration name."""
    try:
        return TOKENIZERS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown tokenizer '{name}', expected one of {sorted(TOKENIZERS)}",
            parameter="tokenizer",
            value=name,
        ) from None
