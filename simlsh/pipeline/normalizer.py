"""Default text normalizer."""

import unicodedata

import regex

_NON_WORD = regex.compile(r"\W+")


def normalize(text: str) -> str:
    """
    Unicode normalization (NFC), lower case, replace every run of non-word
    characters with a single space.

    Leading and trailing spaces are kept; the word tokenizer discards them.
    """
    text = unicodedata.normalize("NFC", text)
    text = text.lower()
    return _NON_WORD.sub(" ", text)
