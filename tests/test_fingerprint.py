"""
Tests for the fingerprint pipeline entry points.
"""

import base64
import hashlib
import random

import numpy as np
import pytest

from simlsh import (
    FingerprintConfig,
    Fingerprinter,
    default_digest,
    fingerprint,
    fingerprint_chars,
    fingerprint_words,
    hamming_distance,
)
from simlsh.errors import ConfigurationError, DigestWidthError
from simlsh.pipeline.tokenizers import tokenize_chars


def repeat(text, times):
    return " ".join([text] * times)


def naive_fingerprint(words, width, algorithm="md5"):
    """Straightforward SimHash over pre-normalized words, one bit at a time."""
    shingles = [" ".join(words[i:i + width]) for i in range(len(words) - width + 1)]
    bits = hashlib.new(algorithm).digest_size * 8
    acc = [0] * bits
    for s in shingles:
        value = int.from_bytes(hashlib.new(algorithm, s.encode("utf-8")).digest(), "big")
        for i in range(bits):
            acc[i] += 1 if (value >> (bits - 1 - i)) & 1 else -1
    out = 0
    for v in acc:
        out = (out << 1) | (1 if v > 0 else 0)
    return out.to_bytes(bits // 8, "big")


def random_document(rng, length, vocabulary):
    return " ".join(rng.choice(vocabulary) for _ in range(length))


class TestFingerprint:
    """Test the main pipeline."""

    @pytest.mark.parametrize("width", [1, 2, 3, 4])
    def test_matches_naive_simhash(self, width):
        """The pipeline equals a plain bit-at-a-time SimHash."""
        text = "Lorem ipsum dolor sit amet, consectetur adipiscing elit"
        words = text.lower().replace(",", "").split()
        assert fingerprint(text, width) == naive_fingerprint(words, width)

    def test_matches_naive_simhash_sha1(self):
        text = "the quick brown fox jumps over the lazy dog"
        fp = fingerprint(text, 2, lambda m: hashlib.sha1(m).digest())
        assert len(fp) == 20
        assert fp == naive_fingerprint(text.split(), 2, "sha1")

    def test_bag_of_words_literal_example(self):
        """With width 1, word order does not matter."""
        assert fingerprint("foo bar baz", shingle_width=1, digest_fn=default_digest) == \
            fingerprint("foo baz bar", shingle_width=1, digest_fn=default_digest)

    def test_bag_of_words_any_permutation(self):
        words = "a stitch in time saves nine and more".split()
        rng = random.Random(3)
        expected = fingerprint(" ".join(words), 1)
        for _ in range(5):
            shuffled = words[:]
            rng.shuffle(shuffled)
            assert fingerprint(" ".join(shuffled), 1) == expected

    def test_repeating_the_phrase_does_not_affect_the_hash(self):
        s1 = repeat("foo bar baz", 100)
        s2 = repeat("foo bar baz", 200)
        assert fingerprint_words(s1) == fingerprint_words(s2)

    @pytest.mark.parametrize("times", [3, 7, 50])
    def test_repetition_invariance(self, times):
        """Repeating a phrase three or more times gives a stable fingerprint."""
        phrase = "alpha beta gamma"
        assert fingerprint(repeat(phrase, times)) == fingerprint(repeat(phrase, 200))

    @pytest.mark.parametrize("times", [1, 2, 5])
    def test_repetition_invariance_bag_of_words(self, times):
        """Bag-of-words counts scale exactly, so any repetition is invariant."""
        text = "one two two three"
        assert fingerprint(repeat(text, times), 1) == fingerprint(text, 1)

    def test_deterministic(self):
        text = "Determinism means the same bytes every time"
        assert fingerprint(text) == fingerprint(text)
        assert fingerprint_chars(text) == fingerprint_chars(text)

    @pytest.mark.parametrize("text", ["", "   ", "!!!", "two words"])
    def test_degenerate_input_is_all_zero(self, text):
        """No shingles gives the all-zero fingerprint of the digest width."""
        assert fingerprint(text) == bytes(16)

    def test_empty_with_other_digest(self):
        assert fingerprint("", digest_fn=lambda m: hashlib.sha256(m).digest()) == bytes(32)

    def test_normalization_applies(self):
        """Case and punctuation do not change the fingerprint."""
        assert fingerprint("Hello, World! How are you?") == fingerprint("hello world how are you")

    def test_joiner_changes_hash_input(self):
        """Shingles are hashed with their joiner."""
        text = "lorem ipsum dolor sit amet"
        spaced = fingerprint(text, 1)
        assert fingerprint(text, 1, shingle_joiner="") == spaced
        assert fingerprint(text, 2, shingle_joiner="") != fingerprint(text, 2)

    def test_concatenated_shingles_match_published_vectors(self):
        """Hashing the plain token concatenation reproduces known fingerprints."""
        text = "Lorem ipsum dolor sit amet"

        md5_fp = fingerprint(text, shingle_joiner="")
        assert base64.b64encode(md5_fp).decode("ascii") == "uX05itKaghA0gQHCwDCIFg=="

        sha1_fp = fingerprint(text, 2, lambda m: hashlib.sha1(m).digest(), shingle_joiner="")
        assert base64.b64encode(sha1_fp).decode("ascii") == "VhW06EEJyWQA1gKIAAlQgI4NHUE="

    def test_filter_is_applied(self):
        drop_the = lambda tokens: [t for t in tokens if t != "the"]
        assert fingerprint("the cat the hat", 1, filter_fn=drop_the) == fingerprint("cat hat", 1)

    def test_custom_tokenizer(self):
        assert fingerprint("ab", 1, tokenize_fn=tokenize_chars) == fingerprint("a b", 1)

    def test_non_positive_width(self):
        with pytest.raises(ConfigurationError):
            fingerprint("a b c", 0)

    def test_digest_width_mismatch_fails(self):
        """A digest that changes width mid-computation is fatal."""
        def unstable(message):
            if message == b"foo":
                return hashlib.md5(message).digest()
            return hashlib.sha1(message).digest()

        with pytest.raises(DigestWidthError) as exc_info:
            fingerprint("some words here", 1, unstable)
        assert exc_info.value.expected == 128
        assert exc_info.value.actual == 160

    def test_odd_width_digest(self):
        """Digests of 12 bits pack into 2 bytes with zero high padding."""
        def twelve_bits(message):
            return np.unpackbits(np.frombuffer(hashlib.md5(message).digest(), dtype=np.uint8))[:12]

        fp = fingerprint("near duplicate detection with odd widths", 1, twelve_bits)
        assert len(fp) == 2
        assert fp[1] & 0xF0 == 0

    def test_chars_fingerprint_short_strings(self):
        """Grapheme shingles keep near-identical short strings close."""
        near = hamming_distance(
            fingerprint_chars("john.doe@example.com"),
            fingerprint_chars("john.doe@example.org"),
        )
        far = hamming_distance(
            fingerprint_chars("john.doe@example.com"),
            fingerprint_chars("mary-kate_w1@other.net"),
        )
        assert near < far


class TestSimilarityMonotonicity:
    """Statistical checks over a synthetic corpus."""

    def test_single_substitution_is_close(self):
        rng = random.Random(42)
        vocabulary = [f"w{i}" for i in range(2000)]
        near, far = [], []
        for _ in range(10):
            doc = random_document(rng, 300, vocabulary).split()
            edited = doc[:]
            edited[rng.randrange(len(edited))] = "substituted"
            other = random_document(rng, 300, vocabulary)

            base = fingerprint(" ".join(doc))
            near.append(hamming_distance(base, fingerprint(" ".join(edited))))
            far.append(hamming_distance(base, fingerprint(other)))

        assert max(near) < min(far)
        assert sum(near) / len(near) < 20
        assert sum(far) / len(far) > 45


class TestFingerprinter:
    """Test the reusable pipeline object."""

    def test_defaults_match_function(self):
        fp = Fingerprinter()
        assert fp.fingerprint("some text to hash") == fingerprint("some text to hash")
        assert fp.digest_bits == 128

    def test_from_config(self):
        config = FingerprintConfig(shingle_width=2, tokenizer="chars", digest="sha1")
        fp = Fingerprinter.from_config(config)
        text = "username42"
        expected = fingerprint(
            text, 2, lambda m: hashlib.sha1(m).digest(), tokenize_fn=tokenize_chars
        )
        assert fp.fingerprint(text) == expected
        assert fp.digest_bits == 160

    def test_from_config_stopwords(self):
        fp = Fingerprinter.from_config(FingerprintConfig(shingle_width=1, stopwords=["the"]))
        assert fp.fingerprint("the cat") == fingerprint("cat", 1)

    def test_fingerprint_many_is_independent(self):
        fp = Fingerprinter()
        texts = ["first document here", "", "first document here"]
        results = list(fp.fingerprint_many(texts))
        assert results[0] == results[2]
        assert results[1] == bytes(16)

    def test_invalid_width(self):
        with pytest.raises(ConfigurationError):
            Fingerprinter(shingle_width=0)

    @pytest.mark.parametrize("batch_size", [0, -5])
    def test_invalid_batch_size_fails_on_construction(self, batch_size):
        with pytest.raises(ConfigurationError) as exc_info:
            Fingerprinter(batch_size=batch_size)
        assert exc_info.value.parameter == "batch_size"

    def test_repr(self):
        assert "shingle_width=3" in repr(Fingerprinter())
