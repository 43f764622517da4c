"""Module with natural language tokenisers."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from nltk.tokenize import RegexpTokenizer
from nltk.util import ngrams
from typing_extensions import override

from textprobe.data_models import NGramSet

# Maximal runs of Unicode letters, digits and apostrophes.
WORD_PATTERN = r"(?:[^\W_]|')+"


class Tokeniser(ABC):
    """Interface of a word tokeniser used by features and similarity."""

    @abstractmethod
    def tokenise(self, text: str) -> list[str]:
        """
        Split a text into normalised word tokens.

        Args:
            text (str): Sentence or document text.

        Returns:
            list[str]: Tokens in the order of occurrence.
        """


class WordTokeniser(Tokeniser):
    """Lowercasing word tokeniser built on `nltk`'s regular expression tokeniser."""

    def __init__(self) -> None:
        """Initialise the underlying `nltk` tokeniser."""
        self._tokeniser = RegexpTokenizer(WORD_PATTERN)

    @override
    def tokenise(self, text: str) -> list[str]:
        return self._tokeniser.tokenize(text.lower())


def join_ngrams(tokens: Sequence[str], n: int) -> list[str]:
    """
    Get contiguous token sequences of length `n` joined with single spaces.

    Args:
        tokens (Sequence[str]): Tokens of a sentence or a document.
        n (int): Arity of the n-grams.

    Returns:
        list[str]: N-grams in the order of occurrence, repetitions included.
    """
    return [" ".join(gram) for gram in ngrams(tokens, n)]


def build_ngram_set(tokens: Sequence[str], n: int) -> NGramSet:
    """
    Build the set of n-grams used for similarity.

    A non-empty token sequence shorter than `n` is represented by a single gram
    spanning all of its tokens, so short exact duplicates still overlap.

    Args:
        tokens (Sequence[str]): Tokens of a sentence or a document.
        n (int): Arity of the n-grams.

    Returns:
        NGramSet: Immutable set of whitespace-joined n-grams.
    """
    if not tokens:
        return frozenset()
    if len(tokens) < n:
        return frozenset({" ".join(tokens)})
    return frozenset(join_ngrams(tokens, n))
