"""Module with per-sentence stylometric feature extraction."""

import math
from collections import Counter
from collections.abc import Sequence

from textprobe.configuration import FeatureSettings
from textprobe.data_models import FeatureVector, Language
from textprobe.detection.patterns import (
    PatternLibrary,
    academic_library,
    ai_library,
    plagiarism_library,
)
from textprobe.nlp.tokeniser import Tokeniser, WordTokeniser

STOPWORDS: dict[Language, frozenset[str]] = {
    "english": frozenset(
        {
            "the", "of", "and", "to", "in", "a", "is", "that", "for", "on",
            "with", "as", "by", "it", "be", "are", "this", "an", "or", "from",
            "at", "which", "but", "not", "we", "our", "their", "also", "can",
            "have", "has", "was", "were", "than", "these", "those", "such",
            "may", "more", "most", "any", "all", "some", "into", "between",
            "over", "under", "about", "after", "before", "during", "through",
            "per", "i", "you", "he", "she", "they", "them", "his", "her", "its",
            "there", "here",
        }
    ),
}  # fmt: skip

SUBORDINATORS: dict[Language, frozenset[str]] = {
    "english": frozenset(
        {
            "after", "although", "as", "because", "before", "if", "once",
            "since", "than", "though", "unless", "until", "when", "whenever",
            "where", "whereas", "wherever", "whether", "while", "which", "who",
            "whom", "whose",
        }
    ),
}  # fmt: skip

CLAUSE_MARKERS = ",:;"


def shannon_entropy(text: str) -> float:
    """
    Calculate Shannon entropy of the character distribution of a text.

    Args:
        text (str): Text to be measured.

    Returns:
        float: Entropy in bits per character, 0.0 for an empty text.
    """
    if not text:
        return 0.0
    total = len(text)
    return -sum(
        count / total * math.log2(count / total) for count in Counter(text).values()
    )


def word_overlap(words: set[str], other: set[str]) -> float:
    """
    Get shared distinct words relative to the larger of the two vocabularies.

    Args:
        words (set[str]): Distinct words of a sentence.
        other (set[str]): Distinct words of a neighbouring sentence.

    Returns:
        float: Overlap in the range [0, 1].
    """
    larger = max(len(words), len(other))
    if larger == 0:
        return 0.0
    return len(words & other) / larger


class FeatureExtractor:
    """Extractor of the fixed feature vector of a sentence."""

    def __init__(
        self,
        settings: FeatureSettings | None = None,
        language: Language = "english",
        tokeniser: Tokeniser | None = None,
    ) -> None:
        """
        Initialise word lists, pattern libraries and the tokeniser.

        Args:
            settings (FeatureSettings | None, optional): Feature settings.
                Defaults to the built-in defaults.
            language (Language, optional): Language of analysed texts.
                Defaults to "english".
            tokeniser (Tokeniser | None, optional): Word tokeniser.
                Defaults to `WordTokeniser`.
        """
        self._settings = settings or FeatureSettings()
        self._stopwords = STOPWORDS[language]
        self._subordinators = SUBORDINATORS[language]
        self._tokeniser = tokeniser or WordTokeniser()
        self._ai_patterns: PatternLibrary = ai_library()
        self._plagiarism_patterns: PatternLibrary = plagiarism_library()
        self._academic_patterns: PatternLibrary = academic_library()

    def extract(
        self, sentence: str, left: str | None = None, right: str | None = None
    ) -> FeatureVector:
        """
        Compute the feature vector of a sentence.

        Args:
            sentence (str): The sentence to be described.
            left (str | None, optional): The preceding sentence, if any.
            right (str | None, optional): The following sentence, if any.

        Returns:
            FeatureVector: Features of the sentence. All-zero if the sentence has
                no words.
        """
        words = self._tokeniser.tokenise(sentence)
        if not words:
            return FeatureVector()

        word_count = len(words)
        distinct = set(words)
        stopwords = sum(1 for word in words if word in self._stopwords)

        return FeatureVector(
            lexical_diversity=len(distinct) / word_count,
            stopword_ratio=stopwords / word_count,
            avg_word_length=sum(len(word) for word in words) / word_count,
            char_entropy=shannon_entropy(sentence),
            syntactic_complexity=self._syntactic_complexity(sentence, words),
            semantic_coherence=self._semantic_coherence(distinct, left, right),
            academic_pattern_score=self._academic_patterns.score(sentence),
            ai_pattern_score=self._ai_patterns.score(sentence),
            plagiarism_pattern_score=self._plagiarism_patterns.score(sentence),
        )

    def _syntactic_complexity(self, sentence: str, words: Sequence[str]) -> float:
        clause_markers = sum(sentence.count(marker) for marker in CLAUSE_MARKERS)
        subordinators = sum(1 for word in words if word in self._subordinators)
        density = (clause_markers + 2 * subordinators) / len(words)
        return min(1.0, density * self._settings.syntactic_complexity_scale)

    def _semantic_coherence(
        self, distinct: set[str], left: str | None, right: str | None
    ) -> float:
        neighbours = [
            set(self._tokeniser.tokenise(neighbour))
            for neighbour in (left, right)
            if neighbour is not None
        ]
        if not neighbours:
            return self._settings.default_coherence
        return sum(word_overlap(distinct, other) for other in neighbours) / len(
            neighbours
        )
