"""Module with heuristic scoring of AI authorship and plagiarism."""

from collections import Counter
from collections.abc import Sequence
from typing import Self

import numpy as np
from pydantic import BaseModel, ConfigDict

from textprobe.configuration import AIWeights, Calibration, PlagiarismWeights
from textprobe.data_models import (
    FeatureVector,
    ReportedFeatures,
    Sentence,
    SentenceScore,
    SimilaritySignal,
)
from textprobe.nlp.tokeniser import join_ngrams
from textprobe.utils import capped, clamp, to_score

# Maximum variance of values bounded by [0, 1].
MAX_UNIT_VARIANCE = 0.25

# Signals whose agreement drives the per-sentence confidence.
CONFIDENCE_SIGNALS = (
    "lexical_uniformity",
    "stopword_typicality",
    "word_length",
    "entropy_typicality",
    "syntactic_simplicity",
    "incoherence",
)


class DocumentStatistics(BaseModel):
    """Document-level repetition and sentence length statistics."""

    mean_length: float = 0.0
    std_length: float = 0.0
    repeated_bigram_ratio: float = 0.0
    bigram_frequencies: dict[str, int] = {}

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_tokens(cls, sentence_tokens: Sequence[Sequence[str]]) -> Self:
        """
        Calculate statistics of a document from tokens of its sentences.

        Args:
            sentence_tokens (Sequence[Sequence[str]]): Tokens of every sentence.

        Returns:
            Self: Statistics of the document.
        """
        if not sentence_tokens:
            return cls()

        lengths = np.array([len(tokens) for tokens in sentence_tokens], dtype=float)
        all_tokens = [token for tokens in sentence_tokens for token in tokens]
        bigrams = Counter(join_ngrams(all_tokens, 2))
        repeated = sum(1 for count in bigrams.values() if count > 1)

        return cls(
            mean_length=float(lengths.mean()),
            std_length=float(lengths.std()),
            repeated_bigram_ratio=repeated / max(1, len(bigrams)),
            bigram_frequencies=dict(bigrams),
        )

    def sentence_repetition(self, tokens: Sequence[str]) -> float:
        """
        Get the share of bigrams of a sentence repeated anywhere in the document.

        Args:
            tokens (Sequence[str]): Tokens of the sentence.

        Returns:
            float: Ratio in the range [0, 1].
        """
        bigrams = join_ngrams(tokens, 2)
        if not bigrams:
            return 0.0
        repeated = sum(
            1 for bigram in bigrams if self.bigram_frequencies.get(bigram, 0) > 1
        )
        return repeated / len(bigrams)

    def burstiness_similarity(self, length: int) -> float:
        """
        Get how close a sentence length is to the document mean.

        Args:
            length (int): Number of tokens of the sentence.

        Returns:
            float: 1.0 for a sentence of exactly average length, decreasing to 0.0
                at one standard deviation away.
        """
        std = self.std_length or 1.0
        return 1.0 - min(1.0, abs(length - self.mean_length) / std)


class HeuristicScorer:
    """Heuristic-based composition of per-sentence AI and plagiarism scores."""

    def __init__(
        self,
        weights: AIWeights | None = None,
        plagiarism_weights: PlagiarismWeights | None = None,
        calibration: Calibration | None = None,
        disclosure_threshold: float = 0.25,
    ) -> None:
        """
        Initialise the weight tables.

        Args:
            weights (AIWeights | None, optional): Weights of AI signals.
            plagiarism_weights (PlagiarismWeights | None, optional): Weights of
                plagiarism terms.
            calibration (Calibration | None, optional): Normalisation constants.
            disclosure_threshold (float, optional): Minimum external similarity
                for disclosing a corpus source. Defaults to 0.25.
        """
        self._weights = weights or AIWeights()
        self._plagiarism_weights = plagiarism_weights or PlagiarismWeights()
        self._calibration = calibration or Calibration()
        self._disclosure_threshold = disclosure_threshold

    def ai_signals(
        self,
        tokens: Sequence[str],
        features: FeatureVector,
        statistics: DocumentStatistics,
    ) -> dict[str, float]:
        """
        Normalise features into signals growing with AI-likeness.

        Args:
            tokens (Sequence[str]): Tokens of the sentence.
            features (FeatureVector): Extracted features of the sentence.
            statistics (DocumentStatistics): Statistics of the whole document.

        Returns:
            dict[str, float]: Mapping of signal names to values in [0, 1].
        """
        calibration = self._calibration
        word_count = len(tokens)
        lexical_uniformity = 1.0 - features.lexical_diversity if word_count else 0.0
        return {
            "burstiness": statistics.burstiness_similarity(word_count),
            "lexical_uniformity": lexical_uniformity,
            "stopword_typicality": 1.0
            - clamp(
                abs(features.stopword_ratio - calibration.stopword_midpoint)
                / calibration.stopword_midpoint
            ),
            "word_length": clamp(
                (features.avg_word_length - calibration.word_length_floor)
                / calibration.word_length_span
            ),
            "entropy_typicality": 1.0
            - clamp(
                abs(features.char_entropy - calibration.entropy_midpoint)
                / calibration.entropy_midpoint
            ),
            "document_repetition": statistics.repeated_bigram_ratio,
            "sentence_repetition": statistics.sentence_repetition(tokens),
            "syntactic_simplicity": 1.0 - features.syntactic_complexity,
            "incoherence": 1.0 - features.semantic_coherence,
            "ai_patterns": capped(
                features.ai_pattern_score, calibration.ai_pattern_cap
            ),
        }

    def ai_pre_score(
        self, signals: dict[str, float], features: FeatureVector, sentence: str
    ) -> float:
        """
        Combine AI signals into the unbounded pre-score.

        Args:
            signals (dict[str, float]): Signals from `ai_signals`.
            features (FeatureVector): Extracted features of the sentence.
            sentence (str): Text of the sentence.

        Returns:
            float: Weighted sum of signals minus the academic and digit bonuses,
                on the 0-100 scale but not clamped.
        """
        calibration = self._calibration
        score = 0.0
        for signal, weight in self._weights.additive().items():
            score += signals[signal] * weight

        academic = capped(
            features.academic_pattern_score, calibration.academic_pattern_cap
        )
        digits = sum(1 for character in sentence if character.isdigit())
        digit_density = min(1.0, digits / calibration.digit_saturation)

        score -= self._weights.academic_bonus * academic
        score -= self._weights.digit_bonus * digit_density
        return score * 100

    def plagiarism_pre_score(
        self, features: FeatureVector, signal: SimilaritySignal
    ) -> tuple[float, str | None]:
        """
        Combine similarity and pattern evidence with a worst-case combinator.

        Args:
            features (FeatureVector): Extracted features of the sentence.
            signal (SimilaritySignal): Similarity signal of the sentence.

        Returns:
            tuple[float, str | None]: Pre-score on the 0-100 scale and the corpus
                source, disclosed only if the external term wins and exceeds
                the disclosure threshold.
        """
        weights = self._plagiarism_weights
        internal = signal.internal_max * weights.internal_weight
        external = signal.external_max * weights.external_weight
        pattern = clamp(features.plagiarism_pattern_score, 0.0, weights.pattern_cap)

        score = max(internal, external, pattern)
        source = None
        if (
            signal.external_source is not None
            and external >= max(internal, pattern)
            and signal.external_max > self._disclosure_threshold
        ):
            source = signal.external_source
        return score * 100, source

    def confidence(self, signals: dict[str, float]) -> int:
        """
        Get confidence from the agreement of a fixed subset of signals.

        Args:
            signals (dict[str, float]): Signals from `ai_signals`.

        Returns:
            int: 100 when all signals agree, 0 at maximal disagreement.
        """
        variance = float(np.var([signals[name] for name in CONFIDENCE_SIGNALS]))
        return to_score(100 * (1.0 - variance / MAX_UNIT_VARIANCE))

    def score(
        self,
        sentence: Sentence,
        tokens: Sequence[str],
        features: FeatureVector,
        signal: SimilaritySignal,
        statistics: DocumentStatistics,
    ) -> SentenceScore:
        """
        Score a single sentence.

        Args:
            sentence (Sentence): The sentence to be scored.
            tokens (Sequence[str]): Tokens of the sentence.
            features (FeatureVector): Extracted features of the sentence.
            signal (SimilaritySignal): Similarity signal of the sentence.
            statistics (DocumentStatistics): Statistics of the whole document.

        Returns:
            SentenceScore: Clamped and rounded scores of the sentence. A sentence
                without words scores 0 everywhere.
        """
        if not tokens:
            return SentenceScore(
                sentence=sentence.text,
                ai=0,
                plagiarism=0,
                confidence=0,
                features=ReportedFeatures.from_analysis(features, signal),
            )

        signals = self.ai_signals(tokens, features, statistics)
        plagiarism, source = self.plagiarism_pre_score(features, signal)
        return SentenceScore(
            sentence=sentence.text,
            ai=to_score(self.ai_pre_score(signals, features, sentence.text)),
            plagiarism=to_score(plagiarism),
            confidence=self.confidence(signals),
            source=source,
            features=ReportedFeatures.from_analysis(features, signal),
        )
