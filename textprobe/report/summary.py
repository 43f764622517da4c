"""Module deriving the textual summary of an analysis."""

from collections.abc import Sequence

from textprobe.data_models import (
    HEURISTIC_MODEL,
    AnalysisSummary,
    DocumentScores,
    FeatureVector,
    SimilaritySignal,
    SuspiciousPattern,
    WritingStyle,
)
from textprobe.detection.heuristics import DocumentStatistics

AI_LIKE_SCORE = 70
MIXED_SCORE = 40
ACADEMIC_PATTERN_MEAN = 0.25
MIN_SENTENCES_FOR_RHYTHM = 3
UNIFORM_LENGTH_VARIATION = 0.25
REPETITIVE_BIGRAM_RATIO = 0.2
LOW_LEXICAL_DIVERSITY = 0.6
DUPLICATION_SIMILARITY = 0.5
SHORT_TEXT_WORDS = 50

RECOMMENDATIONS: dict[SuspiciousPattern, str] = {
    SuspiciousPattern.UNIFORM_SENTENCE_LENGTH: (
        "Vary sentence length; uniformly sized sentences read as generated prose."
    ),
    SuspiciousPattern.REPETITIVE_PHRASING: (
        "Rephrase recurring word pairs to reduce repetition."
    ),
    SuspiciousPattern.LOW_LEXICAL_DIVERSITY: (
        "Use a broader vocabulary instead of repeating the same words."
    ),
    SuspiciousPattern.AI_DISCOURSE_MARKERS: (
        "Replace stock transitions such as 'furthermore' or 'it is important to "
        "note' with content-specific wording."
    ),
    SuspiciousPattern.INTERNAL_DUPLICATION: (
        "Remove or rewrite sentences duplicated within the document."
    ),
    SuspiciousPattern.CORPUS_OVERLAP: (
        "Quote and cite the passages matching reference documents."
    ),
    SuspiciousPattern.UNATTRIBUTED_CITATIONS: (
        "Attribute claims introduced with 'according to' or 'studies show' to "
        "a specific source."
    ),
}


def model_label(predictor_name: str | None = None) -> str:
    """
    Get the label of the scoring path used for a report.

    Args:
        predictor_name (str | None, optional): Name of the ML predictor whose
            prediction has been blended in, if any.

    Returns:
        str: "heuristic" or "heuristic+<predictor name>".
    """
    if predictor_name is None:
        return HEURISTIC_MODEL
    return f"{HEURISTIC_MODEL}+{predictor_name}"


def classify_style(
    scores: DocumentScores, features: Sequence[FeatureVector]
) -> WritingStyle:
    """Label the overall writing style of a document."""
    if scores.ai_score >= AI_LIKE_SCORE:
        return WritingStyle.AI_LIKE
    academic = sum(vector.academic_pattern_score for vector in features)
    if features and academic / len(features) >= ACADEMIC_PATTERN_MEAN:
        return WritingStyle.ACADEMIC
    if scores.ai_score >= MIXED_SCORE:
        return WritingStyle.MIXED
    return WritingStyle.HUMAN_LIKE


def detect_patterns(
    features: Sequence[FeatureVector],
    signals: Sequence[SimilaritySignal],
    statistics: DocumentStatistics,
    sources: Sequence[str | None],
) -> list[SuspiciousPattern]:
    """Collect suspicious patterns found across the document."""
    patterns = []
    if (
        len(features) >= MIN_SENTENCES_FOR_RHYTHM
        and statistics.mean_length > 0
        and statistics.std_length / statistics.mean_length < UNIFORM_LENGTH_VARIATION
    ):
        patterns.append(SuspiciousPattern.UNIFORM_SENTENCE_LENGTH)
    if statistics.repeated_bigram_ratio >= REPETITIVE_BIGRAM_RATIO:
        patterns.append(SuspiciousPattern.REPETITIVE_PHRASING)
    diversities = [v.lexical_diversity for v in features if v.lexical_diversity > 0]
    if diversities and sum(diversities) / len(diversities) < LOW_LEXICAL_DIVERSITY:
        patterns.append(SuspiciousPattern.LOW_LEXICAL_DIVERSITY)
    if any(vector.ai_pattern_score > 0 for vector in features):
        patterns.append(SuspiciousPattern.AI_DISCOURSE_MARKERS)
    if any(signal.internal_max >= DUPLICATION_SIMILARITY for signal in signals):
        patterns.append(SuspiciousPattern.INTERNAL_DUPLICATION)
    if any(source is not None for source in sources):
        patterns.append(SuspiciousPattern.CORPUS_OVERLAP)
    if any(vector.plagiarism_pattern_score > 0 for vector in features):
        patterns.append(SuspiciousPattern.UNATTRIBUTED_CITATIONS)
    return patterns


def summarise(
    scores: DocumentScores,
    features: Sequence[FeatureVector],
    signals: Sequence[SimilaritySignal],
    statistics: DocumentStatistics,
    sources: Sequence[str | None],
    word_count: int,
    model_used: str = HEURISTIC_MODEL,
) -> AnalysisSummary:
    """
    Derive the textual summary of a heuristic analysis.

    Args:
        scores (DocumentScores): Aggregated document scores.
        features (Sequence[FeatureVector]): Features of every sentence.
        signals (Sequence[SimilaritySignal]): Similarity of every sentence.
        statistics (DocumentStatistics): Statistics of the document.
        sources (Sequence[str | None]): Disclosed corpus source of every sentence.
        word_count (int): Number of words in the document.
        model_used (str, optional): Label of the scoring path. Defaults to
            "heuristic".

    Returns:
        AnalysisSummary: Style label, flags and recommendations.
    """
    patterns = detect_patterns(features, signals, statistics, sources)
    recommendations = [RECOMMENDATIONS[pattern] for pattern in patterns]
    if 0 < word_count < SHORT_TEXT_WORDS:
        recommendations.append(
            f"The text has only {word_count} words. Detection is more reliable on "
            f"texts longer than {SHORT_TEXT_WORDS} words."
        )
    return AnalysisSummary(
        style=classify_style(scores, features),
        suspicious_patterns=patterns,
        recommendations=recommendations,
        model_used=model_used,
    )
