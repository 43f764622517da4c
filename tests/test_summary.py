from textprobe.data_models import (
    DocumentScores,
    FeatureVector,
    SimilaritySignal,
    SuspiciousPattern,
    WritingStyle,
)
from textprobe.detection.heuristics import DocumentStatistics
from textprobe.report.summary import (
    RECOMMENDATIONS,
    classify_style,
    detect_patterns,
    model_label,
    summarise,
)


def test_model_label():
    assert model_label() == "heuristic"
    assert model_label("StylometricPredictor") == "heuristic+StylometricPredictor"


def test_classify_style():
    academic = [FeatureVector(academic_pattern_score=0.5)]

    def style(ai_score: int, features: list[FeatureVector]) -> WritingStyle:
        return classify_style(DocumentScores(ai_score=ai_score), features)

    assert style(75, academic) == WritingStyle.AI_LIKE
    assert style(30, academic) == WritingStyle.ACADEMIC
    assert style(45, []) == WritingStyle.MIXED
    assert style(10, []) == WritingStyle.HUMAN_LIKE


def test_detect_patterns():
    features = [
        FeatureVector(lexical_diversity=0.5, ai_pattern_score=0.25),
        FeatureVector(lexical_diversity=0.5, plagiarism_pattern_score=0.25),
        FeatureVector(lexical_diversity=0.5),
    ]
    signals = [SimilaritySignal(internal_max=0.6)] + [SimilaritySignal()] * 2
    statistics = DocumentStatistics(
        mean_length=10.0, std_length=1.0, repeated_bigram_ratio=0.3
    )
    assert detect_patterns(features, signals, statistics, [None, "doc", None]) == [
        SuspiciousPattern.UNIFORM_SENTENCE_LENGTH,
        SuspiciousPattern.REPETITIVE_PHRASING,
        SuspiciousPattern.LOW_LEXICAL_DIVERSITY,
        SuspiciousPattern.AI_DISCOURSE_MARKERS,
        SuspiciousPattern.INTERNAL_DUPLICATION,
        SuspiciousPattern.CORPUS_OVERLAP,
        SuspiciousPattern.UNATTRIBUTED_CITATIONS,
    ]


def test_clean_document_has_no_patterns():
    features = [FeatureVector(lexical_diversity=1.0)] * 2
    statistics = DocumentStatistics(mean_length=10.0, std_length=1.0)
    assert detect_patterns(features, [SimilaritySignal()] * 2, statistics, [None]) == []


def test_summarise():
    features = [FeatureVector(lexical_diversity=1.0, ai_pattern_score=0.25)]
    summary = summarise(
        scores=DocumentScores(ai_score=20),
        features=features,
        signals=[SimilaritySignal()],
        statistics=DocumentStatistics(mean_length=12.0),
        sources=[None],
        word_count=12,
        model_used="heuristic+Fixed",
    )
    assert summary.style == WritingStyle.HUMAN_LIKE
    assert summary.suspicious_patterns == [SuspiciousPattern.AI_DISCOURSE_MARKERS]
    assert summary.recommendations[0] == RECOMMENDATIONS[
        SuspiciousPattern.AI_DISCOURSE_MARKERS
    ]
    assert "12 words" in summary.recommendations[-1]
    assert summary.model_used == "heuristic+Fixed"
