"""Shared fixtures of the test suite."""

import pytest

from textprobe.configuration import Configuration
from textprobe.data_models import ReportedFeatures, SentenceScore
from textprobe.engine import DocumentAnalysisEngine

HUMAN_TEXT = (
    "I missed the bus again this morning, so I walked. "
    "Rain soaked my shoes before the second block! "
    "My neighbour waved from her porch, holding a mug of something that smelled "
    "like burnt cinnamon. "
    "Why does the city never fix that crossing?"
)

GENERATED_TEXT = (
    "Furthermore, it is important to note that technology plays a crucial role "
    "in modern education. "
    "Moreover, it is important to note that technology plays a crucial role "
    "in modern society. "
    "Additionally, it is important to note that technology plays a crucial role "
    "in modern healthcare. "
    "In conclusion, technology plays a crucial role in the modern era."
)


def make_score(
    sentence: str = "A sentence.",
    ai: int = 0,
    plagiarism: int = 0,
    confidence: int = 50,
    source: str | None = None,
) -> SentenceScore:
    """Build a sentence score with neutral features."""
    return SentenceScore(
        sentence=sentence,
        ai=ai,
        plagiarism=plagiarism,
        confidence=confidence,
        source=source,
        features=ReportedFeatures(
            lexical_diversity=1.0,
            stopword_ratio=0.4,
            avg_word_length=4.0,
            char_entropy=3.5,
            syntactic_complexity=0.2,
            semantic_coherence=0.5,
            internal_similarity=0.0,
            external_similarity=0.0,
        ),
    )


@pytest.fixture
def configuration() -> Configuration:
    return Configuration()


@pytest.fixture
def engine(configuration: Configuration) -> DocumentAnalysisEngine:
    return DocumentAnalysisEngine(configuration)
