"""Module with project-wide data models."""

from enum import Enum
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Language = Literal["english"]
HighlightClass = Literal["ai-suspect", "plagiarism-suspect"]
NGramSet = frozenset[str]
Score = int

HEURISTIC_MODEL = "heuristic"


class ReportModel(BaseModel):
    """Base of models returned to callers, serialised with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class Sentence(BaseModel):
    """An ordered, 0-indexed sentence of the analysed text."""

    index: int = Field(..., ge=0)
    text: str

    model_config = ConfigDict(frozen=True)


class CorpusDocument(BaseModel):
    """Reference document supplied by the caller for external similarity."""

    id: str
    text: str

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)


class FeatureVector(BaseModel):
    """Stylometric features of a single sentence."""

    lexical_diversity: float = Field(0.0, ge=0.0, le=1.0)
    stopword_ratio: float = Field(0.0, ge=0.0, le=1.0)
    avg_word_length: float = Field(0.0, ge=0.0)
    char_entropy: float = Field(0.0, ge=0.0)
    syntactic_complexity: float = Field(0.0, ge=0.0, le=1.0)
    semantic_coherence: float = Field(0.0, ge=0.0, le=1.0)
    academic_pattern_score: float = Field(0.0, ge=0.0)
    ai_pattern_score: float = Field(0.0, ge=0.0)
    plagiarism_pattern_score: float = Field(0.0, ge=0.0)

    model_config = ConfigDict(frozen=True)


class SimilaritySignal(BaseModel):
    """The strongest n-gram overlaps of a sentence inside and outside the text."""

    internal_max: float = Field(0.0, ge=0.0, le=1.0)
    external_max: float = Field(0.0, ge=0.0, le=1.0)
    external_source: str | None = None

    model_config = ConfigDict(frozen=True)


class ReportedFeatures(ReportModel):
    """Subset of sentence features surfaced in a report."""

    lexical_diversity: float
    stopword_ratio: float
    avg_word_length: float
    char_entropy: float
    syntactic_complexity: float
    semantic_coherence: float
    internal_similarity: float
    external_similarity: float

    @classmethod
    def from_analysis(cls, features: FeatureVector, signal: SimilaritySignal) -> Self:
        """
        Build the reported subset from the full analysis of a sentence.

        Args:
            features (FeatureVector): Extracted features of the sentence.
            signal (SimilaritySignal): Similarity signal of the sentence.

        Returns:
            Self: Features rounded for presentation.
        """
        return cls(
            lexical_diversity=round(features.lexical_diversity, 4),
            stopword_ratio=round(features.stopword_ratio, 4),
            avg_word_length=round(features.avg_word_length, 4),
            char_entropy=round(features.char_entropy, 4),
            syntactic_complexity=round(features.syntactic_complexity, 4),
            semantic_coherence=round(features.semantic_coherence, 4),
            internal_similarity=round(signal.internal_max, 4),
            external_similarity=round(signal.external_max, 4),
        )


class SentenceScore(ReportModel):
    """Scores of a single sentence."""

    sentence: str
    ai: Score = Field(..., ge=0, le=100)
    plagiarism: Score = Field(..., ge=0, le=100)
    confidence: Score = Field(..., ge=0, le=100)
    source: str | None = None
    features: ReportedFeatures


class DocumentScores(ReportModel):
    """Document-level scores."""

    ai_score: Score = Field(0, ge=0, le=100)
    plagiarism: Score = Field(0, ge=0, le=100)
    confidence: Score = Field(0, ge=0, le=100)


class WritingStyle(str, Enum):
    """Overall style label of an analysed document."""

    AI_LIKE = "ai_like"
    ACADEMIC = "academic"
    MIXED = "mixed"
    HUMAN_LIKE = "human_like"


class SuspiciousPattern(str, Enum):
    """Flags raised by the document-level analysis."""

    UNIFORM_SENTENCE_LENGTH = "uniform_sentence_length"
    REPETITIVE_PHRASING = "repetitive_phrasing"
    LOW_LEXICAL_DIVERSITY = "low_lexical_diversity"
    AI_DISCOURSE_MARKERS = "ai_discourse_markers"
    INTERNAL_DUPLICATION = "internal_duplication"
    CORPUS_OVERLAP = "corpus_overlap"
    UNATTRIBUTED_CITATIONS = "unattributed_citations"


class AnalysisSummary(ReportModel):
    """Textual summary derived from the analysis."""

    style: WritingStyle = WritingStyle.HUMAN_LIKE
    suspicious_patterns: list[SuspiciousPattern] = []
    recommendations: list[str] = []
    model_used: str = HEURISTIC_MODEL


class LocalReport(ReportModel):
    """Report of a single document analysis."""

    ai_score: Score = Field(0, ge=0, le=100)
    plagiarism: Score = Field(0, ge=0, le=100)
    confidence: Score = Field(0, ge=0, le=100)
    sentences: list[SentenceScore] = []
    analysis: AnalysisSummary = AnalysisSummary()

    @classmethod
    def empty(cls) -> Self:
        """
        Get the zero-valued report of a document without sentences.

        Returns:
            Self: Report with all scores equal to 0 and no sentences.
        """
        return cls()

    def document_scores(self) -> DocumentScores:
        """
        Get document-level scores of the report.

        Returns:
            DocumentScores: Scores without sentences and the summary.
        """
        return DocumentScores(
            ai_score=self.ai_score,
            plagiarism=self.plagiarism,
            confidence=self.confidence,
        )


class HighlightGroup(ReportModel):
    """Sentences chosen for emphasis under a single mark class."""

    terms: list[str]
    class_name: HighlightClass


class MarkedSegment(ReportModel):
    """Consecutive piece of text, either plain or marked with a highlight class."""

    text: str
    class_name: HighlightClass | None = None


class MLPrediction(BaseModel):
    """Document-level prediction of an external ML predictor."""

    ai_score: float = Field(..., ge=0.0, le=100.0, alias="aiScore")
    plagiarism_score: float = Field(..., ge=0.0, le=100.0, alias="plagiarismScore")
    confidence: float = Field(..., ge=0.0, le=100.0)
    features: dict[str, float] = {}

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class LabelledSample(BaseModel):
    """A sample for training the stylometric predictor."""

    text: str
    is_ai: bool
    is_plagiarised: bool = False
