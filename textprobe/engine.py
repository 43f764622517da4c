"""Module with the document analysis engine."""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict

from textprobe.configuration import Configuration, config
from textprobe.data_models import (
    HEURISTIC_MODEL,
    CorpusDocument,
    DocumentScores,
    FeatureVector,
    HighlightGroup,
    LocalReport,
    Sentence,
    SentenceScore,
    SimilaritySignal,
)
from textprobe.detection.aggregation import DocumentAggregator
from textprobe.detection.features import FeatureExtractor
from textprobe.detection.heuristics import DocumentStatistics, HeuristicScorer
from textprobe.detection.similarity import SimilarityIndex
from textprobe.ml.fusion import blend, request_prediction
from textprobe.ml.predictor import MLPredictor
from textprobe.nlp.sentence_splitter import RegexSentenceSplitter, SentenceSplitter
from textprobe.nlp.tokeniser import Tokeniser, WordTokeniser
from textprobe.report.highlights import select_highlights
from textprobe.report.summary import model_label, summarise

CorpusInput = Iterable[CorpusDocument | Mapping[str, Any]]


class HeuristicAnalysis(BaseModel):
    """Intermediate per-sentence results of the heuristic path."""

    sentences: list[SentenceScore]
    features: list[FeatureVector]
    signals: list[SimilaritySignal]
    statistics: DocumentStatistics
    word_count: int

    model_config = ConfigDict(frozen=True)

    def to_report(
        self, scores: DocumentScores, model_used: str = HEURISTIC_MODEL
    ) -> LocalReport:
        """
        Assemble the report from document scores.

        Args:
            scores (DocumentScores): Heuristic or blended document scores.
            model_used (str, optional): Label of the scoring path.
                Defaults to "heuristic".

        Returns:
            LocalReport: The report with per-sentence heuristic scores.
        """
        return LocalReport(
            ai_score=scores.ai_score,
            plagiarism=scores.plagiarism,
            confidence=scores.confidence,
            sentences=self.sentences,
            analysis=summarise(
                scores=scores,
                features=self.features,
                signals=self.signals,
                statistics=self.statistics,
                sources=[sentence.source for sentence in self.sentences],
                word_count=self.word_count,
                model_used=model_used,
            ),
        )


class DocumentAnalysisEngine:
    """
    Stateless engine scoring AI authorship and plagiarism of documents.

    Every call builds its own sentences, features and similarity index, so a
    single engine can serve concurrent analyses. The optional predictor is an
    injected collaborator whose lifecycle is managed by the caller.
    """

    def __init__(
        self,
        configuration: Configuration = config,
        predictor: MLPredictor | None = None,
        splitter: SentenceSplitter | None = None,
        tokeniser: Tokeniser | None = None,
    ) -> None:
        """
        Build the analysis components from the configuration.

        Args:
            configuration (Configuration, optional): Engine configuration.
                Defaults to the value loaded from `config.toml`.
            predictor (MLPredictor | None, optional): Predictor blended into
                document scores by `analyse_with_model`. Defaults to none.
            splitter (SentenceSplitter | None, optional): Sentence splitter.
                Defaults to `RegexSentenceSplitter`.
            tokeniser (Tokeniser | None, optional): Word tokeniser.
                Defaults to `WordTokeniser`.
        """
        self._config = configuration
        self._predictor = predictor
        self._splitter = splitter or RegexSentenceSplitter()
        self._tokeniser = tokeniser or WordTokeniser()
        self._extractor = FeatureExtractor(
            settings=configuration.features,
            language=configuration.language,
            tokeniser=self._tokeniser,
        )
        self._scorer = HeuristicScorer(
            weights=configuration.ai_weights,
            plagiarism_weights=configuration.plagiarism_weights,
            calibration=configuration.calibration,
            disclosure_threshold=configuration.disclosure_threshold,
        )
        self._aggregator = DocumentAggregator(
            percentile=configuration.plagiarism_percentile,
            method=configuration.percentile_method,
        )

    def analyse(self, text: str, corpus: CorpusInput = ()) -> LocalReport:
        """
        Analyse a document with the heuristic path only.

        Args:
            text (str): Raw document text.
            corpus (CorpusInput, optional): Reference documents as
                `CorpusDocument`s or `{"id": ..., "text": ...}` mappings.
                Defaults to no documents.

        Returns:
            LocalReport: The report. Zero-valued for a document without words.
        """
        analysis = self._analyse_heuristically(text, corpus)
        if analysis is None:
            return LocalReport.empty()
        return analysis.to_report(self._aggregator.aggregate(analysis.sentences))

    async def analyse_with_model(
        self, text: str, corpus: CorpusInput = ()
    ) -> LocalReport:
        """
        Analyse a document and blend in the prediction of the injected predictor.

        A missing, failing, slow, or malformed predictor never fails the analysis.
        The heuristic report is returned instead.

        Args:
            text (str): Raw document text.
            corpus (CorpusInput, optional): Reference documents.
                Defaults to no documents.

        Returns:
            LocalReport: The report. Its `analysis.model_used` names the predictor
                only if its prediction has been blended in.
        """
        analysis = self._analyse_heuristically(text, corpus)
        if analysis is None:
            return LocalReport.empty()

        heuristic = self._aggregator.aggregate(analysis.sentences)
        if self._predictor is None:
            return analysis.to_report(heuristic)

        prediction = await request_prediction(
            self._predictor, text, timeout=self._config.ml_timeout_seconds
        )
        if prediction is None:
            return analysis.to_report(heuristic)

        fused = blend(heuristic, prediction, self._config.fusion)
        logger.debug(f"Blended heuristic {heuristic} with prediction into {fused}")
        return analysis.to_report(fused, model_label(self._predictor.get_name()))

    def highlights(self, report: LocalReport) -> list[HighlightGroup]:
        """
        Select sentences of a report to be highlighted.

        Args:
            report (LocalReport): Report produced by this engine.

        Returns:
            list[HighlightGroup]: AI-suspect and plagiarism-suspect groups.
        """
        return select_highlights(report, self._config.highlights)

    def _analyse_heuristically(
        self, text: str, corpus: CorpusInput
    ) -> HeuristicAnalysis | None:
        if not text or not text.strip():
            return None

        sentences = [
            Sentence(index=index, text=sentence)
            for index, sentence in enumerate(
                self._splitter.split_into_sentences(text, self._config.language)
            )
        ]
        if not sentences:
            return None

        documents = [CorpusDocument.model_validate(document) for document in corpus]
        sentence_tokens = [self._tokeniser.tokenise(s.text) for s in sentences]
        if not any(sentence_tokens):
            return None

        index = SimilarityIndex(
            sentence_tokens,
            corpus=[
                (document.id, self._tokeniser.tokenise(document.text))
                for document in documents
            ],
            ngram_size=self._config.ngram_size,
            near_duplicate=self._config.near_duplicate_cutoff,
            measure=self._config.external_similarity,
        )
        statistics = DocumentStatistics.from_tokens(sentence_tokens)
        logger.debug(
            f"Analysing {len(sentences)} sentences against "
            f"{len(documents)} corpus documents."
        )

        features = []
        signals = []
        scores = []
        for i, sentence in enumerate(sentences):
            left = sentences[i - 1].text if i > 0 else None
            right = sentences[i + 1].text if i + 1 < len(sentences) else None
            vector = self._extractor.extract(sentence.text, left, right)
            signal = index.signal(i)
            features.append(vector)
            signals.append(signal)
            scores.append(
                self._scorer.score(
                    sentence, sentence_tokens[i], vector, signal, statistics
                )
            )

        return HeuristicAnalysis(
            sentences=scores,
            features=features,
            signals=signals,
            statistics=statistics,
            word_count=sum(len(tokens) for tokens in sentence_tokens),
        )
