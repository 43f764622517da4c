"""Module rolling sentence scores up into document scores."""

from collections.abc import Sequence

import numpy as np

from textprobe.configuration import PercentileMethod
from textprobe.data_models import DocumentScores, SentenceScore
from textprobe.utils import to_score


class DocumentAggregator:
    """
    Aggregator of per-sentence scores.

    AI-likeness is a general style signal and is averaged. Plagiarism is an
    "any evidence" signal and is taken at a high percentile, so a single copied
    passage dominates the document score.
    """

    def __init__(
        self, percentile: float = 95.0, method: PercentileMethod = "higher"
    ) -> None:
        """
        Configure the plagiarism percentile.

        Args:
            percentile (float, optional): Percentile of sentence plagiarism scores
                used as the document score. Defaults to 95.0.
            method (PercentileMethod, optional): `numpy` percentile method.
                Defaults to "higher".
        """
        self._percentile = percentile
        self._method = method

    def aggregate(self, sentences: Sequence[SentenceScore]) -> DocumentScores:
        """
        Aggregate sentence scores into document scores.

        Args:
            sentences (Sequence[SentenceScore]): Scores of all sentences.

        Returns:
            DocumentScores: Mean AI score, percentile plagiarism and mean
                confidence. All zero for a document without sentences.
        """
        if not sentences:
            return DocumentScores()

        ai = np.array([s.ai for s in sentences], dtype=float)
        plagiarism = np.array([s.plagiarism for s in sentences], dtype=float)
        confidence = np.array([s.confidence for s in sentences], dtype=float)

        return DocumentScores(
            ai_score=to_score(float(ai.mean())),
            plagiarism=to_score(
                float(np.percentile(plagiarism, self._percentile, method=self._method))
            ),
            confidence=to_score(float(confidence.mean())),
        )
