"""Module with n-gram similarity between sentences and reference documents."""

from collections.abc import Sequence

from textprobe.configuration import MAX_NGRAM_SIZE, MIN_NGRAM_SIZE, SimilarityMeasure
from textprobe.data_models import NGramSet, SimilaritySignal
from textprobe.nlp.tokeniser import build_ngram_set


def jaccard(a: NGramSet, b: NGramSet) -> float:
    """
    Calculate Jaccard similarity of two sets.

    Args:
        a (NGramSet): The first set.
        b (NGramSet): The second set.

    Returns:
        float: |A ∩ B| / |A ∪ B|, with 0/0 defined as 0.0.
    """
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


def containment(a: NGramSet, b: NGramSet) -> float:
    """
    Calculate the fraction of the first set contained in the second.

    Args:
        a (NGramSet): The contained set, e.g. n-grams of a sentence.
        b (NGramSet): The containing set, e.g. n-grams of a whole document.

    Returns:
        float: |A ∩ B| / |A|, with 0/0 defined as 0.0.
    """
    if not a:
        return 0.0
    return len(a & b) / len(a)


class SimilarityIndex:
    """Per-analysis index of n-gram sets of sentences and corpus documents."""

    def __init__(
        self,
        sentence_tokens: Sequence[Sequence[str]],
        corpus: Sequence[tuple[str, Sequence[str]]] = (),
        ngram_size: int = 5,
        near_duplicate: float = 0.98,
        measure: SimilarityMeasure = "jaccard",
    ) -> None:
        """
        Build n-gram sets of all sentences and corpus documents.

        Args:
            sentence_tokens (Sequence[Sequence[str]]): Tokens of every sentence of
                the analysed document, in order.
            corpus (Sequence[tuple[str, Sequence[str]]], optional): Pairs of
                a document identifier and its tokens. Defaults to no documents.
            ngram_size (int, optional): Arity of n-grams. Defaults to 5.
            near_duplicate (float, optional): Similarity above which scanning stops.
                Defaults to 0.98.
            measure (SimilarityMeasure, optional): Measure used against corpus
                documents. Defaults to "jaccard".

        Raises:
            ValueError: Raised if `ngram_size` is outside the supported range.
        """
        if not MIN_NGRAM_SIZE <= ngram_size <= MAX_NGRAM_SIZE:
            raise ValueError(
                f"`ngram_size` must be between {MIN_NGRAM_SIZE} and {MAX_NGRAM_SIZE}, "
                f"got {ngram_size}."
            )
        self._near_duplicate = near_duplicate
        self._external_measure = jaccard if measure == "jaccard" else containment
        self._sentences: list[NGramSet] = [
            build_ngram_set(tokens, ngram_size) for tokens in sentence_tokens
        ]
        self._corpus: list[tuple[str, NGramSet]] = [
            (document_id, build_ngram_set(tokens, ngram_size))
            for document_id, tokens in corpus
        ]

    def __len__(self) -> int:
        """Get the number of indexed sentences."""
        return len(self._sentences)

    def internal_max(self, i: int) -> float:
        """
        Get the highest similarity of a sentence to any other sentence.

        Args:
            i (int): Index of the sentence.

        Returns:
            float: Maximum Jaccard similarity, 0.0 for documents with fewer than
                two sentences.
        """
        best = 0.0
        for j, other in enumerate(self._sentences):
            if j == i:
                continue
            best = max(best, jaccard(self._sentences[i], other))
            if best > self._near_duplicate:
                break
        return best

    def external_max(self, i: int) -> tuple[float, str | None]:
        """
        Get the highest similarity of a sentence to any corpus document.

        Args:
            i (int): Index of the sentence.

        Returns:
            tuple[float, str | None]: Maximum similarity and the identifier of
                the winning document. The identifier is `None` without any overlap.
        """
        best = 0.0
        winner = None
        for document_id, document in self._corpus:
            similarity = self._external_measure(self._sentences[i], document)
            if similarity > best:
                best, winner = similarity, document_id
            if best > self._near_duplicate:
                break
        return best, winner

    def signal(self, i: int) -> SimilaritySignal:
        """
        Get both similarity measurements of a sentence.

        Args:
            i (int): Index of the sentence.

        Returns:
            SimilaritySignal: Internal and external maxima with the winning source.
        """
        external, source = self.external_max(i)
        return SimilaritySignal(
            internal_max=self.internal_max(i),
            external_max=external,
            external_source=source,
        )
