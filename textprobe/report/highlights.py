"""Module selecting and rendering highlighted sentences of a report."""

import math
import re
from collections.abc import Callable, Sequence

from textprobe.configuration import HighlightThresholds
from textprobe.data_models import (
    HighlightClass,
    HighlightGroup,
    LocalReport,
    MarkedSegment,
    SentenceScore,
)

AI_SUSPECT: HighlightClass = "ai-suspect"
PLAGIARISM_SUSPECT: HighlightClass = "plagiarism-suspect"


def _unique(terms: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(term for term in terms if term))


def select_terms(
    sentences: Sequence[SentenceScore],
    key: Callable[[SentenceScore], int],
    thresholds: tuple[int, int],
    top_fraction: float,
) -> list[str]:
    """
    Select sentence texts with an adaptive threshold.

    Args:
        sentences (Sequence[SentenceScore]): Scored sentences in document order.
        key (Callable[[SentenceScore], int]): Score used for the selection.
        thresholds (tuple[int, int]): The primary and the fallback threshold.
        top_fraction (float): Share of the highest scoring sentences taken when no
            sentence reaches either threshold.

    Returns:
        list[str]: Deduplicated sentence texts in document order of first
            occurrence, or in descending score order for the top fraction.
    """
    for threshold in thresholds:
        terms = _unique([s.sentence for s in sentences if key(s) >= threshold])
        if terms:
            return terms

    if not sentences:
        return []
    top_count = max(1, math.ceil(len(sentences) * top_fraction))
    ranked = sorted(sentences, key=key, reverse=True)
    return _unique([s.sentence for s in ranked[:top_count]])


def select_highlights(
    report: LocalReport, thresholds: HighlightThresholds | None = None
) -> list[HighlightGroup]:
    """
    Choose AI-suspect and plagiarism-suspect sentences of a report.

    Args:
        report (LocalReport): The analysed document.
        thresholds (HighlightThresholds | None, optional): Selection thresholds.
            Defaults to 70/50 for AI and 50/40 for plagiarism with top 10%.

    Returns:
        list[HighlightGroup]: The AI-suspect group followed by the
            plagiarism-suspect group. The latter is empty whenever the document
            plagiarism score is 0.
    """
    thresholds = thresholds or HighlightThresholds()
    ai_terms = select_terms(
        report.sentences,
        key=lambda s: s.ai,
        thresholds=thresholds.ai_thresholds,
        top_fraction=thresholds.top_fraction,
    )

    plagiarism_terms: list[str] = []
    if report.plagiarism > 0:
        plagiarism_terms = select_terms(
            report.sentences,
            key=lambda s: s.plagiarism,
            thresholds=thresholds.plagiarism_thresholds,
            top_fraction=thresholds.top_fraction,
        )

    return [
        HighlightGroup(terms=ai_terms, class_name=AI_SUSPECT),
        HighlightGroup(terms=plagiarism_terms, class_name=PLAGIARISM_SUSPECT),
    ]


def _term_pattern(term: str) -> re.Pattern[str]:
    # Sentences are whitespace-collapsed, the source text may not be.
    pieces = [re.escape(piece) for piece in term.split()]
    return re.compile(r"\s+".join(pieces), re.IGNORECASE)


def mark_terms(text: str, groups: Sequence[HighlightGroup]) -> list[MarkedSegment]:
    """
    Locate highlighted terms in the source text without overlapping marks.

    Longer matches are placed first, measured in the source text since a term
    matches across any whitespace. A match touching an already consumed range of
    characters is skipped, so marks are never nested or doubled. Among equally
    long matches, earlier groups win.

    Args:
        text (str): The raw source text.
        groups (Sequence[HighlightGroup]): Groups from `select_highlights`.

    Returns:
        list[MarkedSegment]: Consecutive segments covering the whole text.
    """
    candidates = [
        (term.strip(), group.class_name)
        for group in groups
        for term in group.terms
        if term.strip()
    ]
    matches = [
        (*match.span(), class_name, order)
        for order, (term, class_name) in enumerate(candidates)
        for match in _term_pattern(term).finditer(text)
    ]
    matches.sort(key=lambda m: (m[0] - m[1], m[3], m[0]))

    consumed: list[tuple[int, int, HighlightClass]] = []
    for start, end, class_name, _order in matches:
        if any(
            start < taken_end and taken_start < end
            for taken_start, taken_end, _ in consumed
        ):
            continue
        consumed.append((start, end, class_name))
    consumed.sort()

    segments = []
    position = 0
    for start, end, class_name in consumed:
        if start > position:
            segments.append(MarkedSegment(text=text[position:start]))
        segments.append(MarkedSegment(text=text[start:end], class_name=class_name))
        position = end
    if position < len(text):
        segments.append(MarkedSegment(text=text[position:]))
    return segments
