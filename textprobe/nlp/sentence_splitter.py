"""Module for splitting a text into sentences."""

import re
from abc import ABC, abstractmethod

from typing_extensions import override

from textprobe.data_models import Language

# Quotation marks and opening brackets allowed to start a new sentence.
SENTENCE_OPENERS = "\"'“‘«([{"


class SentenceSplitter(ABC):
    """Interface of a splitter producing whitespace-normalised sentences."""

    @abstractmethod
    def split_into_sentences(self, text: str, language: Language) -> list[str]:
        """
        Break a raw text into sentences in their original order.

        Args:
            text (str): Raw text, possibly with irregular whitespace.
            language (Language): Language of the text.

        Returns:
            list[str]: Non-empty, trimmed sentences.
        """


class RegexSentenceSplitter(SentenceSplitter):
    """Punctuation-based sentence splitter that leaves abbreviations intact."""

    _whitespace = re.compile(r"\s+")
    _boundary = re.compile(r"[.!?]( +)")

    @override
    def split_into_sentences(
        self, text: str, language: Language = "english"
    ) -> list[str]:
        collapsed = self._whitespace.sub(" ", text).strip()
        if not collapsed:
            return []

        # First pass: find cut positions, second pass: slice between them.
        cuts = [
            match.end(1)
            for match in self._boundary.finditer(collapsed)
            if self._starts_sentence(collapsed, match.end(1))
        ]

        sentences = []
        start = 0
        for cut in [*cuts, len(collapsed)]:
            sentence = collapsed[start:cut].strip()
            if sentence:
                sentences.append(sentence)
            start = cut
        return sentences

    @staticmethod
    def _starts_sentence(text: str, position: int) -> bool:
        if position >= len(text):
            return False
        character = text[position]
        return (
            character.isupper()
            or character.isdigit()
            or character in SENTENCE_OPENERS
        )
