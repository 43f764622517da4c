import pytest

from textprobe.nlp.sentence_splitter import RegexSentenceSplitter


@pytest.fixture
def splitter() -> RegexSentenceSplitter:
    return RegexSentenceSplitter()


def test_splits_on_terminal_punctuation(splitter):
    text = "The cat sat on the mat. The cat sat on the mat."
    assert splitter.split_into_sentences(text) == [
        "The cat sat on the mat.",
        "The cat sat on the mat.",
    ]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Dr. smith arrived. He left.", ["Dr. smith arrived.", "He left."]),
        ("Wait... what? Yes!", ["Wait... what?", "Yes!"]),
        ("Prices rose. 2020 was rough.", ["Prices rose.", "2020 was rough."]),
        ('He left. "Why?" she asked.', ["He left.", '"Why?" she asked.']),
        ("It ended. (Mostly.) Done.", ["It ended.", "(Mostly.) Done."]),
        ("Fin. Élan vital.", ["Fin.", "Élan vital."]),
    ],
)
def test_sentence_boundaries(splitter, text, expected):
    assert splitter.split_into_sentences(text) == expected


def test_collapses_whitespace(splitter):
    text = "One  sentence\nhere.\n\n\tAnother   one."
    assert splitter.split_into_sentences(text) == [
        "One sentence here.",
        "Another one.",
    ]


def test_text_without_terminal_punctuation_is_one_sentence(splitter):
    assert splitter.split_into_sentences("no punctuation at all") == [
        "no punctuation at all"
    ]


@pytest.mark.parametrize("text", ["", "   ", "\n\t "])
def test_blank_text_has_no_sentences(splitter, text):
    assert splitter.split_into_sentences(text) == []
