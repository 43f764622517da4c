import pytest

from textprobe.detection.patterns import (
    academic_library,
    ai_library,
    plagiarism_library,
)


def test_every_match_adds_its_weight():
    text = "Furthermore, prices rose. Furthermore, wages fell."
    assert ai_library().score(text) == pytest.approx(0.5)


def test_text_without_markers_scores_zero():
    assert ai_library().score("My dog chased a squirrel up the oak.") == 0.0


def test_ai_markers_are_case_insensitive():
    assert ai_library().score("MOREOVER, it works.") == pytest.approx(0.25)


def test_citation_pattern_is_case_sensitive():
    library = plagiarism_library()
    assert library.score("Smith et al. (2020) found it.") == pytest.approx(0.25)
    assert library.score("smith et al. (2020) found it.") == 0.0


def test_definition_pattern_anchors_to_the_start():
    library = plagiarism_library()
    assert library.score("Osmosis is defined as movement.") == pytest.approx(0.25)
    assert library.score("Here osmosis is defined as movement.") == 0.0


def test_academic_register():
    text = "In this study, we propose a new methodology."
    assert academic_library().score(text) == pytest.approx(0.75)


def test_library_sizes():
    assert len(ai_library()) == 13
    assert len(plagiarism_library()) == 4
    assert len(academic_library()) == 7
