import pytest

from textprobe.utils import capped, clamp, map_score_to_confidence, to_score


@pytest.mark.parametrize(
    ("value", "expected"), [(-0.5, 0.0), (0.3, 0.3), (1.7, 1.0)]
)
def test_clamp(value, expected):
    assert clamp(value) == expected


def test_capped_rescales_to_unit_range():
    assert capped(0.5, 2.0) == pytest.approx(0.25)
    assert capped(3.0, 1.0) == 1.0


@pytest.mark.parametrize(
    ("value", "expected"), [(-5.0, 0), (49.6, 50), (73.2, 73), (150.0, 100)]
)
def test_to_score(value, expected):
    assert to_score(value) == expected


@pytest.mark.parametrize(
    ("score", "expected"),
    [(0.0, 1.0), (0.25, 0.5), (0.5, 0.0), (0.75, 0.5), (1.0, 1.0), (1.5, 1.0)],
)
def test_map_score_to_confidence(score, expected):
    assert map_score_to_confidence(score) == pytest.approx(expected)
