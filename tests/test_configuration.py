from pathlib import Path

import pytest
from pydantic import ValidationError

from textprobe.configuration import (
    AIWeights,
    Configuration,
    HighlightThresholds,
    load_configuration,
)

REPOSITORY_CONFIGURATION = Path(__file__).resolve().parents[1] / "config.toml"


def test_repository_configuration_matches_defaults():
    assert load_configuration(REPOSITORY_CONFIGURATION) == Configuration()


def test_missing_configuration_file_falls_back_to_defaults(tmp_path):
    assert load_configuration(tmp_path / "missing.toml") == Configuration()


def test_partial_configuration_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        "ngram_size = 6\n"
        'external_similarity = "containment"\n'
        "\n"
        "[fusion]\n"
        "heuristic_weight = 0.7\n"
        "ml_weight = 0.3\n"
        "\n"
        "[highlights]\n"
        "ai_thresholds = [80, 60]\n"
    )
    configuration = load_configuration(path)
    assert configuration.ngram_size == 6
    assert configuration.external_similarity == "containment"
    assert configuration.fusion.heuristic_weight == 0.7
    assert configuration.highlights.ai_thresholds == (80, 60)
    assert configuration.ai_weights == AIWeights()


@pytest.mark.parametrize("ngram_size", [3, 8])
def test_ngram_size_is_bounded(ngram_size):
    with pytest.raises(ValidationError):
        Configuration(ngram_size=ngram_size)


def test_invalid_fusion_weights_in_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[fusion]\nheuristic_weight = 0.5\nml_weight = 0.6\n")
    with pytest.raises(ValidationError, match="sum up to 1.0"):
        load_configuration(path)


def test_weights_are_non_negative():
    with pytest.raises(ValidationError):
        AIWeights(burstiness=-0.1)


def test_plagiarism_percentile_is_bounded():
    with pytest.raises(ValidationError):
        Configuration(plagiarism_percentile=40.0)


def test_highlight_thresholds_are_bounded():
    with pytest.raises(ValidationError):
        HighlightThresholds(plagiarism_thresholds=(120, 40))


def test_additive_weights_exclude_bonuses():
    additive = AIWeights().additive()
    assert "academic_bonus" not in additive
    assert "digit_bonus" not in additive
    assert len(additive) == 10


@pytest.mark.parametrize(
    "content", ["ngram_sise = 9\n", "[ai_weights]\nburstines = 5.0\n"]
)
def test_misspelled_keys_are_rejected(tmp_path, content):
    path = tmp_path / "config.toml"
    path.write_text(content)
    with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
        load_configuration(path)
