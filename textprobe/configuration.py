"""The configuration module."""

import tomllib
from decimal import Decimal
from pathlib import Path
from typing import Literal, Self

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, model_validator

MIN_NGRAM_SIZE = 4
MAX_NGRAM_SIZE = 7

PercentileMethod = Literal["lower", "higher", "nearest", "linear", "midpoint"]
SimilarityMeasure = Literal["jaccard", "containment"]


class AIWeights(BaseModel):
    """Weights of the normalised signals summed into the AI pre-score."""

    burstiness: float = Field(0.16, ge=0.0)
    lexical_uniformity: float = Field(0.14, ge=0.0)
    stopword_typicality: float = Field(0.10, ge=0.0)
    word_length: float = Field(0.10, ge=0.0)
    entropy_typicality: float = Field(0.08, ge=0.0)
    document_repetition: float = Field(0.08, ge=0.0)
    sentence_repetition: float = Field(0.08, ge=0.0)
    syntactic_simplicity: float = Field(0.08, ge=0.0)
    incoherence: float = Field(0.06, ge=0.0)
    ai_patterns: float = Field(0.12, ge=0.0)

    # Subtracted from the pre-score.
    academic_bonus: float = Field(0.10, ge=0.0)
    digit_bonus: float = Field(0.08, ge=0.0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    def additive(self) -> dict[str, float]:
        """
        Get weights of the signals that raise the AI pre-score.

        Returns:
            dict[str, float]: Mapping of signal names to their weights.
        """
        return self.model_dump(exclude={"academic_bonus", "digit_bonus"})


class PlagiarismWeights(BaseModel):
    """Weights of the terms of the worst-case plagiarism combinator."""

    internal_weight: float = Field(1.0, ge=0.0)
    external_weight: float = Field(1.0, ge=0.0)
    pattern_cap: float = Field(1.0, ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True, extra="forbid")


class Calibration(BaseModel):
    """Midpoints and saturation points used to normalise raw features."""

    stopword_midpoint: float = Field(0.45, gt=0.0, lt=1.0)
    entropy_midpoint: float = Field(3.5, gt=0.0)
    word_length_floor: float = Field(4.0, ge=0.0)
    word_length_span: float = Field(4.0, gt=0.0)
    digit_saturation: int = Field(6, ge=1)
    ai_pattern_cap: float = Field(1.0, gt=0.0)
    academic_pattern_cap: float = Field(1.0, gt=0.0)

    model_config = ConfigDict(frozen=True, extra="forbid")


class FeatureSettings(BaseModel):
    """Settings of the per-sentence feature extraction."""

    syntactic_complexity_scale: float = Field(2.5, gt=0.0)
    default_coherence: float = Field(0.5, ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True, extra="forbid")


class FusionWeights(BaseModel):
    """Weights blending document-level heuristic and ML scores."""

    heuristic_weight: float = Field(0.6, ge=0.0, le=1.0)
    ml_weight: float = Field(0.4, ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def validate_weights(self) -> Self:
        """Validate whether weights sum up to 1.0 and favour the heuristic path."""
        total = Decimal(str(self.heuristic_weight)) + Decimal(str(self.ml_weight))
        if total != 1:
            raise ValueError(
                f"Fusion weights have to sum up to 1.0 but they sum up to {total}."
            )
        if self.heuristic_weight < self.ml_weight:
            raise ValueError(
                "The heuristic weight cannot be lower than the ML weight "
                f"({self.heuristic_weight} < {self.ml_weight})."
            )
        return self


class HighlightThresholds(BaseModel):
    """Adaptive thresholds for choosing sentences to highlight."""

    ai_thresholds: tuple[int, int] = (70, 50)
    plagiarism_thresholds: tuple[int, int] = (50, 40)
    top_fraction: float = Field(0.1, gt=0.0, le=1.0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def validate_descending(self) -> Self:
        """Validate that the fallback threshold is never stricter than the primary."""
        for name in ("ai_thresholds", "plagiarism_thresholds"):
            primary, fallback = getattr(self, name)
            if not 0 <= fallback <= primary <= 100:  # noqa: PLR2004
                raise ValueError(
                    f"`{name}` must satisfy 0 <= fallback <= primary <= 100, "
                    f"got ({primary}, {fallback})."
                )
        return self


class Configuration(BaseModel):
    """Configuration of the analysis engine."""

    project_name: str = "textprobe"
    weights_version: str = "2025.1"

    language: Literal["english"] = "english"
    ngram_size: int = Field(5, ge=MIN_NGRAM_SIZE, le=MAX_NGRAM_SIZE)
    near_duplicate_cutoff: float = Field(0.98, gt=0.0, le=1.0)
    external_similarity: SimilarityMeasure = "jaccard"
    disclosure_threshold: float = Field(0.25, ge=0.0, le=1.0)

    plagiarism_percentile: float = Field(95.0, ge=50.0, le=100.0)
    percentile_method: PercentileMethod = "higher"

    ml_timeout_seconds: float = Field(10.0, gt=0.0)
    stylometric_model_path: Path = Path("./data/stylometric_predictor.pickle")

    ai_weights: AIWeights = AIWeights()
    plagiarism_weights: PlagiarismWeights = PlagiarismWeights()
    calibration: Calibration = Calibration()
    features: FeatureSettings = FeatureSettings()
    fusion: FusionWeights = FusionWeights()
    highlights: HighlightThresholds = HighlightThresholds()

    model_config = ConfigDict(frozen=True, extra="forbid")


def load_configuration(
    configuration_file: Path = Path("config.toml"),
) -> Configuration:
    """Load configuration from the configuration file."""
    if not configuration_file.exists():
        logger.warning(
            f"Configuration file {configuration_file} does not exist. "
            "Using default settings."
        )
        return Configuration()

    with configuration_file.open("rb") as f:
        settings = tomllib.load(f)
    return Configuration(**settings)


config = load_configuration()
