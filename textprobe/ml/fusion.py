"""Module blending heuristic document scores with ML predictions."""

import asyncio

from loguru import logger
from pydantic import ValidationError

from textprobe.configuration import FusionWeights
from textprobe.data_models import DocumentScores, MLPrediction
from textprobe.ml.predictor import MLPredictor
from textprobe.utils import to_score


async def request_prediction(
    predictor: MLPredictor, text: str, timeout: float
) -> MLPrediction | None:
    """
    Get a validated prediction, treating every failure as recoverable.

    Args:
        predictor (MLPredictor): The injected predictor.
        text (str): The whole document text.
        timeout (float): Maximum time to wait for the prediction in seconds.

    Returns:
        MLPrediction | None: The prediction or `None` if the predictor timed out,
            raised an error, or returned malformed output.
    """
    name = predictor.get_name()
    try:
        raw = await asyncio.wait_for(predictor.predict(text), timeout=timeout)
        if isinstance(raw, MLPrediction):
            return raw
        return MLPrediction.model_validate(raw)
    except TimeoutError:
        logger.warning(
            f"{name} did not respond within {timeout}s. Using heuristic scores only."
        )
    except ValidationError as error:
        logger.warning(
            f"{name} returned a malformed prediction ({error.error_count()} errors). "
            "Using heuristic scores only."
        )
    except Exception as error:  # noqa: BLE001, the predictor is an opaque collaborator.
        logger.warning(
            f"{name} failed with {type(error).__name__}: {error}. "
            "Using heuristic scores only."
        )
    return None


def blend(
    heuristic: DocumentScores, prediction: MLPrediction, weights: FusionWeights
) -> DocumentScores:
    """
    Blend document-level heuristic scores with an ML prediction.

    Args:
        heuristic (DocumentScores): Aggregated heuristic scores.
        prediction (MLPrediction): Validated ML prediction.
        weights (FusionWeights): Weights of both sources.

    Returns:
        DocumentScores: Weighted scores, rounded and clamped.
    """

    def mix(heuristic_value: float, ml_value: float) -> int:
        return to_score(
            weights.heuristic_weight * heuristic_value + weights.ml_weight * ml_value
        )

    return DocumentScores(
        ai_score=mix(heuristic.ai_score, prediction.ai_score),
        plagiarism=mix(heuristic.plagiarism, prediction.plagiarism_score),
        confidence=mix(heuristic.confidence, prediction.confidence),
    )
