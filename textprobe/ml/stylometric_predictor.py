"""Module with a stylometric document predictor backed by scikit-learn."""

import asyncio
from collections import Counter
from collections.abc import Sequence
from pathlib import Path
from pickle import dump, load
from typing import Any

from loguru import logger
from sklearn.ensemble import GradientBoostingClassifier
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity
from typing_extensions import override

from textprobe.configuration import config
from textprobe.data_models import LabelledSample, MLPrediction
from textprobe.ml.predictor import MLPredictor
from textprobe.nlp.tokeniser import Tokeniser, WordTokeniser
from textprobe.utils import clamp, map_score_to_confidence

AI_LABEL = 1


class StylometricPredictor(MLPredictor):
    """Character n-gram classifier of AI authorship with a plagiarism reference set."""

    def __init__(
        self,
        model_path: Path | None = config.stylometric_model_path,
        plagiarism_floor: float = 0.7,
    ) -> None:
        """
        Initialise hyperparameters of the vectoriser and the classifier.

        Args:
            model_path (Path | None, optional): Path to the pickled model. `None`
                keeps the model in memory only. Defaults to the value from
                the configuration.
            plagiarism_floor (float, optional): Cosine similarity to plagiarised
                references below which no plagiarism is reported. Defaults to 0.7.
        """
        self._model_path = model_path.expanduser().resolve() if model_path else None
        self._plagiarism_floor = plagiarism_floor
        self._tokeniser: Tokeniser = WordTokeniser()
        self._vectorizer: TfidfVectorizer | None = None
        self._binary_classifier: GradientBoostingClassifier | None = None
        self._references: Any = None

        self._vectoriser_ngram_range_min = 2
        self._vectoriser_ngram_range_max = 5
        # Ignore terms appearing in more than 95% of documents.
        self._vectoriser_max_df = 0.95
        self._vectoriser_min_df = 1

    @property
    def is_ready(self) -> bool:
        """Whether the model can predict."""
        return self._vectorizer is not None and self._binary_classifier is not None

    def fit(self, samples: Sequence[LabelledSample]) -> float:
        """
        Train the classifier and remember plagiarised samples as references.

        Args:
            samples (Sequence[LabelledSample]): Training samples of both classes.

        Raises:
            ValueError: Raised if samples do not contain both AI-written and
                human-written texts.

        Returns:
            float: Accuracy on the training samples.
        """
        labels = [int(sample.is_ai) for sample in samples]
        if len(set(labels)) < 2:  # noqa: PLR2004
            raise ValueError(
                "Training samples have to contain both AI-written and human-written "
                "texts."
            )

        self._vectorizer = TfidfVectorizer(
            analyzer="char_wb",
            ngram_range=(
                self._vectoriser_ngram_range_min,
                self._vectoriser_ngram_range_max,
            ),
            min_df=self._vectoriser_min_df,
            max_df=self._vectoriser_max_df,
            sublinear_tf=True,
        )
        texts = [sample.text for sample in samples]
        x_train = self._vectorizer.fit_transform(texts)

        self._binary_classifier = GradientBoostingClassifier(
            n_estimators=100, random_state=0
        )
        self._binary_classifier.fit(X=x_train, y=labels)

        plagiarised = [sample.text for sample in samples if sample.is_plagiarised]
        self._references = (
            self._vectorizer.transform(plagiarised) if plagiarised else None
        )

        accuracy = float(self._binary_classifier.score(X=x_train, y=labels))
        logger.info(
            f"Trained {self.get_name()} on {len(samples)} samples "
            f"({len(plagiarised)} plagiarised references). Accuracy: {accuracy:.4f}"
        )
        return accuracy

    @override
    async def initialise(self) -> None:
        if self.is_ready:
            return
        if self._model_path is None or not self._model_path.is_file():
            raise FileNotFoundError(
                f"There is no model file {self._model_path} for {self.get_name()} "
                "and the model has not been fitted."
            )
        logger.info(f"Loading {self.get_name()} from {self._model_path}")
        await asyncio.to_thread(self._load_model)

    @override
    async def predict(self, text: str) -> MLPrediction:
        if not self.is_ready:
            raise RuntimeError(
                f"Model not prepared. Call `{self.initialise.__name__}` or "
                f"`{self.fit.__name__}` first."
            )
        return await asyncio.to_thread(self._predict, text)

    @override
    async def dispose(self) -> None:
        self._vectorizer = None
        self._binary_classifier = None
        self._references = None

    def save(self) -> None:
        """Save the fitted model to the model file."""
        if not self.is_ready or self._model_path is None:
            raise RuntimeError("Only a fitted model with a model path can be saved.")
        self._model_path.parent.mkdir(parents=True, exist_ok=True)
        with self._model_path.open("wb") as f:
            dump(
                {
                    "classifier": self._binary_classifier,
                    "vectorizer": self._vectorizer,
                    "references": self._references,
                },
                f,
                protocol=5,
            )
        logger.info(f"Saved {self.get_name()} to {self._model_path}")

    def _load_model(self) -> None:
        if self._model_path is None:
            raise FileNotFoundError("No model path has been configured.")
        with self._model_path.open("rb") as f:
            model_data = load(f)  # noqa: S301, we have chosen `pickle` due its simplicity.
        self._vectorizer = model_data["vectorizer"]
        self._binary_classifier = model_data["classifier"]
        self._references = model_data["references"]
        if self._binary_classifier is None:
            raise ValueError("Failed to load the binary classifier from the file.")

    def _predict(self, text: str) -> MLPrediction:
        if self._vectorizer is None or self._binary_classifier is None:
            raise RuntimeError("Model not prepared.")

        x = self._vectorizer.transform([text])
        probabilities = self._binary_classifier.predict_proba(X=x)
        classes = list(self._binary_classifier.classes_)
        ai_probability = float(probabilities[0, classes.index(AI_LABEL)])

        similarity = 0.0
        if self._references is not None:
            similarity = float(cosine_similarity(x, self._references).max())
        plagiarism = clamp(
            (similarity - self._plagiarism_floor) / (1.0 - self._plagiarism_floor)
        )

        return MLPrediction(
            ai_score=100 * ai_probability,
            plagiarism_score=100 * plagiarism,
            confidence=100 * map_score_to_confidence(ai_probability),
            features={
                **self._describe(text),
                "semantic_plagiarism": similarity,
            },
        )

    def _describe(self, text: str) -> dict[str, float]:
        words = self._tokeniser.tokenise(text)
        if not words:
            return {
                "vocabulary_diversity": 0.0,
                "avg_word_length": 0.0,
                "repetition_rate": 0.0,
            }
        frequencies = Counter(words)
        repeated = sum(1 for count in frequencies.values() if count > 1)
        return {
            "vocabulary_diversity": len(frequencies) / len(words),
            "avg_word_length": sum(len(word) for word in words) / len(words),
            "repetition_rate": repeated / len(words),
        }
