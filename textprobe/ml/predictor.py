"""Module with an interface for an external ML predictor."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import TracebackType
from typing import Any, Self

from textprobe.data_models import MLPrediction


class MLPredictor(ABC):
    """
    An interface for a document-level ML predictor.

    A predictor is constructed by the caller and injected into the engine. Its
    lifecycle is explicit: `initialise` before the first prediction and
    `dispose` when it is no longer needed. It can also be used as an async
    context manager.
    """

    @abstractmethod
    async def initialise(self) -> None:
        """Load or prepare the model so that `predict` can be called."""

    @abstractmethod
    async def predict(self, text: str) -> MLPrediction | Mapping[str, Any]:
        """
        Predict document-level scores for a text.

        Args:
            text (str): The whole document text.

        Returns:
            MLPrediction | Mapping[str, Any]: The prediction or its raw mapping with
                `aiScore`, `plagiarismScore`, `confidence` and `features` keys.
        """

    async def dispose(self) -> None:  # noqa: B027
        """Release resources held by the model."""

    def get_name(self) -> str:
        """
        Get name of the predictor.

        Returns:
            str: Name of the predictor.
        """
        return type(self).__name__

    async def __aenter__(self) -> Self:
        """Initialise the predictor on entering the context."""
        await self.initialise()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Dispose of the predictor on leaving the context."""
        await self.dispose()
