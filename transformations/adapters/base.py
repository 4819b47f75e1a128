"""Base interfaces for the external services a transformation calls."""
from abc import ABC, abstractmethod


class SentimentClassifier(ABC):
    """Abstract interface for text sentiment classification."""

    name = "classifier"

    @abstractmethod
    def classify(self, text: str) -> str:
        """
        Classify the sentiment of ``text``.

        Args:
            text: The text to analyse

        Returns:
            A coarse label: POSITIVE, NEGATIVE, NEUTRAL or MIXED

        Raises:
            UpstreamError: the classification call failed
        """

    def health_check(self) -> bool:
        return True


class BlobStore(ABC):
    """Abstract interface for durable blob storage."""

    name = "blobstore"

    @abstractmethod
    def put_text(self, key: str, text: str) -> None:
        """
        Store ``text`` under ``key``.

        Raises:
            UpstreamError: the upload failed
        """

    def health_check(self) -> bool:
        return True
