"""In-memory adapters for local runs and tests."""
import structlog
from .base import BlobStore, SentimentClassifier
from ..errors import UpstreamError

log = structlog.get_logger()


class StaticClassifier(SentimentClassifier):
    """Returns a fixed label, or raises when configured with an error."""

    name = "memory"

    def __init__(self, label: str = "NEUTRAL", error: Exception | None = None):
        self.label = label
        self.error = error
        self.calls: list[str] = []

    def classify(self, text: str) -> str:
        self.calls.append(text)
        if self.error is not None:
            raise UpstreamError(f"classification failed: {self.error}", cause=self.error)
        log.info("sentiment.classified", sentiment=self.label, adapter="memory")
        return self.label


class InMemoryBlobStore(BlobStore):
    """Dict-backed blob store."""

    name = "memory"

    def __init__(self, error: Exception | None = None):
        self.blobs: dict[str, str] = {}
        self.error = error

    def put_text(self, key: str, text: str) -> None:
        if self.error is not None:
            raise UpstreamError(f"unable to upload {key!r}: {self.error}", cause=self.error)
        self.blobs[key] = text
        log.info("blob.uploaded", key=key, size=len(text), adapter="memory")
