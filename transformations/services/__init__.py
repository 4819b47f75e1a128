"""Transformation services and their construction from settings."""
import structlog
from botocore.exceptions import BotoCoreError

from .archive import ArchivalTagger
from .base import Transformation
from .sentiment import SentimentTagger
from ..adapters.base import BlobStore, SentimentClassifier
from ..adapters.memory import InMemoryBlobStore, StaticClassifier
from ..config import Settings
from ..errors import ConfigurationError
from ..metrics import Metrics

log = structlog.get_logger()


def _create_classifier(settings: Settings) -> SentimentClassifier:
    if settings.ADAPTER == "memory":
        log.info("adapter.selected", type="memory", transformation="sentiment")
        return StaticClassifier()

    from ..adapters.aws import ComprehendClassifier

    log.info("adapter.selected", type="comprehend", language=settings.LANGUAGE)
    return ComprehendClassifier(
        language=settings.LANGUAGE,
        region=settings.AWS_REGION,
        endpoint_url=settings.AWS_ENDPOINT_URL,
    )


def _create_blob_store(settings: Settings) -> BlobStore:
    if settings.ADAPTER == "memory":
        log.info("adapter.selected", type="memory", transformation="archive")
        return InMemoryBlobStore()

    if not settings.BUCKET:
        raise ConfigurationError("BUCKET must be set for the archive transformation")

    from ..adapters.aws import S3BlobStore

    log.info("adapter.selected", type="s3", bucket=settings.BUCKET)
    return S3BlobStore(
        bucket=settings.BUCKET,
        region=settings.AWS_REGION,
        endpoint_url=settings.AWS_ENDPOINT_URL,
    )


def create_transformation(settings: Settings, metrics: Metrics | None = None) -> Transformation:
    """
    Build the transformation selected by ``TRANSFORMATION``.

    Raises:
        ConfigurationError: required settings are missing or an SDK client
            could not be created
    """
    try:
        if settings.TRANSFORMATION == "archive":
            return ArchivalTagger(_create_blob_store(settings), namespace=settings.NAMESPACE, metrics=metrics)
        return SentimentTagger(_create_classifier(settings), namespace=settings.NAMESPACE, metrics=metrics)
    except BotoCoreError as exc:
        raise ConfigurationError(f"unable to create AWS client: {exc}") from exc


__all__ = [
    "ArchivalTagger",
    "SentimentTagger",
    "Transformation",
    "create_transformation",
]
