"""AWS-backed adapters: Comprehend for sentiment, S3 for blob storage."""
from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from .base import BlobStore, SentimentClassifier
from ..errors import UpstreamError

log = structlog.get_logger()


def _client_kwargs(region: str | None, endpoint_url: str | None) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    if region:
        kwargs["region_name"] = region
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return kwargs


class ComprehendClassifier(SentimentClassifier):
    """Sentiment classification through AWS Comprehend ``DetectSentiment``."""

    name = "comprehend"

    def __init__(self, language: str, client=None, region: str | None = None, endpoint_url: str | None = None):
        self.language = language
        self._client = client or boto3.client("comprehend", **_client_kwargs(region, endpoint_url))

    def classify(self, text: str) -> str:
        try:
            resp = self._client.detect_sentiment(Text=text, LanguageCode=self.language)
        except (BotoCoreError, ClientError) as exc:
            log.warning("comprehend.request_failed", error=str(exc), language=self.language)
            raise UpstreamError(f"comprehend detect_sentiment failed: {exc}", cause=exc) from exc

        sentiment = resp["Sentiment"]
        log.info("sentiment.classified", sentiment=sentiment, adapter=self.name)
        return sentiment


class S3BlobStore(BlobStore):
    """Blob storage in a single S3 bucket."""

    name = "s3"

    def __init__(self, bucket: str, client=None, region: str | None = None, endpoint_url: str | None = None):
        self.bucket = bucket
        self._client = client or boto3.client("s3", **_client_kwargs(region, endpoint_url))

    def put_text(self, key: str, text: str) -> None:
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=text.encode("utf-8"),
                ContentType="text/plain; charset=utf-8",
            )
        except (BotoCoreError, ClientError) as exc:
            log.error("blob.upload_failed", key=key, bucket=self.bucket, error=str(exc))
            raise UpstreamError(f"unable to upload {key!r} to {self.bucket!r}: {exc}", cause=exc) from exc

        log.info("blob.uploaded", key=key, bucket=self.bucket, size=len(text), adapter=self.name)

    def health_check(self) -> bool:
        try:
            self._client.head_bucket(Bucket=self.bucket)
            return True
        except (BotoCoreError, ClientError) as exc:
            log.warning("s3.health_check_failed", bucket=self.bucket, error=str(exc))
            return False
