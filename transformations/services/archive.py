"""Archival of ticket descriptions to blob storage."""
import structlog
from cloudevents.http import CloudEvent

from .base import Transformation
from ..adapters.base import BlobStore
from ..event_models import ArchiveRequest, TagResponse
from ..metrics import Metrics

log = structlog.get_logger()


def blob_key(event: CloudEvent) -> str:
    return f"{event['source']}.txt"


class ArchivalTagger(Transformation[ArchiveRequest]):
    """Stores the description keyed by event source and passes the tag through."""

    name = "archive"
    request_model = ArchiveRequest
    source_prefix = "transformations.conditionalization"

    def __init__(self, store: BlobStore, namespace: str = "", metrics: Metrics | None = None):
        super().__init__(namespace=namespace, metrics=metrics)
        self.store = store

    async def handle(self, request: ArchiveRequest, event: CloudEvent) -> TagResponse:
        key = blob_key(event)
        # UpstreamError propagates: nothing is emitted for a failed upload
        await self.call_upstream(self.store.name, self.store.put_text, key, request.description)
        return TagResponse(id=request.id, tag=request.tag)

    def health_check(self) -> dict:
        healthy = self.store.health_check()
        return {"status": "ok" if healthy else "error", "adapter": self.store.name}
