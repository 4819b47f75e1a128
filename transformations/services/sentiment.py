"""Sentiment tagging of newly created tickets."""
import re

import structlog
from cloudevents.http import CloudEvent

from .base import Transformation
from ..adapters.base import SentimentClassifier
from ..errors import UpstreamError
from ..event_models import (
    NEGATIVE_SENTIMENT,
    TAG_CREATE_EVENT_TYPE,
    TAG_NEGATIVE_EVENT_TYPE,
    TICKET_CREATED_EVENT_TYPE,
    SentimentRequest,
    SentimentResponse,
    TagResponse,
)
from ..metrics import Metrics

log = structlog.get_logger()

TICKET_ID_RE = re.compile(r"[+-]?[0-9]+")


def parse_ticket_id(raw: int | str) -> int:
    """Ticket ids arrive as strings; unparseable ones become 0."""
    if isinstance(raw, int):
        return raw
    if not TICKET_ID_RE.fullmatch(raw):
        log.error("ticket.invalid_id", raw_id=raw)
        return 0
    return int(raw)


class SentimentTagger(Transformation[SentimentRequest]):
    """Tags a ticket with the sentiment of its description."""

    name = "sentiment"
    request_model = SentimentRequest
    source_prefix = "io.triggermesh.transformations.zendesk-sentiment-tag"

    def __init__(self, classifier: SentimentClassifier, namespace: str = "", metrics: Metrics | None = None):
        super().__init__(namespace=namespace, metrics=metrics)
        self.classifier = classifier

    async def handle(self, request: SentimentRequest, event: CloudEvent) -> SentimentResponse:
        if event["type"] != TICKET_CREATED_EVENT_TYPE:
            log.debug("event.unexpected_type", type=event["type"], expected=TICKET_CREATED_EVENT_TYPE)

        ticket_id = parse_ticket_id(request.id)
        try:
            sentiment = await self.call_upstream(self.classifier.name, self.classifier.classify, request.description)
        except UpstreamError as exc:
            # Fails open: a zeroed response is still emitted.
            log.error("sentiment.classify_failed", ticket_id=ticket_id, error=exc.message)
            return SentimentResponse()

        if sentiment == NEGATIVE_SENTIMENT:
            log.info("sentiment.negative", ticket_id=ticket_id)
        return SentimentResponse(id=ticket_id, tag=sentiment, description=request.description)

    def event_type(self, response: TagResponse) -> str:
        if response.tag == NEGATIVE_SENTIMENT:
            return TAG_NEGATIVE_EVENT_TYPE
        return TAG_CREATE_EVENT_TYPE

    def health_check(self) -> dict:
        healthy = self.classifier.health_check()
        return {"status": "ok" if healthy else "error", "adapter": self.classifier.name}
