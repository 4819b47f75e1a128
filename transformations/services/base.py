"""Shared shape of a transformation: decode, call one service, build the reply."""
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

import structlog
from cloudevents.http import CloudEvent
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from ..envelope import build_event, decode_payload
from ..errors import UpstreamError
from ..event_models import TAG_CREATE_EVENT_TYPE, TagResponse
from ..metrics import Metrics

log = structlog.get_logger()

RequestT = TypeVar("RequestT", bound=BaseModel)


class Transformation(ABC, Generic[RequestT]):
    """
    One event in, one event out.

    Subclasses declare the request model and source prefix and implement
    :meth:`handle`. Upstream SDK calls are blocking, so they go through
    :meth:`call_upstream`, which runs them in a worker thread.
    """

    name: str = "transformation"
    request_model: type[BaseModel]
    source_prefix: str

    def __init__(self, namespace: str = "", metrics: Metrics | None = None):
        self.namespace = namespace
        self.metrics = metrics

    @property
    def source(self) -> str:
        if self.namespace:
            return f"{self.source_prefix}.{self.namespace}"
        return self.source_prefix

    def decode(self, event: CloudEvent) -> RequestT:
        return decode_payload(self.request_model, event)

    @abstractmethod
    async def handle(self, request: RequestT, event: CloudEvent) -> TagResponse:
        """Produce the response for a decoded request."""

    def event_type(self, response: TagResponse) -> str:
        return TAG_CREATE_EVENT_TYPE

    def build(self, response: TagResponse) -> CloudEvent:
        return build_event(self.event_type(response), self.source, response)

    async def transform(self, event: CloudEvent) -> CloudEvent:
        """Decode ``event``, handle it and return the outbound event."""
        request = self.decode(event)
        log.info(
            "event.received",
            source=event["source"],
            type=event["type"],
            id=event["id"],
            transformation=self.name,
        )
        response = await self.handle(request, event)
        return self.build(response)

    async def call_upstream(self, adapter: str, fn: Callable[..., Any], *args: Any) -> Any:
        start_time = time.time()
        try:
            return await run_in_threadpool(fn, *args)
        except UpstreamError:
            if self.metrics:
                self.metrics.record_upstream_error(adapter)
            raise
        finally:
            if self.metrics:
                self.metrics.upstream_duration.labels(adapter=adapter).observe(time.time() - start_time)

    def health_check(self) -> dict[str, Any]:
        return {"status": "ok"}
