"""
Delivery of outbound events.

The mode is chosen once at startup: with ``K_SINK`` set, events are
forwarded to the sink; otherwise they are returned as the HTTP reply.
"""
from abc import ABC, abstractmethod
from enum import Enum

import httpx
import structlog
from cloudevents.http import CloudEvent
from starlette.responses import Response

from .config import Settings
from .envelope import encode_event
from .errors import UpstreamError

log = structlog.get_logger()


class DispatchMode(str, Enum):
    REPLY = "reply"
    FORWARD = "forward"


class Dispatcher(ABC):
    mode: DispatchMode

    @abstractmethod
    async def dispatch(self, event: CloudEvent) -> Response:
        """Deliver ``event`` and return the response for the inbound call."""

    async def aclose(self) -> None:
        pass


class ReplyDispatcher(Dispatcher):
    """Returns the event to the caller in binary content mode."""

    mode = DispatchMode.REPLY

    async def dispatch(self, event: CloudEvent) -> Response:
        headers, body = encode_event(event)
        log.info("event.replying", type=event["type"], id=event["id"])
        return Response(content=body, status_code=200, headers=headers)


class ForwardDispatcher(Dispatcher):
    """POSTs the event to the sink and acknowledges the inbound call with 202."""

    mode = DispatchMode.FORWARD

    def __init__(self, sink: str, client: httpx.AsyncClient | None = None, timeout: float = 10.0):
        self.sink = sink
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def dispatch(self, event: CloudEvent) -> Response:
        headers, body = encode_event(event)
        try:
            resp = await self._client.post(self.sink, headers=headers, content=body)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            log.error("sink.send_failed", sink=self.sink, type=event["type"], error=str(exc))
            raise UpstreamError(f"failed to send event to {self.sink}: {exc}", cause=exc) from exc

        log.info("sink.sent", sink=self.sink, type=event["type"], id=event["id"], status=resp.status_code)
        return Response(status_code=202)

    async def aclose(self) -> None:
        await self._client.aclose()


def select_dispatcher(settings: Settings, client: httpx.AsyncClient | None = None) -> Dispatcher:
    if settings.K_SINK is None:
        log.info("dispatch.selected", mode=DispatchMode.REPLY.value)
        return ReplyDispatcher()

    sink = str(settings.K_SINK)
    log.info("dispatch.selected", mode=DispatchMode.FORWARD.value, sink=sink)
    return ForwardDispatcher(sink, client=client, timeout=settings.SINK_TIMEOUT)
