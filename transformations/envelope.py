"""CloudEvents envelope decoding and encoding over HTTP."""
from datetime import datetime, timezone
from typing import Any, Mapping, TypeVar

import structlog
from cloudevents.conversion import to_binary
from cloudevents.exceptions import GenericException
from cloudevents.http import CloudEvent, from_http
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import DecodeError, EncodeError
from .event_models import EVENT_SUBJECT

log = structlog.get_logger()

RequestT = TypeVar("RequestT", bound=BaseModel)


def decode_event(headers: Mapping[str, str], body: bytes) -> CloudEvent:
    """Parse a binary or structured mode CloudEvent from an HTTP request."""
    try:
        return from_http(dict(headers), body)
    except GenericException as exc:
        raise DecodeError(f"failed to read cloudevent: {exc}", cause=exc) from exc


def decode_payload(model: type[RequestT], event: CloudEvent) -> RequestT:
    """Validate the event's data into ``model``."""
    data: Any = event.data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        log.warning(
            "event.decode_failed",
            source=event["source"],
            type=event["type"],
            errors=exc.error_count(),
        )
        raise DecodeError(f"failed to convert data: {exc}", cause=exc) from exc


def build_event(event_type: str, source: str, response: BaseModel) -> CloudEvent:
    """Wrap a response model in a new outbound CloudEvent."""
    try:
        payload = response.model_dump(mode="json")
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise EncodeError(f"failed to set response data: {exc}", cause=exc) from exc

    attributes = {
        "type": event_type,
        "source": source,
        "subject": EVENT_SUBJECT,
        "time": datetime.now(timezone.utc).isoformat(),
        "datacontenttype": "application/json",
    }
    return CloudEvent(attributes, payload)


def encode_event(event: CloudEvent) -> tuple[dict[str, str], bytes]:
    """Render an event in binary content mode: ``ce-*`` headers plus a JSON body."""
    try:
        headers, body = to_binary(event)
    except GenericException as exc:
        raise EncodeError(f"failed to encode event: {exc}", cause=exc) from exc
    return dict(headers), body
