"""Tests for decoding inbound CloudEvents into requests."""
from typing import Any
from unittest.mock import patch

import pytest
from cloudevents.exceptions import DataMarshallerError
from cloudevents.http import CloudEvent

from transformations.envelope import build_event, decode_event, decode_payload, encode_event
from transformations.errors import DecodeError, EncodeError
from transformations.event_models import (
    EVENT_SUBJECT,
    TAG_CREATE_EVENT_TYPE,
    ArchiveRequest,
    SentimentRequest,
    TagResponse,
)


def _event(data, source="zendesk", type="com.zendesk.ticket.created"):
    return CloudEvent({"source": source, "type": type}, data)


def test_sentiment_request_with_string_id():
    req = decode_payload(SentimentRequest, _event({"id": "42", "description": "This is terrible"}))
    assert req.id == "42"
    assert req.description == "This is terrible"


def test_sentiment_request_with_integer_id():
    req = decode_payload(SentimentRequest, _event({"id": 42, "description": "fine"}))
    assert req.id == 42


def test_extra_fields_are_ignored():
    req = decode_payload(ArchiveRequest, _event({"id": 99, "description": "hello", "tag": "x", "via": "web"}))
    assert req == ArchiveRequest(id=99, description="hello", tag="x")


@pytest.mark.parametrize(
    "data",
    [
        None,
        [1, 2, 3],
        "plain text",
        {"id": "42"},
        {"description": "no id"},
        {"id": "42", "description": 17},
        {"id": True, "description": "bool id"},
        {"id": 42.0, "description": "float id"},
        {"id": None, "description": "null id"},
    ],
)
def test_malformed_sentiment_payloads(data):
    with pytest.raises(DecodeError) as exc_info:
        decode_payload(SentimentRequest, _event(data))
    assert exc_info.value.status_code == 400


def test_archive_request_requires_tag():
    with pytest.raises(DecodeError):
        decode_payload(ArchiveRequest, _event({"id": 99, "description": "hello"}))


@pytest.mark.parametrize("bad_id", ["ninety-nine", "99", 99.0, True])
def test_archive_request_rejects_non_integer_id(bad_id):
    with pytest.raises(DecodeError):
        decode_payload(ArchiveRequest, _event({"id": bad_id, "description": "hello", "tag": "x"}))


def test_decode_event_binary_mode():
    headers = {
        "ce-specversion": "1.0",
        "ce-id": "abc",
        "ce-source": "order-99",
        "ce-type": "com.zendesk.ticket.created",
        "content-type": "application/json",
    }
    event = decode_event(headers, b'{"id": 99, "description": "hello", "tag": "x"}')
    assert event["source"] == "order-99"
    assert event.data == {"id": 99, "description": "hello", "tag": "x"}


def test_decode_event_without_specversion():
    with pytest.raises(DecodeError):
        decode_event({"content-type": "application/json"}, b'{"id": 1}')


def test_build_event_stamps_attributes():
    event = build_event(TAG_CREATE_EVENT_TYPE, "transformations.conditionalization", TagResponse(id=99, tag="x"))
    assert event["type"] == TAG_CREATE_EVENT_TYPE
    assert event["source"] == "transformations.conditionalization"
    assert event["subject"] == EVENT_SUBJECT
    assert event["datacontenttype"] == "application/json"
    assert event["time"]
    assert event["id"]
    assert event.data == {"id": 99, "tag": "x"}


class _Opaque:
    pass


class _UnserializableResponse(TagResponse):
    extra: Any = None


def test_build_event_unserializable_response():
    with pytest.raises(EncodeError) as exc_info:
        build_event(TAG_CREATE_EVENT_TYPE, "transformations.conditionalization", _UnserializableResponse(extra=_Opaque()))
    assert exc_info.value.status_code == 500


def test_encode_event_marshaller_failure():
    event = build_event(TAG_CREATE_EVENT_TYPE, "transformations.conditionalization", TagResponse(id=1, tag="x"))

    with patch("transformations.envelope.to_binary", side_effect=DataMarshallerError("cannot marshal")):
        with pytest.raises(EncodeError) as exc_info:
            encode_event(event)
    assert exc_info.value.status_code == 500
