"""Shared fixtures: apps wired with in-memory adapters."""
import pytest

from transformations.adapters.memory import InMemoryBlobStore, StaticClassifier
from transformations.config import Settings
from transformations.dispatch import ReplyDispatcher
from transformations.event_models import TICKET_CREATED_EVENT_TYPE
from transformations.main import create_app
from transformations.services import ArchivalTagger, SentimentTagger


@pytest.fixture
def settings():
    return Settings(_env_file=None, ADAPTER="memory", K_SINK=None, NAMESPACE="")


@pytest.fixture
def classifier():
    return StaticClassifier(label="NEGATIVE")


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def sentiment_app(settings, classifier):
    return create_app(
        settings.model_copy(update={"TRANSFORMATION": "sentiment"}),
        transformation=SentimentTagger(classifier),
        dispatcher=ReplyDispatcher(),
    )


@pytest.fixture
def archive_app(settings, blob_store):
    return create_app(
        settings.model_copy(update={"TRANSFORMATION": "archive"}),
        transformation=ArchivalTagger(blob_store),
        dispatcher=ReplyDispatcher(),
    )


@pytest.fixture
def ce_headers():
    """Build binary-mode CloudEvents request headers."""

    def _make(source="zendesk.example.com", type=TICKET_CREATED_EVENT_TYPE, id="evt-1"):
        return {
            "ce-specversion": "1.0",
            "ce-id": id,
            "ce-source": source,
            "ce-type": type,
            "ce-time": "2026-10-19T12:00:00Z",
            "content-type": "application/json",
        }

    return _make
