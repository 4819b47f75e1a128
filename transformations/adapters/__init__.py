"""Adapters for the external services called by the transformations."""
from .base import BlobStore, SentimentClassifier
from .memory import InMemoryBlobStore, StaticClassifier

__all__ = [
    "BlobStore",
    "SentimentClassifier",
    "InMemoryBlobStore",
    "StaticClassifier",
]
