"""Error kinds raised while handling a single event."""


class TransformationError(Exception):
    """Base error for a failed event; carries the HTTP status to answer with."""

    status_code = 500
    error = "TransformationError"

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class DecodeError(TransformationError):
    """Inbound envelope or payload does not match the expected request."""

    status_code = 400
    error = "DecodeError"


class UpstreamError(TransformationError):
    """An external call (classifier, blob store, sink) failed."""

    status_code = 502
    error = "UpstreamError"


class EncodeError(TransformationError):
    """The outbound event could not be serialized."""

    status_code = 500
    error = "EncodeError"


class ConfigurationError(Exception):
    """Fatal startup problem; the process exits."""
