"""
Zendesk tag transformations - CloudEvents receivers for the event mesh.

One process runs one transformation (TRANSFORMATION setting):
- sentiment: tags new tickets with their AWS Comprehend sentiment
- archive: stores ticket descriptions in S3 and passes their tag on

Outbound events are replied to the caller, or forwarded to K_SINK when set.
"""
import sys
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from pydantic import ValidationError

from .api.errors import register_error_handlers
from .api.router import router
from .config import Settings, get_settings
from .dispatch import Dispatcher, select_dispatcher
from .errors import ConfigurationError
from .health import HealthChecker
from .logging import setup_logging
from .metrics import Metrics
from .middleware import CorrelationIdMiddleware, MetricsMiddleware
from .services import Transformation, create_transformation

VERSION = "0.1.0"

SERVICE_NAMES = {
    "sentiment": "zendesk-sentiment-tag",
    "archive": "zendesk-conditionalization",
}

log = structlog.get_logger()


def create_app(
    settings: Settings | None = None,
    transformation: Transformation | None = None,
    dispatcher: Dispatcher | None = None,
    metrics: Metrics | None = None,
) -> FastAPI:
    """
    Assemble the app; collaborators not passed in are built from settings.

    Raises:
        ConfigurationError: the transformation cannot be built
    """
    settings = settings or get_settings()
    service_name = SERVICE_NAMES[settings.TRANSFORMATION]
    metrics = metrics or Metrics(service_name=service_name, version=VERSION)

    if transformation is None:
        transformation = create_transformation(settings, metrics)
    elif transformation.metrics is None:
        transformation.metrics = metrics

    if dispatcher is None:
        dispatcher = select_dispatcher(settings)

    health_checker = HealthChecker(service_name, VERSION, transformation, dispatcher)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info(
            "service_starting",
            version=VERSION,
            env=settings.ENV,
            transformation=transformation.name,
            mode=dispatcher.mode.value,
            source=transformation.source,
        )
        yield
        log.info("service_stopping")
        await dispatcher.aclose()
        metrics.app_up.labels(service=service_name, version=VERSION).set(0)

    app = FastAPI(
        title="Zendesk Tag Transformations",
        version=VERSION,
        description="CloudEvents transformations tagging Zendesk tickets",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.transformation = transformation
    app.state.dispatcher = dispatcher
    app.state.metrics = metrics

    register_error_handlers(app)

    # Added last runs first: correlation id is bound before metrics logs
    app.add_middleware(MetricsMiddleware, metrics=metrics)
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(router)
    app.mount("/metrics", make_asgi_app(registry=metrics.registry))

    @app.get("/health")
    async def health():
        """Liveness probe."""
        return health_checker.liveness()

    @app.get("/health/ready")
    async def health_ready():
        """
        Readiness probe.

        Returns:
            200: Service is ready to handle events
            503: Upstream adapter is not usable
        """
        result = await health_checker.readiness()
        status_code = 200 if result["status"] == "ready" else 503
        return JSONResponse(result, status_code=status_code)

    return app


def run() -> None:
    """Console entry point: configure, build, and serve until stopped."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        setup_logging()
        log.critical("config.invalid", error=str(exc))
        sys.exit(1)

    setup_logging(json_output=settings.LOG_JSON, service_name=SERVICE_NAMES[settings.TRANSFORMATION])

    try:
        app = create_app(settings)
    except ConfigurationError as exc:
        log.critical("startup.failed", error=str(exc))
        sys.exit(1)

    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_config=None)


if __name__ == "__main__":
    run()
