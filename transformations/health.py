"""
Health checks for liveness and readiness probes.
"""
from datetime import datetime, timezone
from typing import Dict, Any

from starlette.concurrency import run_in_threadpool

from .dispatch import Dispatcher, ForwardDispatcher
from .services.base import Transformation


class HealthChecker:
    """
    Health checker for a transformation service.

    Provides:
    - Liveness checks (is the service running?)
    - Readiness checks (are the upstream adapter and sink usable?)
    """

    def __init__(self, service_name: str, version: str, transformation: Transformation, dispatcher: Dispatcher):
        self.service_name = service_name
        self.version = version
        self.transformation = transformation
        self.dispatcher = dispatcher

    def _base(self) -> Dict[str, Any]:
        return {
            "service": self.service_name,
            "version": self.version,
            "transformation": self.transformation.name,
            "mode": self.dispatcher.mode.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def liveness(self) -> Dict[str, Any]:
        return {"status": "ok", **self._base()}

    async def readiness(self) -> Dict[str, Any]:
        """
        Readiness check.

        Checks:
        - Upstream adapter health (may hit the network for AWS adapters)
        - Sink configured when forwarding

        Returns:
            dict: Readiness status with detailed check results
        """
        checks = {}
        overall_status = "ready"

        adapter_check = await run_in_threadpool(self.transformation.health_check)
        checks["adapter"] = adapter_check
        if adapter_check["status"] == "error":
            overall_status = "not_ready"

        if isinstance(self.dispatcher, ForwardDispatcher):
            checks["sink"] = {"status": "ok", "target": self.dispatcher.sink}
        else:
            checks["sink"] = {"status": "skipped", "message": "reply mode"}

        return {"status": overall_status, **self._base(), "checks": checks}
