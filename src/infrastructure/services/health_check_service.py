"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urljoin

import httpx

from src.domain.entities.health import DependencyStatus, ServiceStatus, SystemHealth
from src.domain.ports.health_check import IHealthCheckService
from src.infrastructure.database.mongo_database import MongoDatabase

HTTP_PROBE_PATHS: Sequence[str] = ("/health", "/")

_STATUS_SEVERITY = {
    ServiceStatus.UP: 0,
    ServiceStatus.UNKNOWN: 1,
    ServiceStatus.DEGRADED: 2,
    ServiceStatus.DOWN: 3,
}


class HealthCheckService(IHealthCheckService):
    """Collect health information for MongoDB and the integrated services."""

    def __init__(
        self,
        mongo_database: Optional[MongoDatabase],
        monitoring_service_url: str,
        threshold_service_url: str,
        *,
        http_timeout: float = 5.0,
    ) -> None:
        self._mongo_database = mongo_database
        self._monitoring_service_url = monitoring_service_url
        self._threshold_service_url = threshold_service_url
        self._http_timeout = http_timeout

    async def evaluate(self) -> SystemHealth:
        """Run checks concurrently and aggregate system health."""

        names = ("mongo", "monitoring_service", "threshold_service")
        results = await asyncio.gather(
            self._check_mongo(),
            self._check_http_service(
                name="monitoring_service", base_url=self._monitoring_service_url
            ),
            self._check_http_service(
                name="threshold_service", base_url=self._threshold_service_url
            ),
            return_exceptions=True,
        )

        dependency_statuses: List[DependencyStatus] = []
        for name, result in zip(names, results):
            if isinstance(result, Exception):
                result = DependencyStatus(
                    name=name, status=ServiceStatus.DOWN, message=str(result)
                )
            dependency_statuses.append(result)

        return SystemHealth(
            status=self._aggregate_status(dependency_statuses),
            dependencies=dependency_statuses,
        )

    @staticmethod
    def _aggregate_status(statuses: Iterable[DependencyStatus]) -> ServiceStatus:
        worst = ServiceStatus.UP
        for dependency in statuses:
            if _STATUS_SEVERITY[dependency.status] > _STATUS_SEVERITY[worst]:
                worst = dependency.status
        return worst

    async def _check_mongo(self) -> DependencyStatus:
        if not self._mongo_database:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.UNKNOWN,
                message="Mongo database client not configured.",
            )

        start = perf_counter()
        try:
            await asyncio.to_thread(self._mongo_database.ping)
        except Exception as exc:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.DOWN,
                message=f"MongoDB ping failed: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
            )

        return DependencyStatus(
            name="mongo",
            status=ServiceStatus.UP,
            message="MongoDB ping successful",
            latency_ms=(perf_counter() - start) * 1000,
            details={"database": self._mongo_database.db.name},
        )

    async def _check_http_service(self, *, name: str, base_url: str) -> DependencyStatus:
        if not base_url:
            return DependencyStatus(
                name=name,
                status=ServiceStatus.UNKNOWN,
                message="Service URL not configured.",
            )

        attempts: List[dict] = []
        result: Optional[DependencyStatus] = None
        for path in HTTP_PROBE_PATHS:
            result = await self._probe(name=name, url=self._normalize_url(base_url, path))
            attempts.append({"path": path, "status": result.status.value})
            if result.status != ServiceStatus.DOWN:
                break

        assert result is not None
        result.details["attempts"] = attempts
        return result

    async def _probe(self, *, name: str, url: str) -> DependencyStatus:
        start = perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await client.get(url)
        except httpx.RequestError as exc:
            return DependencyStatus(
                name=name,
                status=ServiceStatus.DOWN,
                message=f"HTTP request failed: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
                details={"url": url},
            )

        status_code = response.status_code
        if status_code >= 500:
            status = ServiceStatus.DOWN
        elif status_code >= 400:
            status = ServiceStatus.DEGRADED
        else:
            status = ServiceStatus.UP

        return DependencyStatus(
            name=name,
            status=status,
            message=f"HTTP {status_code}",
            latency_ms=(perf_counter() - start) * 1000,
            details={"url": url, "status_code": status_code},
        )

    @staticmethod
    def _normalize_url(base_url: str, path: str) -> str:
        base = base_url if base_url.endswith("/") else f"{base_url}/"
        return urljoin(base, path.lstrip("/"))
