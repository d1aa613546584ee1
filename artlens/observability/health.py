"""Aggregated health check across stores and evidence sources."""

from __future__ import annotations

from artlens.connectors.base import ServiceConnector


async def aggregate_health(connectors: dict[str, ServiceConnector], sources: dict[str, bool] | None = None) -> dict:
    """``sources`` maps each evidence source to whether it has credentials."""
    results = {}
    all_healthy = True
    for name, connector in connectors.items():
        try:
            health = await connector.health_check()
        except Exception as e:
            health = {"status": "unhealthy", "error": str(e)}
        results[name] = health
        if health.get("status") not in ("healthy", "connected", "disabled"):
            all_healthy = False
    sources = sources or {}
    if sources and not any(sources.values()):
        all_healthy = False
    return {
        "status": "healthy" if all_healthy else "degraded",
        "connectors": results,
        "sources": {name: "configured" if ok else "missing credentials" for name, ok in sources.items()},
    }
