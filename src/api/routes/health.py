"""Health check endpoint.

Reports the database connection and the state of every registered
authentication plugin. A plugin in error degrades the service without
making it unavailable; local accounts keep working.
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_plugin_registry
from adapter.mongodb.connection import get_mongodb_client
from domain.model.plugin import PluginState
from services.plugin_registry import PluginRegistry

router = APIRouter(prefix="/health", tags=["health"])


def _mongodb_status() -> dict:
    if get_mongodb_client() is None:
        return {"status": "unhealthy", "message": "Connection failed or not configured"}
    return {"status": "healthy", "message": "Connection successful"}


@router.get("")
def health(registry: PluginRegistry = Depends(get_plugin_registry)):
    """Health check endpoint with dependency status."""
    mongodb = _mongodb_status()
    plugins = [{"name": d.name, "state": d.state.value} for d in registry.descriptors()]

    if mongodb["status"] != "healthy":
        overall, status_code = "degraded", status.HTTP_503_SERVICE_UNAVAILABLE
    elif any(p["state"] == PluginState.IN_ERROR.value for p in plugins):
        overall, status_code = "degraded", status.HTTP_200_OK
    else:
        overall, status_code = "healthy", status.HTTP_200_OK

    return JSONResponse(
        status_code=status_code,
        content={
            "status": overall,
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "services": {"mongodb": mongodb},
            "plugins": plugins,
        },
    )
