"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running and
that the data directory is usable.
"""

from fastapi import APIRouter, Request

from angletrack import __version__

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and storage reachability."""
    checks = {"server": "ok", "version": __version__}

    data_dir = request.app.state.settings.data_dir
    checks["storage"] = "ok" if not data_dir.exists() or data_dir.is_dir() else "error: not a directory"

    status = "healthy" if all(
        v == "ok" for k, v in checks.items() if k != "version"
    ) else "degraded"

    return {"status": status, **checks}
