"""
FastAPI REST routes.

Expose the runtime config the server would inject, the config currently
embedded in the frontend build, and a way to re-run the injection.
"""

from fastapi import APIRouter, HTTPException, Request

from api.models import EmbeddedConfigResponse, FrontConfigResponse
from front_config.env import RuntimeConfig
from front_config.injector import (
    InjectionResult,
    generate_front_config,
    read_embedded_config,
)

router = APIRouter(prefix="/api")

# ── Front config routes ───────────────────────────────────────────────────


@router.get("/front-config", response_model=FrontConfigResponse)
def front_config(request: Request):
    """Return the config built from the current environment."""
    env_file = request.app.state.env_file
    return {
        "env": RuntimeConfig.from_env().to_env_dict(),
        "env_file": str(env_file) if env_file else None,
    }


@router.get("/front-config/embedded", response_model=EmbeddedConfigResponse)
def front_config_embedded(request: Request):
    """Return the config currently embedded in the frontend build."""
    index_path = request.app.state.index_path
    try:
        content = index_path.read_text(encoding="utf-8")
    except (OSError, UnicodeError):
        raise HTTPException(status_code=404, detail="Frontend build not found")

    env = read_embedded_config(content)
    if env is None:
        raise HTTPException(status_code=404, detail="Config block not found")
    return {"index_path": str(index_path), "env": env}


@router.get("/front-config/last-sync", response_model=InjectionResult)
def front_config_last_sync(request: Request):
    """Return the result of the most recent injection."""
    result = request.app.state.injection_result
    if result is None:
        raise HTTPException(status_code=404, detail="No injection has run yet")
    return result


@router.post("/front-config/sync", response_model=InjectionResult)
def front_config_sync(request: Request):
    """Re-run the injection against the frontend build."""
    state = request.app.state
    result = generate_front_config(
        RuntimeConfig.from_env(),
        index_path=state.index_path,
        metadata_marker=state.metadata_marker,
    )
    state.injection_result = result
    return result
