"""
Application entry point – FastAPI server.

On start-up the runtime config is injected into the built frontend.

Serves:
  /api/*   → front config routes
  /*       → Static files from the front build (when present)
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from api.routes import router as api_router
from front_config.env import (
    INDEX_FILE_NAME,
    RuntimeConfig,
    default_front_dir,
    load_env_file,
)
from front_config.injector import DEFAULT_METADATA_MARKER, generate_front_config

logger = logging.getLogger(__name__)


def create_app(
    front_dir: Optional[Path] = None,
    env_dir: Optional[Path] = None,
    metadata_marker: Optional[str] = DEFAULT_METADATA_MARKER,
) -> FastAPI:
    front_dir = Path(front_dir) if front_dir is not None else default_front_dir()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.env_file = load_env_file(base_dir=env_dir)
        app.state.injection_result = generate_front_config(
            RuntimeConfig.from_env(),
            index_path=app.state.index_path,
            metadata_marker=metadata_marker,
        )
        yield

    app = FastAPI(
        title="Twenty Front Config",
        version="1.0.0",
        description="Serves the built frontend with its runtime config injected",
        lifespan=lifespan,
    )
    app.state.index_path = front_dir / INDEX_FILE_NAME
    app.state.metadata_marker = metadata_marker
    app.state.env_file = None
    app.state.injection_result = None

    app.include_router(api_router)

    # Serve the front build at root (SPA fallback)
    if front_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(front_dir), html=True), name="front")
    else:
        logger.info(f"No front build at {front_dir}, serving the API only")

    return app


app = create_app()


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
        ]
    )
    host = os.environ.get("HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", "8080"))
    uvicorn.run("server:app", host=host, port=port)


if __name__ == "__main__":
    main()
