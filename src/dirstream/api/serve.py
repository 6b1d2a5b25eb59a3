"""API server for ``dirstream serve``.

Builds the FastAPI application (CORS plus the versioned routers) and runs it
under uvicorn.
"""

from __future__ import annotations

import logging

from dirstream.config import Settings, get_settings

logger = logging.getLogger(__name__)

_BUILTIN_ORIGINS = [
    "http://localhost:4200",
    "http://127.0.0.1:4200",
]


def create_api_app(settings: Settings | None = None):
    """Build the FastAPI application."""
    from fastapi import FastAPI
    from fastapi.middleware.cors import CORSMiddleware

    from dirstream import __version__
    from dirstream.api.v1 import mount_v1_routers

    settings = settings or get_settings()

    app = FastAPI(
        title="dirstream API",
        description="Streams directory listings under a fixed root as NDJSON.",
        version=__version__,
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )

    # --- CORS -----------------------------------------------------------
    origins = sorted(set(_BUILTIN_ORIGINS + settings.api_cors_allowed_origins))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # --- Routers --------------------------------------------------------
    mount_v1_routers(app)

    return app


def run_api_server(
    host: str = "127.0.0.1",
    port: int = 4000,
    dev: bool = False,
) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    root = settings.root_dir

    logger.info("API running on http://%s:%d (docs at /api/v1/docs)", host, port)
    logger.info("Root directory: %s", root)
    if not root.is_dir():
        logger.warning("Root directory %s does not exist or is not a directory", root)

    if dev:
        import pathlib

        src_dir = str(pathlib.Path(__file__).resolve().parent.parent)
        uvicorn.run(
            "dirstream.api.serve:create_api_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            reload_dirs=[src_dir],
            reload_includes=["*.py"],
            log_level="debug",
        )
    else:
        app = create_api_app(settings)
        uvicorn.run(app, host=host, port=port, log_config=None)
