"""FastAPI application factory for dockcheck."""

from __future__ import annotations

from fastapi import FastAPI

from dockcheck.api.routes import status


def create_app() -> FastAPI:
    app = FastAPI(title="dockcheck", version="0.1.0", description="Status of Docker apps on remote servers")

    @app.get("/health", tags=["meta"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(status.router, prefix="/api")
    return app


app = create_app()
