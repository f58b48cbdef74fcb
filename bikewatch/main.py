from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bikewatch.adapters.api.controllers.map import router as map_router
from bikewatch.adapters.api.dependencies import build_station_map_service
from bikewatch.domain.exceptions import MapNotReadyError


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    service = build_station_map_service()
    # A failed load is logged by the service; endpoints then answer 503.
    await service.start()
    app.state.station_map = service
    yield


app = FastAPI(title="Bikewatch", lifespan=lifespan)
app.include_router(map_router)


@app.exception_handler(MapNotReadyError)
async def map_not_ready_handler(
    request: Request, exc: MapNotReadyError
) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so the map page can display them."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    reveal = (os.getenv("BIKEWATCH_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }

    if reveal or isinstance(exc, (FileNotFoundError, RuntimeError, ValueError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
