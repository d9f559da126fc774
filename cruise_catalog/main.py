import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cruise_catalog.core.errors import NotFound
from cruise_catalog.routers.sailings import router as sailings_router
from cruise_catalog.routers.search import router as search_router
from cruise_catalog.routers.ships import router as ships_router

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

API_PREFIX = "/api/v1/cruise-repository"

app = FastAPI(title="Cruise Catalog API")

# Mount routers
app.include_router(search_router, prefix=API_PREFIX)
app.include_router(sailings_router, prefix=API_PREFIX)
app.include_router(ships_router, prefix=API_PREFIX)

@app.exception_handler(NotFound)
def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})

# Simple health for E2E bring-up
@app.get("/healthz")
def healthz():
    return {"status": "ok"}
