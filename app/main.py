"""FastAPI application for the home remodeling assistant."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.routers import chat, projects
from config.settings import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Home Remodeling Assistant")

app.include_router(projects.router)
app.include_router(chat.router)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Report validation failures from the execution layer as 400s."""
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(FileNotFoundError)
async def not_found_handler(request: Request, exc: FileNotFoundError):
    """Missing or foreign project records are 404s."""
    return JSONResponse(status_code=404, content={"detail": "Project not found"})


@app.exception_handler(OSError)
async def storage_error_handler(request: Request, exc: OSError):
    logger.error("Storage error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
