"""FastAPI application for the local grid editor."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gridedit.utils.logging_config import get_logger
from server.models import ErrorResponse, StatusResponse
from server.routers import cells, grid
from server.server_config import CORS_ALLOW_ORIGINS, ENDPOINTS

logger = get_logger(__name__)

app = FastAPI(title="gridedit", description="Local editor API for the content grid")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report missing or malformed request fields as 400 with the usual error body."""
    fields = ", ".join(".".join(str(part) for part in error["loc"][1:]) or "body" for error in exc.errors())
    logger.warning("Rejected request", extra={"url_path": request.url.path, "fields": fields})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=f"Missing or invalid fields: {fields}").model_dump(),
    )


@app.get("/", response_model=StatusResponse)
async def root() -> StatusResponse:
    """Confirm the server is running and list its endpoints."""
    return StatusResponse(endpoints=ENDPOINTS)


app.include_router(grid.router)
app.include_router(cells.router)
