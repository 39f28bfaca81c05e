"""Run grid operations for the API and turn their outcome into responses."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from gridedit.cells import save_cell_content
from gridedit.config import GRIDEDIT_SITE_ROOT
from gridedit.engine import delete_cell, delete_row, insert_cell, insert_row
from gridedit.exceptions import (
    GridEditError,
    InvalidPathError,
    MalformedFrontMatterError,
    NodeNotFoundError,
    PartialRenumberError,
    RenumberConflictError,
)
from gridedit.paths import index_file_for, node_dir_for, resolve_content_path
from gridedit.schemas import DeleteResult, InsertResult, SaveResult
from gridedit.utils.logging_config import get_logger
from server.models import DeleteResponse, ErrorResponse, InsertResponse, SaveCellResponse

# Initialize logger for this module
logger = get_logger(__name__)

_ERROR_STATUS: tuple[tuple[type[GridEditError], int], ...] = (
    (InvalidPathError, status.HTTP_403_FORBIDDEN),
    (NodeNotFoundError, status.HTTP_404_NOT_FOUND),
    (MalformedFrontMatterError, 422),
    (RenumberConflictError, status.HTTP_409_CONFLICT),
    (PartialRenumberError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)

# The editor scripts expect 400 for a cell file without front matter.
_SAVE_CELL_STATUS: dict[type[GridEditError], int] = {MalformedFrontMatterError: status.HTTP_400_BAD_REQUEST}


def status_for(exc: Exception, overrides: dict[type[GridEditError], int] | None = None) -> int:
    """Map an engine exception to an HTTP status code, checking ``overrides`` first."""
    for error_type, code in (*(overrides or {}).items(), *_ERROR_STATUS):
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _site_relative(path: Path, site_root: Path) -> str:
    try:
        return path.relative_to(site_root).as_posix()
    except ValueError:
        return path.as_posix()


async def perform_operation(
    operation: str,
    file_path: str,
    action: Callable[[Path], InsertResult | DeleteResult | SaveResult],
    *,
    site_root: Path | None = None,
    error_status: dict[type[GridEditError], int] | None = None,
) -> JSONResponse:
    """Validate ``file_path`` and run ``action`` on it in a worker thread.

    Parameters
    ----------
    operation : str
        Operation name used in log records.
    file_path : str
        Site-relative path from the request.
    action : Callable[[Path], InsertResult | DeleteResult | SaveResult]
        Engine call receiving the resolved absolute path.
    site_root : Path | None
        Directory holding the content tree. Defaults to ``GRIDEDIT_SITE_ROOT``.
    error_status : dict[type[GridEditError], int] | None
        Status codes that replace the defaults of ``status_for`` for this operation.

    Returns
    -------
    JSONResponse
        The success model for the operation, or ``{"error": ...}`` with the
        status code matching the failure.

    """
    root = (site_root or GRIDEDIT_SITE_ROOT).resolve()
    try:
        target = resolve_content_path(file_path, site_root=root)
        result = await asyncio.to_thread(action, target)
    except GridEditError as exc:
        _print_error(operation, file_path, exc)
        return _error_response(status_for(exc, error_status), str(exc))
    except OSError as exc:
        _print_error(operation, file_path, exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Failed to {operation}: {exc}")

    response = _to_response(result, root)
    _print_success(operation, file_path, response)
    return JSONResponse(status_code=status.HTTP_200_OK, content=response.model_dump(mode="json"))


def _to_response(result: InsertResult | DeleteResult | SaveResult, root: Path) -> BaseModel:
    if isinstance(result, InsertResult):
        return InsertResponse(
            name=result.name,
            path=_site_relative(result.path, root),
            position=result.position,
            weight=result.weight,
            title=result.title,
            shifted=result.shifted,
            children=result.children,
        )
    if isinstance(result, DeleteResult):
        return DeleteResponse(
            success=result.success,
            removed=_site_relative(result.removed, root),
            position=result.position,
            shifted=result.shifted,
        )
    return SaveCellResponse(success=result.success, message=result.message)


def _error_response(code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=code, content=ErrorResponse(error=message).model_dump())


async def process_insert_cell(file_path: str, weight: int, *, site_root: Path | None = None) -> JSONResponse:
    return await perform_operation(
        "insert cell",
        file_path,
        lambda target: insert_cell(node_dir_for(target), weight),
        site_root=site_root,
    )


async def process_delete_cell(file_path: str, weight: int, *, site_root: Path | None = None) -> JSONResponse:
    return await perform_operation(
        "delete cell",
        file_path,
        lambda target: delete_cell(node_dir_for(target), weight),
        site_root=site_root,
    )


async def process_insert_row(file_path: str, weight: int, *, site_root: Path | None = None) -> JSONResponse:
    return await perform_operation(
        "insert row",
        file_path,
        lambda target: insert_row(node_dir_for(target), weight),
        site_root=site_root,
    )


async def process_delete_row(file_path: str, *, site_root: Path | None = None) -> JSONResponse:
    return await perform_operation(
        "delete row",
        file_path,
        lambda target: delete_row(node_dir_for(target)),
        site_root=site_root,
    )


async def process_save_cell(file_path: str, content: str, *, site_root: Path | None = None) -> JSONResponse:
    return await perform_operation(
        "save cell",
        file_path,
        lambda target: save_cell_content(index_file_for(target), content),
        site_root=site_root,
        error_status=_SAVE_CELL_STATUS,
    )


def _print_error(operation: str, file_path: str, exc: Exception) -> None:
    """Log a failed operation with enough detail to inspect the sibling group.

    Parameters
    ----------
    operation : str
        Operation name.
    file_path : str
        Path from the request.
    exc : Exception
        The exception raised by the engine.

    """
    extra: dict[str, object] = {"operation": operation, "file_path": file_path, "error": str(exc)}
    if isinstance(exc, PartialRenumberError):
        extra["committed"] = exc.committed
        extra["pending"] = exc.pending
    level = logger.warning if isinstance(exc, (InvalidPathError, NodeNotFoundError)) else logger.error
    level("Grid operation failed", extra=extra)


def _print_success(operation: str, file_path: str, response: BaseModel) -> None:
    """Log a completed operation.

    Parameters
    ----------
    operation : str
        Operation name.
    file_path : str
        Path from the request.
    response : BaseModel
        The response about to be returned.

    """
    shifted = getattr(response, "shifted", None)
    logger.info(
        "Grid operation completed successfully",
        extra={
            "operation": operation,
            "file_path": file_path,
            "shifted": len(shifted) if shifted is not None else 0,
        },
    )
