"""Insert and delete endpoints for cells and rows."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from server.grid_processor import (
    process_delete_cell,
    process_delete_row,
    process_insert_cell,
    process_insert_row,
)
from server.models import DeleteResponse, ErrorResponse, InsertResponse, NodeRequest, WeightedNodeRequest

router = APIRouter()

INSERT_RESPONSES = {
    200: {"model": InsertResponse, "description": "Node created"},
    403: {"model": ErrorResponse, "description": "Path outside the content root"},
    404: {"model": ErrorResponse, "description": "Parent directory or node not found"},
    409: {"model": ErrorResponse, "description": "Renumbering could not be planned; nothing changed"},
    500: {"model": ErrorResponse, "description": "Renumbering interrupted; inspect the sibling group"},
}

DELETE_RESPONSES = {**INSERT_RESPONSES, 200: {"model": DeleteResponse, "description": "Node removed"}}


@router.post("/api/insert-cell", responses=INSERT_RESPONSES)
async def api_insert_cell(request: WeightedNodeRequest) -> JSONResponse:
    """Insert a cell after the cell with ``weight`` and renumber the row.

    **Parameters**

    - **filePath** (`str`): site-relative path of a cell in the target row
    - **weight** (`int`): weight of the cell the new one follows

    **Returns**

    - **JSONResponse**: the new cell's name and path, or an error with the matching status code
    """
    return await process_insert_cell(request.file_path, request.weight)


@router.post("/api/delete-cell", responses=DELETE_RESPONSES)
async def api_delete_cell(request: WeightedNodeRequest) -> JSONResponse:
    """Delete a cell and close the gap in its row.

    **Parameters**

    - **filePath** (`str`): site-relative path of the cell
    - **weight** (`int`): the cell's weight as the editor last saw it
    """
    return await process_delete_cell(request.file_path, request.weight)


@router.post("/api/insert-row", responses=INSERT_RESPONSES)
async def api_insert_row(request: WeightedNodeRequest) -> JSONResponse:
    """Insert a row with default cells after the row with ``weight``."""
    return await process_insert_row(request.file_path, request.weight)


@router.post("/api/delete-row", responses=DELETE_RESPONSES)
async def api_delete_row(request: NodeRequest) -> JSONResponse:
    """Delete a row with all of its cells and close the gap in its tab."""
    return await process_delete_row(request.file_path)
