"""Save-cell endpoint."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from server.grid_processor import process_save_cell
from server.models import ErrorResponse, SaveCellRequest, SaveCellResponse

router = APIRouter()


@router.post(
    "/api/save-cell",
    responses={
        200: {"model": SaveCellResponse, "description": "File saved"},
        400: {"model": ErrorResponse, "description": "Missing fields, or the file has no front matter"},
        403: {"model": ErrorResponse, "description": "Path outside the content root"},
        404: {"model": ErrorResponse, "description": "File not found"},
    },
)
async def api_save_cell(request: SaveCellRequest) -> JSONResponse:
    """Replace a cell file's body with editor content, keeping its front matter.

    **Parameters**

    - **filePath** (`str`): site-relative path of the cell's ``_index.md``
    - **content** (`str`): Markdown to wrap in the cell shortcode
    """
    return await process_save_cell(request.file_path, request.content)
