"""Pydantic models for the editor API."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gridedit.schemas import ShiftRecord


class NodeRequest(BaseModel):
    """Request naming one node of the content tree.

    Attributes
    ----------
    file_path : str
        Site-relative path of the node directory or its ``_index.md``.
        Sent as ``filePath`` by the browser scripts.

    """

    model_config = ConfigDict(populate_by_name=True)

    file_path: str = Field(..., alias="filePath", description="Site-relative node path")

    @field_validator("file_path")
    @classmethod
    def validate_file_path(cls, v: str) -> str:
        """Validate that ``file_path`` is not empty."""
        if not v.strip():
            err = "filePath cannot be empty"
            raise ValueError(err)
        return v.strip()


class WeightedNodeRequest(NodeRequest):
    """Request for the insert/delete endpoints that take a reference weight.

    Attributes
    ----------
    weight : int
        Weight of the reference node as the browser last saw it.

    """

    weight: int = Field(..., description="Reference weight")


class SaveCellRequest(NodeRequest):
    """Request model for the /api/save-cell endpoint.

    Attributes
    ----------
    content : str
        Markdown body produced by the editor.

    """

    content: str = Field(..., min_length=1, description="Markdown content of the cell")


class InsertResponse(BaseModel):
    """Success response of the insert endpoints."""

    success: bool = True
    name: str = Field(..., description="Directory name of the new node")
    path: str = Field(..., description="Site-relative path of the new node")
    position: int
    weight: int
    title: str
    shifted: list[ShiftRecord] = Field(default_factory=list)
    children: list[str] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    """Success response of the delete endpoints."""

    success: bool = True
    removed: str = Field(..., description="Site-relative path of the removed node")
    position: int
    shifted: list[ShiftRecord] = Field(default_factory=list)


class SaveCellResponse(BaseModel):
    """Success response of the /api/save-cell endpoint."""

    success: bool = True
    message: str = "File saved successfully"


class ErrorResponse(BaseModel):
    """Error response model for every endpoint.

    Attributes
    ----------
    error : str
        Error message describing what went wrong.

    """

    error: str = Field(..., description="Error message")


class StatusResponse(BaseModel):
    """Response of the root endpoint."""

    status: str = "running"
    message: str = "Editor API Server"
    endpoints: list[str] = Field(default_factory=list)


# Union type for API responses
OperationResponse = Union[InsertResponse, DeleteResponse, SaveCellResponse, ErrorResponse]
