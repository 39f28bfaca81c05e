"""Shared schemas for gridedit."""

from gridedit.schemas.nodes import NodeKind
from gridedit.schemas.results import DeleteResult, InsertResult, SaveResult, ShiftRecord

__all__ = ["DeleteResult", "InsertResult", "NodeKind", "SaveResult", "ShiftRecord"]
