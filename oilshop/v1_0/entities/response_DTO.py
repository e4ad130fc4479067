from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")

class CamelOutput(BaseModel):
    """Response payload serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ResponseDTO(BaseModel, Generic[T]):
    """Success envelope: ``{"success": true, "data": ..., "message": ...}``."""
    success: bool = True
    data: T
    message: Optional[str] = None

class ListResponseDTO(BaseModel, Generic[T]):
    success: bool = True
    count: int
    data: List[T]

class MessageDTO(BaseModel):
    success: bool = True
    message: str
