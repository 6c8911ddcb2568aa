"""
Common Schemas - camelCase base model and the response envelope
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class CamelModel(BaseModel):
    """Python attributes in snake_case, JSON fields in camelCase"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """Envelope returned by every endpoint: {success, message, data}"""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class MessageResponse(ApiResponse[None]):
    """Envelope without a payload (e.g. delete)"""
