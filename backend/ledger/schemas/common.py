"""
Shared schema base classes and the response envelope.
"""
from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class CamelModel(BaseModel):
    """Schema exchanged with clients using camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every API response."""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None

    @model_serializer(mode="wrap")
    def omit_empty(self, handler) -> Dict[str, Any]:
        # message and data are left out rather than sent as null
        payload = handler(self)
        for key in ("message", "data"):
            if payload.get(key) is None:
                payload.pop(key, None)
        return payload
