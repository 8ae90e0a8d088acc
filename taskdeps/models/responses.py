from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer


class OperationStatus(BaseModel):
    """Normalized status payload returned by mutation endpoints."""

    status: str = Field(..., description="Short status indicator for the operation outcome.")
    id: Optional[str] = Field(
        None, description="Identifier of the resource affected by the operation, when relevant."
    )
    count: Optional[int] = Field(
        None, description="Number of records affected, for bulk operations."
    )
    model_config = ConfigDict(json_schema_extra={"required": ["status"]})

    @model_serializer(mode="wrap")
    def _serialize(self, handler):  # type: ignore[override]
        payload = handler(self)
        for key in ("id", "count"):
            if payload.get(key) is None:
                payload.pop(key, None)
        return payload
