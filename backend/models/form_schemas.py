from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DraftResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    user_id: int
    form_number: int | None = None
    form_data: dict[str, Any]
    saved_at: datetime | None = None


class MappedField(BaseModel):
    column: str
    type: str  # "string" | "integer"


class FieldMappingResponse(BaseModel):
    version: int
    fields: dict[str, MappedField]
