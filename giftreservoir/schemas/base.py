"""Base schema configuration"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class BaseSchema(BaseModel):
    """Base schema: reads ORM objects, speaks camelCase on the wire"""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

class InputSchema(BaseSchema):
    """Request bodies only accept the fields they declare"""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)
