"""Shared schema configuration"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema serialised with camelCase keys, accepting either spelling on input"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
