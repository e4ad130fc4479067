from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelInput(BaseModel):
    """Request body accepting the frontend's camelCase keys as well as snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
