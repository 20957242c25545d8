from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Request body accepting the UI's camelCase keys (snake_case also accepted)."""

    model_config = {"populate_by_name": True, "alias_generator": to_camel}
