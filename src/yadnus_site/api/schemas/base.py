"""Base schema shared by request and response models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose JSON field names are camelCase.

    The admin UI and public forms send camelCase; Python code keeps
    snake_case attribute names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
