"""
Base model shared by all entities
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EntityBase(BaseModel):
    """
    Entities use snake_case attributes and camelCase JSON keys
    (project_name <-> projectName), matching the front-end types.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
