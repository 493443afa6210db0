from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase on the wire"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self, **kwargs) -> dict:
        return self.model_dump(by_alias=True, mode="json", **kwargs)
