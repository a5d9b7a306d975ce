"""Shared model configuration"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model stored and sent as camelCase JSON, built from either spelling"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        """Dump to the camelCase JSON shape used on disk and on the wire"""
        return self.model_dump(mode="json", by_alias=True)
