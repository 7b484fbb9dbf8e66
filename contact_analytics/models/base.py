"""Shared configuration for models that mirror Genesys Cloud JSON payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GenesysModel(BaseModel):
    """Accepts the API's camelCase keys and ignores fields we do not use."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
