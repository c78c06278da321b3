"""
Data models for the Geocoder Service.
"""

from dataclasses import dataclass, field
from typing import Any, List, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    model_validator,
)


class LocationRecord(BaseModel):
    """One Nominatim search result.

    Coordinates and bounding box stay the strings upstream sent so a record
    round-trips through the cache unchanged. Values of the wrong JSON type
    are rejected rather than coerced. Missing or null fields default to the
    zero value of their type; unknown fields are dropped.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    place_id: StrictInt = 0
    licence: StrictStr = ""
    osm_type: StrictStr = ""
    osm_id: StrictInt = 0
    boundingbox: Tuple[StrictStr, ...] = ()
    lat: StrictStr = ""
    lon: StrictStr = ""
    display_name: StrictStr = ""
    class_: StrictStr = Field(default="", alias="class")
    type: StrictStr = ""
    importance: StrictFloat = 0.0
    icon: StrictStr = ""

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


@dataclass(frozen=True)
class ResolutionResult:
    """Locations for one query and whether they came from the cache."""
    locations: List[LocationRecord] = field(default_factory=list)
    cache_hit: bool = False


class SearchResponse(BaseModel):
    """Response model for a geocoding search."""
    cache: bool = Field(..., description="Whether the result was served from cache")
    data: List[LocationRecord] = Field(default_factory=list, description="Matching locations")


_LOCATION_LIST = TypeAdapter(List[LocationRecord])


def dump_locations(locations: List[LocationRecord]) -> bytes:
    """Serialize locations to the JSON array stored in the cache."""
    return _LOCATION_LIST.dump_json(locations, by_alias=True)


def load_locations(payload: Union[str, bytes]) -> List[LocationRecord]:
    """Parse a JSON array of locations.

    Raises pydantic.ValidationError when the payload is not valid JSON or
    does not have the expected record shape.
    """
    return _LOCATION_LIST.validate_json(payload)
