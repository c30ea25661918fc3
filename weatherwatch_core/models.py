"""
Domain records
"""

from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field

# Values are carried through exactly as the source provides them
SourceValue = Optional[Union[str, int, float]]


class CityRecord(BaseModel):
    """
    One row of the city dataset.

    Numeric columns are not parsed: CSV input yields strings. Serialized with
    the ``lat``/``lng``/``capital`` keys the frontend consumes.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str
    country: SourceValue = None
    iso2: SourceValue = None
    iso3: SourceValue = None
    latitude: SourceValue = Field(default=None, alias="lat")
    longitude: SourceValue = Field(default=None, alias="lng")
    population: SourceValue = None
    is_capital: SourceValue = Field(default=None, alias="capital")
