# skintriage/schemas/geo.py

from pydantic import BaseModel, StrictFloat, StrictInt
from typing import List, Union

from skintriage.models.practitioner import RankedPractitioner

# JSON numbers only; numeric strings and booleans are rejected
Number = Union[StrictInt, StrictFloat]


class NearbyDoctorsRequest(BaseModel):
    latitude: Number
    longitude: Number
    radius: Number = 50


class NearbyDoctorsResponse(BaseModel):
    doctors: List[RankedPractitioner]
